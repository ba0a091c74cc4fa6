"""
multipart/form-data 请求体编码

The body is assembled by hand so that field order, headers and the closing
delimiter are exactly what the transcription endpoint receives.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

CRLF = b"\r\n"


@dataclass(frozen=True)
class StringField:
    name: str
    value: str


@dataclass(frozen=True)
class FileField:
    name: str
    file_name: str
    content_type: str
    data: bytes


FormField = Union[StringField, FileField]


def new_boundary() -> str:
    return uuid.uuid4().hex


def _encode_part(boundary: bytes, form_field: FormField) -> bytes:
    disposition = f'Content-Disposition: form-data; name="{form_field.name}"'
    if isinstance(form_field, FileField):
        disposition += f'; filename="{form_field.file_name}"'
        headers = [disposition, f"Content-Type: {form_field.content_type}"]
        payload = form_field.data
    else:
        headers = [disposition]
        payload = form_field.value.encode("utf-8")

    part = bytearray(b"--" + boundary + CRLF)
    for header in headers:
        part += header.encode("utf-8") + CRLF
    part += CRLF
    part += payload + CRLF
    return bytes(part)


def encode_multipart(boundary: str, fields: Sequence[FormField]) -> bytes:
    """
    Encode ``fields`` in order as a multipart/form-data body.

    File fields carry ``filename`` and ``Content-Type``; string fields carry
    neither. Names are written as given, without escaping. An empty field
    list produces only the closing delimiter.
    """
    boundary_bytes = boundary.encode("utf-8")
    body = bytearray()
    for form_field in fields:
        body += _encode_part(boundary_bytes, form_field)
    body += b"--" + boundary_bytes + b"--" + CRLF
    return bytes(body)


@dataclass(frozen=True)
class MultipartBody:
    fields: List[FormField]
    boundary: str
    body: bytes = field(repr=False)

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"


def build_multipart_body(fields: Sequence[FormField], boundary: Optional[str] = None) -> MultipartBody:
    final_boundary = boundary or new_boundary()
    return MultipartBody(
        fields=list(fields),
        boundary=final_boundary,
        body=encode_multipart(final_boundary, fields),
    )
