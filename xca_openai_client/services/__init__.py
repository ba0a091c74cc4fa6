"""
Transport core: multipart encoding, request composition, dispatch,
response resolution and byte streaming.
"""
