from pydantic import BaseModel, Field, TypeAdapter
from typing import List, Literal, Optional, Union, Annotated

# --- Chat completion request ---

class ResponseFormat(BaseModel):
    type: Literal["text", "json_object"]
    model_config = {"populate_by_name": True}

class ImageURL(BaseModel):
    url: str
    detail: Literal["auto", "low", "high"] = "auto"

class ChatCompletionRequestMessageContentPartText(BaseModel):
    type: Literal["text"] = "text"
    text: str

class ChatCompletionRequestMessageContentPartImage(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageURL

ChatCompletionRequestMessageContentPart = Annotated[
    Union[
        ChatCompletionRequestMessageContentPartText,
        ChatCompletionRequestMessageContentPartImage,
    ],
    Field(discriminator="type")
]

class ChatCompletionRequestSystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: str
    name: Optional[str] = None

class ChatCompletionRequestAssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    name: Optional[str] = None

class ChatCompletionRequestUserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: Union[str, List[ChatCompletionRequestMessageContentPart]]
    name: Optional[str] = None

ChatCompletionRequestMessage = Annotated[
    Union[
        ChatCompletionRequestSystemMessage,
        ChatCompletionRequestAssistantMessage,
        ChatCompletionRequestUserMessage,
    ],
    Field(discriminator="role")
]

chat_message_adapter = TypeAdapter(ChatCompletionRequestMessage)

class CreateChatCompletionRequest(BaseModel):
    messages: List[ChatCompletionRequestMessage]
    model: str
    response_format: Optional[ResponseFormat] = None
    max_tokens: Optional[int] = Field(None, gt=0)

# --- Chat completion response ---

class ChatCompletionResponseMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None

class ChatCompletionChoice(BaseModel):
    index: Optional[int] = None
    message: Optional[ChatCompletionResponseMessage] = None
    finish_reason: Optional[str] = None

class CreateChatCompletionResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[ChatCompletionChoice] = Field(default_factory=list)

# --- Speech ---

SpeechVoice = Literal["alloy", "ash", "ballad", "coral", "echo", "fable", "onyx", "nova", "sage", "shimmer", "verse"]
SpeechResponseFormat = Literal["mp3", "opus", "aac", "flac", "wav", "pcm"]

class CreateSpeechRequest(BaseModel):
    model: str
    input: str = Field(max_length=4096)
    voice: SpeechVoice
    response_format: SpeechResponseFormat = "mp3"
    instructions: Optional[str] = None

# --- Images ---

ImageQuality = Literal["standard", "hd"]
ImageResponseFormat = Literal["url", "b64_json"]
ImageStyle = Literal["vivid", "natural"]
ImageSize = Literal["256x256", "512x512", "1024x1024", "1792x1024", "1024x1792"]

class CreateImageRequest(BaseModel):
    prompt: str
    model: str
    n: int = Field(1, ge=1, le=10)
    quality: ImageQuality = "standard"
    response_format: ImageResponseFormat = "url"
    size: ImageSize = "1024x1024"
    style: ImageStyle = "vivid"

class Image(BaseModel):
    b64_json: Optional[str] = None
    url: Optional[str] = None
    revised_prompt: Optional[str] = None

class ImagesResponse(BaseModel):
    created: Optional[int] = None
    data: List[Image] = Field(default_factory=list)
