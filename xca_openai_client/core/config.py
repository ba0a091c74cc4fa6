import os
from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL_FROM_ENV = os.getenv("LOG_LEVEL", "INFO").upper()

# API Endpoints and Keys
OPENAI_API_KEY_ENV = os.getenv("OPENAI_API_KEY")
DEFAULT_OPENAI_API_BASE_URL = os.getenv("OPENAI_API_BASE_URL", "https://api.openai.com")

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"
AUDIO_SPEECH_PATH = "/v1/audio/speech"
AUDIO_TRANSCRIPTIONS_PATH = "/v1/audio/transcriptions"
IMAGE_GENERATIONS_PATH = "/v1/images/generations"

# Timeouts and Limits
API_TIMEOUT = int(os.getenv("API_TIMEOUT", "600"))
READ_TIMEOUT = float(os.getenv("READ_TIMEOUT", "60.0"))
MAX_CONNECTIONS = int(os.getenv("MAX_CONNECTIONS", "200"))
HTTP2_ENABLED = os.getenv("HTTP2_ENABLED", "False").lower() == "true"

# 语音转写整体请求超时（秒）
TRANSCRIPTION_TIMEOUT = float(os.getenv("TRANSCRIPTION_TIMEOUT", "30.0"))

# Streaming
STREAM_CHUNK_SIZE = int(os.getenv("STREAM_CHUNK_SIZE", "1024"))
STREAM_QUEUE_SIZE = int(os.getenv("STREAM_QUEUE_SIZE", "8"))

# Model defaults
DEFAULT_ASSISTANT_PROMPT = "You are a helpful assistant"
DEFAULT_CHAT_MODEL = "gpt-4o"
MINI_CHAT_MODEL = "gpt-4o-mini"
VISION_MODEL = "gpt-4-vision-preview"
DEFAULT_SPEECH_MODEL = "tts-1"
TRANSCRIPTION_MODEL = "gpt-4o-transcribe"
IMAGE_MODEL = "dall-e-3"
IMAGE_SIZE = "1024x1024"

VISION_INSTRUCTION = (
    "Describe this image in details, provide all visual representations, "
    "you can ignore text within the image"
)
