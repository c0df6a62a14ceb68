import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

LLM_PROVIDER = os.getenv("LLM_PROVIDER", "custom")  # anthropic | openai | custom
LLM_API_KEY = os.getenv("LLM_API_KEY")
LLM_MODEL = os.getenv("LLM_MODEL")
LLM_BASE_URL = os.getenv("LLM_BASE_URL")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "10"))
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "100"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
