"""Environment-driven settings for Orfo."""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# LLM provider used by the spell-check service ("gemini" or "chatgpt")
LLM_PROVIDER = os.getenv("ORFO_LLM_PROVIDER", "gemini")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ORFO_CORS_ORIGINS",
        "http://localhost:5173,http://localhost:5174,http://localhost:3000",
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("ORFO_LOG_LEVEL", "INFO").upper()

# How much of an unparseable model reply is echoed back to the caller
RAW_RESPONSE_LIMIT = 500
