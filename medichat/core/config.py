import os
from dotenv import load_dotenv

load_dotenv()

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000")
LOG_FILE = os.getenv("LOG_FILE", "medichat.log")

# Language model for free-text medical questions (any OpenAI-compatible endpoint)
LLM_API_KEY = os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY")
LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "llama3-70b-8192")
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "150"))

# Outbound appointment notifications
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() in ("1", "true", "yes")
EMAIL_USER = os.getenv("EMAIL_USER")
EMAIL_PASS = os.getenv("EMAIL_PASS")

# Optional endpoint that receives every confirmed booking
BOOKING_WEBHOOK_URL = os.getenv("BOOKING_WEBHOOK_URL")

# Upper bound on in-memory conversations; idle ones beyond it are evicted
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "10000"))
