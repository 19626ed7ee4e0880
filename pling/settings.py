# pling/settings.py
"""Environment-driven configuration, loaded once from `.env` if present."""
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

ADMIN_TOKEN = os.getenv("ADMIN_TOKEN")
SITE_URL = os.getenv("SITE_URL", "http://localhost:8000").rstrip("/")

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
FROM_EMAIL = os.getenv("FROM_EMAIL", "noreply@pling.co.in")
INQUIRY_TEMPLATE_ID = os.getenv("SENDGRID_INQUIRY_TEMPLATE_ID")
