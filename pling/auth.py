# pling/auth.py
import secrets
from typing import Optional

from fastapi import Header, HTTPException

from . import settings


def require_admin(x_admin_token: Optional[str] = Header(None)):
    expected = settings.ADMIN_TOKEN
    if not expected or not x_admin_token or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=403, detail="Admin access required")
