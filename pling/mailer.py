# pling/mailer.py
"""Outbound email through SendGrid.

The SendGrid client is imported lazily so the dependency only matters once
SENDGRID_API_KEY is configured.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from . import settings
from .utils import logger, retry


@dataclass
class EmailParams:
    to: str
    subject: str
    text: str
    html: Optional[str] = None
    template_id: Optional[str] = None
    dynamic_template_data: Dict[str, Any] = field(default_factory=dict)


def email_enabled() -> bool:
    return bool(settings.SENDGRID_API_KEY)


def build_message(params: EmailParams):
    from sendgrid.helpers.mail import Mail  # type: ignore

    message = Mail(
        from_email=settings.FROM_EMAIL,
        to_emails=params.to,
        subject=params.subject,
        plain_text_content=params.text,
        html_content=params.html,
    )
    if params.template_id:
        message.template_id = params.template_id
        message.dynamic_template_data = params.dynamic_template_data
    return message


@retry(Exception, tries=3, delay=1, backoff=2)
def _deliver(params: EmailParams) -> None:
    from sendgrid import SendGridAPIClient  # type: ignore

    SendGridAPIClient(settings.SENDGRID_API_KEY).send(build_message(params))


def send_email(params: EmailParams) -> bool:
    if not email_enabled():
        logger.warning("Email not sent to %s: SENDGRID_API_KEY not set", params.to)
        return False
    try:
        _deliver(params)
    except Exception as e:
        logger.error("SendGrid email error: %s", e)
        return False
    return True
