"""Send a rendered report by mail.

Images are attached inline and addressed from the body by ``Content-ID``.
SMTP runs on a worker thread so the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate, make_msgid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common.config.env import get_env_str
from common.errors import DeliveryError
from presentation.models import DataPresented

logger = logging.getLogger(__name__)

MAIL_PASSWORD_ENV = "LMR_MAIL_PASSWORD"
SENDER_NAME = "lmr"


class MailSettings(BaseModel):
    """SMTP delivery settings."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    sender: str = Field(alias="from")
    to: List[str]
    host: str
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = Field(default=None, alias="pass")
    subject: Optional[str] = None
    starttls: bool = True

    @field_validator("to", mode="before")
    @classmethod
    def split_recipients(cls, v):
        """Accept a single address or a comma separated list."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("to")
    @classmethod
    def require_recipients(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one recipient is required")
        return v

    def resolve_password(self) -> Optional[str]:
        """Return the configured password, falling back to the environment."""
        if self.password:
            return self.password
        return get_env_str(MAIL_PASSWORD_ENV)


def build_message(settings: MailSettings, title: str, data: DataPresented) -> MIMEMultipart:
    """Compose the mail for ``data``; the body is HTML or plain text per ``is_html``."""
    message = MIMEMultipart("related")
    message["Subject"] = settings.subject or title
    message["From"] = formataddr((SENDER_NAME, settings.sender))
    message["To"] = ", ".join(settings.to)
    message["Date"] = formatdate(localtime=True)
    message["Message-ID"] = make_msgid()

    subtype = "html" if data.is_html else "plain"
    message.attach(MIMEText(data.content, subtype, "utf-8"))

    for image in data.images:
        _, _, image_subtype = image.mime.partition("/")
        part = MIMEImage(image.data, _subtype=image_subtype or "png")
        part.add_header("Content-ID", f"<{image.cid}>")
        part.add_header("Content-Disposition", "inline", filename=f"{image.cid}.{image_subtype or 'png'}")
        message.attach(part)

    return message


def _send(settings: MailSettings, message: MIMEMultipart) -> None:
    password = settings.resolve_password()
    try:
        smtp = smtplib.SMTP(settings.host, settings.port)
    except (smtplib.SMTPException, OSError) as exc:
        raise DeliveryError(f"SMTP connect failed: {exc}") from exc

    with smtp:
        try:
            if settings.starttls:
                smtp.starttls(context=ssl.create_default_context())
            if settings.user and password:
                smtp.login(settings.user, password)
            smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"SMTP send failed: {exc}") from exc


async def to_mail(settings: MailSettings, title: str, data: DataPresented) -> None:
    """Send the report to every configured recipient.

    Raises:
        DeliveryError: If the SMTP exchange fails.
    """
    message = build_message(settings, title, data)
    logger.info(f"Sending report to {len(settings.to)} recipients via {settings.host}:{settings.port}")
    await asyncio.to_thread(_send, settings, message)
    logger.info("Mail sent")
