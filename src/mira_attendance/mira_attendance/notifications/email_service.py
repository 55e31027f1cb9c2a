from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from ..core.exceptions import EmailDeliveryError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailConfig:
    username: Optional[str]
    password: Optional[str]
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    use_tls: bool = True
    sender_name: str = "Mira Attendance"

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password and self.smtp_server)


class EmailService:
    """Plain-text email over SMTP."""

    def __init__(self, config: EmailConfig, *, smtp_factory=smtplib.SMTP):
        self._config = config
        self._smtp_factory = smtp_factory

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    def send(self, to: str, subject: str, body: str) -> None:
        if not to or not str(to).strip():
            raise ValidationError("Recipient is required")
        if not self._config.is_configured:
            raise EmailDeliveryError("Email configuration missing on server.")

        msg = MIMEText(body or "", "plain", "utf-8")
        msg["From"] = formataddr((self._config.sender_name, self._config.username))
        msg["To"] = to
        msg["Subject"] = subject or ""

        try:
            with self._smtp_factory(self._config.smtp_server, self._config.smtp_port) as server:
                if self._config.use_tls:
                    server.starttls(context=ssl.create_default_context())
                server.login(self._config.username, self._config.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to, e)
            raise EmailDeliveryError(str(e)) from e

        logger.info("Email sent to %s", to)
