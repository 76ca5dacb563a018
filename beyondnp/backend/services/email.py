"""
Email Service.

Delivers verification and welcome emails over SMTP.

Delivery runs after the response, as a FastAPI background task, and
never raises: a failed send is logged and reported as False so the
account change that triggered it stands. The user can always ask for
a new verification code.

When `enabled` is false in email.yaml, messages are written to the log
instead of sent.
"""

import asyncio
import smtplib
from email.message import EmailMessage

from beyondnp.backend.core.config import get_app_config, get_settings
from beyondnp.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


def build_verification_message(to: str, name: str, code: str, expire_minutes: int) -> EmailMessage:
    """Plain-text verification email carrying the code."""
    msg = EmailMessage()
    msg["Subject"] = "Email Verification - Beyond NP"
    msg["To"] = to
    msg.set_content(
        f"Welcome {name}!\n\n"
        "Thank you for joining Beyond NP. To complete your registration, "
        "verify your email address with this code:\n\n"
        f"    {code}\n\n"
        f"The code expires in {expire_minutes} minutes.\n\n"
        "If you did not create an account, you can ignore this email.\n"
    )
    return msg


def build_welcome_message(to: str, name: str, client_url: str) -> EmailMessage:
    """Plain-text welcome email sent once the address is verified."""
    msg = EmailMessage()
    msg["Subject"] = "Welcome to Beyond NP!"
    msg["To"] = to
    msg.set_content(
        f"Hi {name},\n\n"
        "Your email is verified and your account is ready. Shortlist "
        "universities, keep notes, and track your application documents "
        "from your dashboard:\n\n"
        f"    {client_url.rstrip('/')}/dashboard\n\n"
        "Thank you for choosing Beyond NP.\n"
    )
    return msg


class EmailService:
    """SMTP sender configured from email.yaml and the SMTP_PASSWORD secret."""

    def __init__(self) -> None:
        self._config = get_app_config().email

    def _deliver(self, msg: EmailMessage) -> None:
        smtp = self._config.smtp
        with smtplib.SMTP(smtp.host, smtp.port, timeout=smtp.timeout_seconds) as server:
            if smtp.use_tls:
                server.starttls()
            if smtp.username:
                server.login(smtp.username, get_settings().smtp_password)
            server.send_message(msg)

    async def send(self, msg: EmailMessage) -> bool:
        """
        Send a message, returning whether it was delivered.

        SMTP is blocking, so delivery runs in a worker thread.
        """
        msg["From"] = self._config.sender

        if not self._config.enabled:
            log_with_source(
                logger,
                "email",
                "info",
                "Email delivery disabled, message logged",
                to=msg["To"],
                subject=msg["Subject"],
                body=msg.get_content(),
            )
            return False

        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            log_with_source(
                logger,
                "email",
                "error",
                "Email delivery failed",
                to=msg["To"],
                subject=msg["Subject"],
                error=str(e),
            )
            return False

        log_with_source(
            logger,
            "email",
            "info",
            "Email sent",
            to=msg["To"],
            subject=msg["Subject"],
        )
        return True

    async def send_verification(self, to: str, name: str, code: str) -> bool:
        expire_minutes = get_app_config().security.verification.code_expire_minutes
        return await self.send(build_verification_message(to, name, code, expire_minutes))

    async def send_welcome(self, to: str, name: str) -> bool:
        client_url = get_app_config().application.client_url
        return await self.send(build_welcome_message(to, name, client_url))
