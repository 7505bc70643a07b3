import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage

from medichat.core import config

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """A notification could not be handed to the SMTP server."""


def _clean_header_value(value: str) -> str:
    """Remove CR/LF from strings used as email headers and trim whitespace."""
    return str(value or "").replace("\r", " ").replace("\n", " ").strip()


def build_message(to_email: str, subject: str, body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = _clean_header_value(config.EMAIL_USER)
    msg["To"] = _clean_header_value(to_email)
    msg["Subject"] = _clean_header_value(subject)
    msg.set_content(body)
    return msg


def _send_sync(msg: EmailMessage) -> None:
    with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=30) as server:
        if config.SMTP_USE_TLS:
            server.starttls(context=ssl.create_default_context())
        server.login(config.EMAIL_USER, config.EMAIL_PASS)
        server.send_message(msg)


async def send_email(to_email: str, subject: str, body: str) -> None:
    """
    Send a plain-text email over SMTP.

    The blocking smtplib session runs in the default thread pool.

    Raises:
        EmailDeliveryError: SMTP is not configured or the send failed.
    """
    if not config.EMAIL_USER or not config.EMAIL_PASS:
        logger.error(f"SMTP is not configured; cannot email {to_email}")
        raise EmailDeliveryError("SMTP is not configured")

    msg = build_message(to_email, subject, body)
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, _send_sync, msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Error sending email to {to_email}: {e}")
        raise EmailDeliveryError(str(e)) from e
    logger.info(f"Email sent to {to_email}: {msg['Subject']}")
