import logging
import smtplib
from email.message import EmailMessage

from app.core.config import Settings

logger = logging.getLogger(__name__)


def build_verification_url(settings: Settings, token: str) -> str:
    return f"{settings.APP_BASE_URL.rstrip('/')}/api/v1/auth/verify?token={token}"


def send_verification_email(settings: Settings, email: str, verification_url: str) -> None:
    """Send the verification link. Raises on SMTP failure; callers decide what that means."""
    msg = EmailMessage()
    msg["Subject"] = "Verify your hostel account"
    msg["From"] = settings.SMTP_FROM
    msg["To"] = email
    msg.set_content(
        "Welcome to the hostel portal.\n\n"
        f"Confirm your email address by opening this link:\n{verification_url}\n\n"
        f"The link expires in {settings.VERIFICATION_TOKEN_EXPIRE_HOURS} hours."
    )

    if not settings.SMTP_HOST:
        # local dev: make the link visible in the logs
        logger.info("SMTP not configured; verification link for %s: %s", email, verification_url)
        return

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        server.starttls()
        if settings.SMTP_USER and settings.SMTP_PASS:
            server.login(settings.SMTP_USER, settings.SMTP_PASS)
        server.send_message(msg)
    logger.info("Sent verification email to %s", email)
