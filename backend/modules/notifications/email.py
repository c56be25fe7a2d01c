"""
Email notification dispatchers.

SmtpNotificationDispatcher sends through any SMTP relay with aiosmtplib.
LoggingNotificationDispatcher is used when SMTP is not configured: it
logs the verification link so local development still works.
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Optional

import aiosmtplib

from modules.accounts.models import EnrichmentData
from .exceptions import NotificationDispatchError
from .interfaces import INotificationDispatcher

logger = logging.getLogger(__name__)


def build_verification_url(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/verify-email?token={token}"


def render_verification_email(verification_url: str, ttl_hours: int) -> tuple[str, str]:
    """Return (html, text) bodies for the verification email."""
    html = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <style>
            body {{ font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
            .button {{ display: inline-block; background-color: #4f46e5; color: white; padding: 12px 28px; text-decoration: none; border-radius: 6px; margin: 24px 0; }}
            .footer {{ margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1>Verify your university email</h1>
            <p>Thanks for joining Quad. Please confirm this is your university email address:</p>
            <a href="{verification_url}" class="button">Verify Email Address</a>
            <p>Or copy and paste this link into your browser:</p>
            <p style="word-break: break-all; color: #4f46e5;">{verification_url}</p>
            <p><strong>This link expires in {ttl_hours} hours.</strong></p>
            <div class="footer">
                <p>If you didn't create an account, you can safely ignore this email.</p>
            </div>
        </div>
    </body>
    </html>
    """
    text = (
        "Verify your university email\n\n"
        f"Open this link to confirm your address: {verification_url}\n\n"
        f"This link expires in {ttl_hours} hours."
    )
    return html, text


def render_enrichment_email(full_name: str, data: EnrichmentData) -> tuple[str, str]:
    """Return (html, text) bodies summarising attached academic data."""
    safe_name = escape(full_name)
    courses = escape(", ".join(data.courses)) if data.courses else "N/A"
    extra = ""
    if data.advisor:
        extra += f"<p><strong>Advisor:</strong> {escape(data.advisor)}</p>"
    if data.gpa is not None:
        extra += f"<p><strong>GPA:</strong> {data.gpa}</p>"
    html = f"""
    <!DOCTYPE html>
    <html>
    <body style="font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937;">
        <div style="max-width: 600px; margin: 0 auto; padding: 40px 20px;">
            <h1>College data retrieved</h1>
            <p>Hello {safe_name},</p>
            <p>We've retrieved your college information and updated your profile.</p>
            <div style="background: #f9fafb; border-left: 4px solid #4f46e5; padding: 16px;">
                <p><strong>Department:</strong> {escape(data.department)}</p>
                <p><strong>Academic Year:</strong> {escape(data.academic_year)}</p>
                <p><strong>Semester:</strong> {escape(data.semester)}</p>
                <p><strong>Courses:</strong> {courses}</p>
                {extra}
            </div>
        </div>
    </body>
    </html>
    """
    text = (
        f"Hello {full_name},\n\n"
        f"Department: {data.department}\n"
        f"Academic Year: {data.academic_year}\n"
        f"Semester: {data.semester}\n"
        f"Courses: {', '.join(data.courses) or 'N/A'}\n"
    )
    return html, text


class SmtpNotificationDispatcher(INotificationDispatcher):
    """
    Async SMTP dispatcher.

    Delivery failures raise NotificationDispatchError carrying the
    SMTP error.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_email: str,
        from_name: str,
        frontend_url: str,
        use_tls: bool = True,
        token_ttl_hours: int = 24,
        timeout: Optional[float] = 10.0,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_email = from_email
        self._from_name = from_name
        self._frontend_url = frontend_url
        self._use_tls = use_tls
        self._token_ttl_hours = token_ttl_hours
        self._timeout = timeout

    async def send(self, address: str, token: str) -> bool:
        url = build_verification_url(self._frontend_url, token)
        html, text = render_verification_email(url, self._token_ttl_hours)
        return await self._send_email(address, "Verify Your University Email", html, text)

    async def send_enrichment_summary(
        self,
        address: str,
        full_name: str,
        data: EnrichmentData,
    ) -> bool:
        html, text = render_enrichment_email(full_name, data)
        return await self._send_email(address, "College Data Successfully Retrieved", html, text)

    async def _send_email(self, to_email: str, subject: str, html: str, text: str) -> bool:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = f"{self._from_name} <{self._from_email}>"
        message["To"] = to_email
        message.attach(MIMEText(text, "plain"))
        message.attach(MIMEText(html, "html"))

        try:
            await aiosmtplib.send(
                message,
                hostname=self._host,
                port=self._port,
                username=self._username or None,
                password=self._password or None,
                start_tls=self._use_tls,
                timeout=self._timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Email/SMTP] Failed to send '{subject}' to {to_email}: {e}")
            raise NotificationDispatchError(to_email, str(e)) from e

        logger.info(f"[Email/SMTP] Sent '{subject}' to {to_email}")
        return True


class LoggingNotificationDispatcher(INotificationDispatcher):
    """Dispatcher for local development. Logs instead of sending."""

    def __init__(self, frontend_url: str):
        self._frontend_url = frontend_url

    async def send(self, address: str, token: str) -> bool:
        url = build_verification_url(self._frontend_url, token)
        logger.warning("SMTP not configured - logging verification link instead of sending")
        logger.info(f"[Email] Verification link for {address}: {url}")
        return True

    async def send_enrichment_summary(
        self,
        address: str,
        full_name: str,
        data: EnrichmentData,
    ) -> bool:
        logger.info(f"[Email] College data summary for {address}: department={data.department}")
        return True
