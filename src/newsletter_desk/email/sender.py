# ABOUTME: Email delivery clients: SMTP (STARTTLS) and an HTTP email API.
# ABOUTME: Both expose one async send() that raises EmailError on any delivery fault.

from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage
from typing import Protocol

import httpx
import structlog

from newsletter_desk.config import Settings, get_settings
from newsletter_desk.exceptions import EmailError

log = structlog.get_logger()


class EmailClient(Protocol):
    """Capability to deliver one message with HTML and plain-text bodies."""

    async def send(self, to_email: str, subject: str, html_body: str, text_body: str) -> None: ...


class SmtpEmailClient:
    """Sends email via SMTP with STARTTLS.

    smtplib is blocking, so each send runs in the default executor.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def sender(self) -> str:
        return f"{self.settings.sender_name} <{self.settings.sender_email}>"

    def build_message(
        self, to_email: str, subject: str, html_body: str, text_body: str
    ) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to_email

        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    async def send(self, to_email: str, subject: str, html_body: str, text_body: str) -> None:
        message = self.build_message(to_email, subject, html_body, text_body)
        await asyncio.get_event_loop().run_in_executor(None, self._send_smtp, message, to_email)

    def _send_smtp(self, message: EmailMessage, recipient: str) -> None:
        """Send email via SMTP."""
        if not self.settings.smtp_user or not self.settings.smtp_password:
            raise EmailError(
                "SMTP credentials not configured. Set smtp_user and smtp_password in .env file."
            )

        log.debug(
            "connecting_smtp",
            host=self.settings.smtp_host,
            port=self.settings.smtp_port,
        )

        try:
            server = smtplib.SMTP(
                self.settings.smtp_host,
                self.settings.smtp_port,
                timeout=self.settings.email_timeout,
            )
            try:
                server.ehlo()
                server.starttls()
                server.ehlo()
                server.login(
                    self.settings.smtp_user.get_secret_value(),
                    self.settings.smtp_password.get_secret_value(),
                )
                server.sendmail(self.settings.sender_email, recipient, message.as_string())
            finally:
                server.quit()
        except (smtplib.SMTPException, OSError) as e:
            raise EmailError(f"Failed to send email to {recipient}") from e

        log.info("email_sent", backend="smtp", to=recipient)


class HttpEmailClient:
    """Sends email through a Postmark-compatible HTTP API (POST {base_url}/email)."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.transport = transport

    async def send(self, to_email: str, subject: str, html_body: str, text_body: str) -> None:
        if not self.settings.email_api_token:
            raise EmailError("Email API token not configured. Set email_api_token in .env file.")

        payload = {
            "From": self.settings.sender_email,
            "To": to_email,
            "Subject": subject,
            "HtmlBody": html_body,
            "TextBody": text_body,
        }
        headers = {"X-Postmark-Server-Token": self.settings.email_api_token.get_secret_value()}

        try:
            async with httpx.AsyncClient(
                base_url=self.settings.email_api_base_url,
                timeout=self.settings.email_timeout,
                transport=self.transport,
            ) as client:
                response = await client.post("/email", json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise EmailError(f"Failed to send email to {to_email}") from e

        log.info("email_sent", backend="http", to=to_email, status=response.status_code)


def build_email_client(settings: Settings | None = None) -> EmailClient:
    """Create the email client selected by settings.email_backend."""
    settings = settings or get_settings()
    if settings.email_backend == "http":
        return HttpEmailClient(settings)
    return SmtpEmailClient(settings)
