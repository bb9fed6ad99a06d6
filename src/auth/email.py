"""
Verification code delivery.

Codes are sent through the SendGrid v3 mail API. Without an API key the
sender runs in development mode and only logs the code, so a local server
can be used without an email account.
"""
import os
import re
import asyncio
import logging
from html import unescape
from typing import Optional, Protocol

import aiohttp

logger = logging.getLogger('menu.auth.email')

SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class EmailDeliveryError(Exception):
    """Raised when the mail provider refuses or cannot be reached."""


class VerificationSender(Protocol):
    async def send_verification_code(self, recipient: str, code: str) -> None: ...


def _html_to_text(html: str) -> str:
    """Plain-text part for mail clients that do not render HTML"""
    text = re.sub(r"(?i)<br\s*/?>", "\n", html)
    text = re.sub(r"(?i)</(p|h2|div)\s*>", "\n\n", text)
    text = re.sub(r"<[^>]+>", "", text)
    text = re.sub(r"\n\s*\n+", "\n\n", text)
    return unescape(text).strip()


def compose_verification_email(code: str, ttl_minutes: int) -> tuple[str, str]:
    subject = "Your Verification Code"
    html = f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2>Email Verification</h2>
  <p>Your verification code is:</p>
  <div style="background-color: #f4f4f4; padding: 20px; text-align: center; font-size: 32px; font-weight: bold; letter-spacing: 5px; margin: 20px 0;">
    {code}
  </div>
  <p>This code will expire in {ttl_minutes} minutes.</p>
  <p>If you didn't request this code, please ignore this email.</p>
</div>"""
    return subject, html


class VerificationEmailSender:
    """Sends verification codes by email."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
        ttl_minutes: int = 10,
        timeout_sec: float = 20,
        client: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key if api_key is not None else os.getenv("SENDGRID_API_KEY")
        self.from_email = from_email or os.getenv("EMAIL_FROM", "onboarding@example.com")
        self.from_name = from_name or os.getenv("EMAIL_FROM_NAME", "Digital Menu")
        self.ttl_minutes = ttl_minutes
        self.timeout = aiohttp.ClientTimeout(total=timeout_sec)
        self._client = client

        if not self.api_key:
            logger.warning("SENDGRID_API_KEY not set - verification codes will only be logged")

    async def get_client(self) -> aiohttp.ClientSession:
        if self._client is None or self._client.closed:
            self._client = aiohttp.ClientSession(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.closed:
            await self._client.close()

    def build_payload(self, recipient: str, code: str) -> dict:
        subject, html = compose_verification_email(code, self.ttl_minutes)
        return {
            "personalizations": [{"to": [{"email": recipient}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": _html_to_text(html)},
                {"type": "text/html", "value": html},
            ],
            "tracking_settings": {
                "click_tracking": {"enable": False},
                "open_tracking": {"enable": False},
            },
        }

    async def send_verification_code(self, recipient: str, code: str) -> None:
        """
        Deliver a verification code to recipient.

        Raises:
            EmailDeliveryError: if the provider cannot be reached or rejects the message
        """
        if not self.api_key:
            logger.info(f"DEV MODE: verification code for {recipient} is {code}")
            return

        client = await self.get_client()
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with client.post(SEND_URL, json=self.build_payload(recipient, code), headers=headers) as response:
                if response.status == 202:
                    msg_id = response.headers.get("X-Message-Id", "")
                    logger.info(f"Verification email accepted for {recipient} {('id=' + msg_id) if msg_id else ''}")
                    return
                body = await response.text()
        except aiohttp.ClientError as e:
            logger.error(f"Network error sending verification email to {recipient}: {e}")
            raise EmailDeliveryError(f"network error: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out sending verification email to {recipient}")
            raise EmailDeliveryError("timed out") from e

        logger.error(f"SendGrid rejected verification email to {recipient}: {response.status} {body}")
        raise EmailDeliveryError(f"{response.status}: {body}")
