"""Resend implementation of the NotificationService interface."""

import logging
from html import escape

import httpx

from transcription_ingestor.exceptions import SideEffectError

from .interfaces import NotificationService

logger = logging.getLogger(__name__)


class ResendNotificationService(NotificationService):
    """Sends transcription-completed e-mails through the Resend REST API."""

    def __init__(self, client: httpx.Client, api_url: str, api_key: str, sender: str):
        self._client = client
        self._url = f"{api_url.rstrip('/')}/emails"
        self._headers = {"Authorization": f"Bearer {api_key}"}
        self._sender = sender

    def notify(
        self,
        recipient_email: str,
        recipient_name: str,
        file_name: str,
        link: str,
    ) -> None:
        payload = {
            "from": self._sender,
            "to": [recipient_email],
            "subject": f"Transcription completed for {file_name}",
            "html": self._render(recipient_name, file_name, link),
        }

        try:
            response = self._client.post(self._url, json=payload, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.exception(
                "Notification e-mail failed", extra={"recipient": recipient_email}
            )
            raise SideEffectError("notification", recipient_email, e) from e

        logger.info("Email sent", extra={"recipient": recipient_email})

    def _render(self, recipient_name: str, file_name: str, link: str) -> str:
        """Builds the e-mail body."""
        return (
            f"<p>Hi {escape(recipient_name)},</p>"
            f"<p>The transcription for <strong>{escape(file_name)}</strong> "
            f"is ready.</p>"
            f'<p><a href="{escape(link, quote=True)}">Open the transcript</a></p>'
        )
