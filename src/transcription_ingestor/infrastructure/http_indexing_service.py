"""HTTP implementation of the IndexingService interface."""

import logging

import httpx

from transcription_ingestor.exceptions import SideEffectError

from .interfaces import IndexingService

logger = logging.getLogger(__name__)


class HttpIndexingService(IndexingService):
    """Hands transcripts to the embeddings service over HTTP."""

    def __init__(self, client: httpx.Client, base_url: str):
        self._client = client
        self._url = f"{base_url.rstrip('/')}/api/embeddings"

    def index(self, transcript_id: str, content: str) -> None:
        try:
            response = self._client.post(
                self._url,
                json={"transcriptId": transcript_id, "content": content},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.exception(
                "Embeddings request failed",
                extra={"transcript_id": transcript_id, "url": self._url},
            )
            raise SideEffectError("indexing", transcript_id, e) from e

        logger.info("Transcript indexed", extra={"transcript_id": transcript_id})
