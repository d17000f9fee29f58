"""Provider webhook endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from transcription_ingestor.dependencies import get_ingestor
from transcription_ingestor.handlers import WebhookIngestor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

IngestorDep = Annotated[WebhookIngestor, Depends(get_ingestor)]

STATUS_CODES = {
    "accepted": 200,
    "already_processed": 200,
    "not_found": 404,
    "validation_error": 400,
    "server_error": 500,
}


@router.post("/deepgram")
def deepgram_webhook(
    payload: Annotated[dict[str, Any], Body()], ingestor: IngestorDep
) -> JSONResponse:
    """
    Receives a transcription-completed callback.

    The status code tells the provider whether to redeliver: 2xx for accepted
    or duplicate deliveries, 4xx for callbacks that will never succeed, 5xx
    when a retry may help.
    """
    outcome = ingestor.handle(payload)
    status_code = STATUS_CODES[outcome.kind]

    if status_code >= 500:
        logger.error(
            "Webhook failed", extra={"kind": outcome.kind, "status_code": status_code}
        )

    return JSONResponse(
        status_code=status_code, content=outcome.model_dump(mode="json")
    )
