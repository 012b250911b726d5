import json
from fastapi import APIRouter, Depends, Request, status, HTTPException
from fastapi.concurrency import run_in_threadpool
from adapters.registry import get_adapter
from api.dependencies import get_notifier, get_settings
from core.config import Settings
from core.errors import DecodeError
from core.logger import logger
from pipeline.runner import Notifier, StatusPipeline


router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post(
    "/{provider_name}",
    status_code=status.HTTP_200_OK,
    summary="Relay a status-page webhook payload to Discord",
    response_description="Payload processed; 'status' says whether a message went out.",
)
async def receive_webhook(
    provider_name: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    notifier: Notifier = Depends(get_notifier),
) -> dict:

    if get_adapter(provider_name) is None:
        logger.warning(f"[{provider_name}] No adapter registered - rejecting payload.")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown provider '{provider_name}'.",
        )

    raw_bytes: bytes = await request.body()

    # Decode JSON
    try:
        payload = json.loads(raw_bytes)
    except json.JSONDecodeError as exc:
        logger.warning(f"[{provider_name}] Received non-JSON body: {exc}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Request body must be valid JSON. Parse error: {exc}",
        )

    # The outbound call blocks, so keep it off the event loop.
    pipeline = StatusPipeline(settings, notifier)
    try:
        result = await run_in_threadpool(pipeline.run, payload, provider_name)
    except DecodeError as exc:
        logger.warning(f"[{provider_name}] Payload rejected: {exc}")
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        )

    return {
        "provider":  provider_name.lower(),
        "status":    result.status,
        "delivered": bool(result.delivery and result.delivery.ok),
    }
