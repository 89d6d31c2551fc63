"""
VAPI voice assistant webhook
"""
import json
import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from beloved.core.config import settings
from beloved.core.database import get_db
from beloved.core.security import verify_webhook_secret
from beloved.models.webhook_event import WebhookEvent, WebhookStatus
from beloved.schemas.vapi import VAPIEvent
from beloved.services import call_logs
from beloved.services.vapi_agent import VAPIAgent

logger = logging.getLogger(__name__)

router = APIRouter()

WEBHOOK_SOURCE = "vapi"


async def dispatch_event(db: AsyncSession, event: VAPIEvent) -> Optional[Dict[str, Any]]:
    """Apply one event; returns the JSON body for events that answer the assistant"""
    call_id = event.conversation.id

    if event.type == "status.update":
        await call_logs.update_call_status(db, call_id, event.conversation.status)

    elif event.type == "transcript.update":
        if event.transcript:
            await call_logs.record_transcript(db, call_id, event.transcript.text, event.transcript.final)

    elif event.type == "function.call":
        if event.function:
            agent = VAPIAgent(db, call_id)
            return await agent.handle_function_call(event.function.name, event.function.parameters)

    elif event.type == "assistant.request":
        if event.request:
            agent = VAPIAgent(db, call_id)
            return await agent.handle_assistant_request(event.request.type, event.request.parameters)

    elif event.type == "call.end":
        recording_url = event.conversation.recording.url if event.conversation.recording else None
        await call_logs.end_call(db, call_id, event.conversation.duration, recording_url)

    elif event.type == "hang.notification":
        await call_logs.mark_hung(db, call_id)

    else:
        logger.info("Unhandled VAPI event type: %s", event.type)

    return None


@router.post("/webhook")
async def vapi_webhook(
    request: Request,
    x_vapi_secret: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    """
    Receive a VAPI event.
    Verifies the shared secret, records the delivery, dispatches on the event type.
    """
    if not settings.VAPI_WEBHOOK_SECRET:
        logger.error("VAPI webhook secret not configured, rejecting request")
    if not verify_webhook_secret(x_vapi_secret, settings.VAPI_WEBHOOK_SECRET):
        return JSONResponse({"error": "Unauthorized"}, status_code=status.HTTP_401_UNAUTHORIZED)

    body = await request.body()
    try:
        payload = json.loads(body)
        event = VAPIEvent.model_validate(payload)
    except (ValueError, ValidationError) as e:
        logger.warning("Rejected malformed VAPI payload: %s", e)
        return JSONResponse({"error": "Invalid payload"}, status_code=status.HTTP_400_BAD_REQUEST)

    logger.info("Received VAPI event %s for conversation %s", event.type, event.conversation.id)

    audit = WebhookEvent(source=WEBHOOK_SOURCE, event_type=event.type, payload=payload)
    db.add(audit)
    await db.commit()
    audit_id = audit.id

    try:
        response = await dispatch_event(db, event)
        audit.status = WebhookStatus.PROCESSED
        await db.commit()
    except Exception as e:
        logger.exception("Webhook error for %s event", event.type)
        await db.rollback()
        await db.execute(
            update(WebhookEvent)
            .where(WebhookEvent.id == audit_id)
            .values(status=WebhookStatus.ERROR, error_message=str(e)[:1000])
        )
        await db.commit()
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if response is not None:
        return JSONResponse(response)
    return {"success": True}
