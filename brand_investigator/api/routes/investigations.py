from __future__ import annotations

import json as _json

from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from brand_investigator.agents.orchestrator import InvestigationOrchestrator
from brand_investigator.api.deps import get_credential_store
from brand_investigator.models.schemas import InvestigationRequest
from brand_investigator.services import logger as log_service
from brand_investigator.services import streaming
from brand_investigator.services.credential_store import CredentialStore, resolve_credentials

router = APIRouter(prefix="/api/investigations", tags=["investigations"])


@router.post("/stream")
async def stream_investigation(
    request: InvestigationRequest,
    store: CredentialStore = Depends(get_credential_store),
):
    """SSE endpoint that runs one investigation and streams its progress."""
    explicit = request.credentials.to_credentials() if request.credentials else None
    credentials = resolve_credentials(explicit, store)

    async def event_generator():
        orchestrator = InvestigationOrchestrator()
        try:
            async for event in orchestrator.investigate(
                request.brand_name,
                request.product_category,
                credentials,
            ):
                yield {
                    "event": event.event.value,
                    "data": _json.dumps(event.data),
                }
        except Exception as e:
            log_service.log_event(
                event_type="investigation_crashed",
                message="Investigation stream failed",
                brand_name=request.brand_name,
                error=str(e),
            )
            err = streaming.error("unexpected", str(e), None)
            yield {"event": err.event.value, "data": _json.dumps(err.data)}

    return EventSourceResponse(event_generator())
