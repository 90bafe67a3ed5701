"""FastAPI router exposing the purge engine to the CMS."""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, status

from edgepurge.core.entities.content_event import ContentChangeEvent
from edgepurge.core.entities.purge_outcome import PurgeOutcome
from edgepurge.core.entities.purge_policy import PurgePolicy
from edgepurge.core.errors import AuditWriteError, ConfigError, PurgeGatewayError
from edgepurge.core.services.purge_engine import AutoPurgeEngine

logger = logging.getLogger(__name__)


def create_purge_router(
    engine: AutoPurgeEngine,
    persist_policy: bool = True,
) -> APIRouter:
    """Create a router for policy management and event intake.

    Routes:
        GET  /policy          current purge policy
        PUT  /policy          replace (and persist) the purge policy
        POST /events          handle a content change event
        POST /events/preview  URLs an event would purge, without purging

    Example::

        app = FastAPI()
        app.include_router(create_purge_router(engine), prefix="/auto-purge")

    Args:
        engine: The purge engine to expose.
        persist_policy: Save the policy to durable storage on PUT.

    Returns:
        The configured APIRouter.
    """
    router = APIRouter(tags=["auto-purge"])

    @router.get("/policy")
    async def get_policy() -> dict[str, Any]:
        return {"success": True, "data": engine.get_policy().to_dict()}

    @router.put("/policy")
    async def put_policy(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        try:
            policy = PurgePolicy.from_dict(payload)
        except ConfigError as e:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

        previous = engine.get_policy()
        await engine.update_policy(policy)
        if persist_policy:
            # A policy that cannot be stored must not stay live
            try:
                await engine.save_policy()
            except ConfigError as e:
                await engine.update_policy(previous)
                raise HTTPException(
                    status.HTTP_400_BAD_REQUEST, detail=str(e)
                ) from e
            except Exception:
                await engine.update_policy(previous)
                raise

        return {
            "success": True,
            "data": policy.to_dict(),
            "message": "Auto-purge policy updated",
        }

    @router.post("/events")
    async def post_event(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        event = _parse_event(payload)
        try:
            outcome = await engine.handle_event(event)
        except PurgeGatewayError as e:
            logger.warning("Auto-purge failed for %s: %s", event.content_type, e)
            raise HTTPException(status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
        except AuditWriteError as e:
            raise HTTPException(
                status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
            ) from e
        except ConfigError as e:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

        return {"success": True, "data": _outcome_to_dict(outcome)}

    @router.post("/events/preview")
    async def preview_event(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        event = _parse_event(payload)
        urls = engine.preview_urls(event)
        return {"success": True, "data": {"urls": urls, "count": len(urls)}}

    return router


def _parse_event(payload: dict[str, Any]) -> ContentChangeEvent:
    """Build an event from a request body, mapping bad input to 422."""
    try:
        return ContentChangeEvent.from_dict(payload)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(
            422,
            detail=f"Invalid content change event: {e}",
        ) from e


def _outcome_to_dict(outcome: PurgeOutcome) -> dict[str, Any]:
    return {
        "state": outcome.state.value,
        "skipped": outcome.skipped.value if outcome.skipped else None,
        "full_purge": outcome.full_purge,
        "purged_urls": len(outcome.urls),
        "batches": outcome.batches,
    }
