from __future__ import annotations

from typing import Any

from brand_investigator.models.events import EventType, SSEEvent

TOTAL_STEPS = 7


def progress(step: int, text: str, total: int = TOTAL_STEPS) -> SSEEvent:
    """Emit a linear progress update (step 1..total)."""
    percent = round(step / total * 100) if total else 0
    return SSEEvent(
        event=EventType.PROGRESS,
        data={"step": step, "total": total, "percent": percent, "text": text},
    )


def validation_completed(validation: dict[str, Any]) -> SSEEvent:
    return SSEEvent(event=EventType.VALIDATION_COMPLETED, data={"validation": validation})


def stage_started(stage: str, title: str, query: str) -> SSEEvent:
    return SSEEvent(
        event=EventType.STAGE_STARTED,
        data={"stage": stage, "title": title, "query": query},
    )


def search_result(stage: str, results: list[dict]) -> SSEEvent:
    return SSEEvent(event=EventType.SEARCH_RESULT, data={"stage": stage, "results": results})


def enrichment_result(stage: str, url: str, title: str, content_preview: str) -> SSEEvent:
    return SSEEvent(
        event=EventType.ENRICHMENT_RESULT,
        data={
            "stage": stage,
            "url": url,
            "title": title,
            "content_preview": content_preview,
        },
    )


def stage_completed(stage: str, **kwargs: Any) -> SSEEvent:
    return SSEEvent(event=EventType.STAGE_COMPLETED, data={"stage": stage, **kwargs})


def profile_fetched(profile_url: str, full_name: str) -> SSEEvent:
    return SSEEvent(
        event=EventType.PROFILE_FETCHED,
        data={"profile_url": profile_url, "full_name": full_name},
    )


def synthesis_started(findings_count: int) -> SSEEvent:
    return SSEEvent(event=EventType.SYNTHESIS_STARTED, data={"findings_count": findings_count})


def investigation_complete(aggregate: dict[str, Any], runtime_ms: int | None = None) -> SSEEvent:
    data: dict[str, Any] = {"aggregate": aggregate}
    if runtime_ms is not None:
        data["runtime_ms"] = runtime_ms
    return SSEEvent(event=EventType.INVESTIGATION_COMPLETE, data=data)


def error(kind: str, message: str, stage: str | None = None) -> SSEEvent:
    data: dict[str, Any] = {"kind": kind, "message": message}
    if stage:
        data["stage"] = stage
    return SSEEvent(event=EventType.ERROR, data=data)
