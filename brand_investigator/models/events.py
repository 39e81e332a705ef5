from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    PROGRESS = "progress"
    VALIDATION_COMPLETED = "validation_completed"
    STAGE_STARTED = "stage_started"
    SEARCH_RESULT = "search_result"
    ENRICHMENT_RESULT = "enrichment_result"
    STAGE_COMPLETED = "stage_completed"
    PROFILE_FETCHED = "profile_fetched"
    SYNTHESIS_STARTED = "synthesis_started"
    INVESTIGATION_COMPLETE = "investigation_complete"
    ERROR = "error"


@dataclass
class SSEEvent:
    event: EventType
    data: dict[str, Any] = field(default_factory=dict)

    def format(self) -> str:
        return f"event: {self.event.value}\ndata: {json.dumps(self.data)}\n\n"
