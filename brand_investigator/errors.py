"""Error taxonomy for investigation runs.

Only required-collaborator failures (missing inputs, validation, invalid
credentials, failed requests) ever reach the caller of a run. The remaining
kinds are raised inside the optional clients and absorbed at the point of use.
"""
from __future__ import annotations

from typing import Any


class InvestigationError(Exception):
    """Base class for every failure raised by the investigation pipeline."""

    kind: str = "investigation_failed"

    def __init__(self, message: str, *, stage: str | None = None):
        super().__init__(message)
        self.message = message
        self.stage = stage
        # Findings gathered before the run aborted. Diagnostic only.
        self.findings: dict[str, Any] = {}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.stage:
            data["stage"] = self.stage
        return data


class MissingRequiredInputs(InvestigationError):
    kind = "missing_inputs"


class ValidationFailed(InvestigationError):
    kind = "validation_failed"

    def __init__(self, suggestions: str = "", *, stage: str | None = None):
        self.suggestions = suggestions or ""
        message = "Input validation failed"
        if self.suggestions:
            message = f"{message}: {self.suggestions}"
        super().__init__(message, stage=stage)


class InvalidCredential(InvestigationError):
    kind = "invalid_credential"

    def __init__(self, service: str, message: str = "", *, stage: str | None = None):
        self.service = service
        super().__init__(message or f"Invalid API key for {service}", stage=stage)


class RequestFailed(InvestigationError):
    kind = "request_failed"

    def __init__(
        self,
        service: str,
        status_code: int | None = None,
        message: str = "",
        *,
        stage: str | None = None,
    ):
        self.service = service
        self.status_code = status_code
        if not message:
            if status_code is None:
                message = f"{service} request failed"
            else:
                message = f"{service} request failed with status {status_code}"
        super().__init__(message, stage=stage)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


class AccessDenied(RequestFailed):
    kind = "access_denied"


class NotFound(RequestFailed):
    kind = "not_found"


class EnrichmentUnavailable(InvestigationError):
    kind = "enrichment_unavailable"


class ProfileLookupUnavailable(InvestigationError):
    kind = "profile_lookup_unavailable"


class AnalysisUnparseable(InvestigationError):
    kind = "analysis_unparseable"

    def __init__(self, reason: str, raw: str = ""):
        self.reason = reason
        self.raw = raw
        super().__init__(reason)
