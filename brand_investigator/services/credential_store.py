from __future__ import annotations

import json
from pathlib import Path

from brand_investigator.config import settings
from brand_investigator.models.investigation import Credentials
from brand_investigator.services.logger import logger

# Fixed slot names, one per remote service.
STORAGE_KEYS: dict[str, str] = {
    "serper": "serperApiKey",
    "gemini": "geminiApiKey",
    "firecrawl": "firecrawlApiKey",
    "rapidapi": "rapidApiKey",
}


class CredentialStore:
    """Key-value file holding the four API keys between runs."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.credential_store_path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credential store {self.path}: {e}")
            return {}
        if not isinstance(payload, dict):
            return {}
        return {k: v for k, v in payload.items() if isinstance(v, str)}

    def _write(self, payload: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def load(self) -> Credentials:
        stored = self._read()
        return Credentials(**{name: stored.get(slot, "") for name, slot in STORAGE_KEYS.items()})

    def save(self, credentials: Credentials) -> None:
        """Persist every non-blank key; blank values leave the slot untouched."""
        payload = self._read()
        for name, slot in STORAGE_KEYS.items():
            value = getattr(credentials, name).strip()
            if value:
                payload[slot] = value
        self._write(payload)

    def clear(self, name: str) -> None:
        if name not in STORAGE_KEYS:
            raise KeyError(f"Unknown credential slot: {name}")
        payload = self._read()
        if payload.pop(STORAGE_KEYS[name], None) is not None:
            self._write(payload)

    def clear_all(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def status(self) -> dict[str, bool]:
        stored = self.load()
        return {name: bool(getattr(stored, name).strip()) for name in STORAGE_KEYS}


def credentials_from_settings() -> Credentials:
    return Credentials(
        serper=settings.serper_api_key,
        gemini=settings.gemini_api_key,
        firecrawl=settings.firecrawl_api_key,
        rapidapi=settings.rapidapi_key,
    )


def resolve_credentials(explicit: Credentials | None = None, store: CredentialStore | None = None) -> Credentials:
    """Explicit keys win over stored ones, which win over environment settings."""
    resolved = credentials_from_settings()
    resolved = resolved.merged_with((store or CredentialStore()).load())
    if explicit is not None:
        resolved = resolved.merged_with(explicit)
    return resolved
