from __future__ import annotations

from brand_investigator.config import settings
from brand_investigator.services.credential_store import CredentialStore


def get_credential_store() -> CredentialStore:
    """Credential store backing the HTTP API; override in tests."""
    return CredentialStore(settings.credential_store_path)
