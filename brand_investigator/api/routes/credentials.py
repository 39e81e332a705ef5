from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from brand_investigator.api.deps import get_credential_store
from brand_investigator.models.schemas import CredentialsPayload, CredentialStatusResponse
from brand_investigator.services.credential_store import STORAGE_KEYS, CredentialStore

router = APIRouter(prefix="/api/credentials", tags=["credentials"])


@router.get("", response_model=CredentialStatusResponse)
async def credential_status(store: CredentialStore = Depends(get_credential_store)):
    """Report which slots hold a key. Secrets are never returned."""
    return CredentialStatusResponse(**store.status())


@router.put("", response_model=CredentialStatusResponse)
async def save_credentials(
    payload: CredentialsPayload,
    store: CredentialStore = Depends(get_credential_store),
):
    store.save(payload.to_credentials())
    return CredentialStatusResponse(**store.status())


@router.delete("", response_model=CredentialStatusResponse)
async def clear_credentials(store: CredentialStore = Depends(get_credential_store)):
    store.clear_all()
    return CredentialStatusResponse(**store.status())


@router.delete("/{name}", response_model=CredentialStatusResponse)
async def clear_credential(name: str, store: CredentialStore = Depends(get_credential_store)):
    if name not in STORAGE_KEYS:
        raise HTTPException(status_code=404, detail=f"Unknown credential slot: {name}")
    store.clear(name)
    return CredentialStatusResponse(**store.status())
