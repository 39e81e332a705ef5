"""Tests for persisted credential slots and resolution order."""
import json
from unittest.mock import patch

import pytest

from brand_investigator.models.investigation import Credentials
from brand_investigator.services.credential_store import CredentialStore, resolve_credentials


@pytest.fixture
def store(tmp_path):
    return CredentialStore(tmp_path / "creds" / "credentials.json")


def test_load_from_missing_file_is_blank(store):
    assert store.load() == Credentials()
    assert store.status() == {"serper": False, "gemini": False, "firecrawl": False, "rapidapi": False}


def test_save_uses_fixed_slot_names(store):
    store.save(Credentials(serper=" s-key ", gemini="g-key"))

    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload == {"serperApiKey": "s-key", "geminiApiKey": "g-key"}
    assert store.load().serper == "s-key"


def test_blank_values_do_not_overwrite(store):
    store.save(Credentials(serper="s-key", firecrawl="fc-key"))
    store.save(Credentials(serper="new-key", firecrawl="  "))

    loaded = store.load()
    assert loaded.serper == "new-key"
    assert loaded.firecrawl == "fc-key"


def test_clear_single_slot_and_all(store):
    store.save(Credentials(serper="s", gemini="g", rapidapi="r"))
    store.clear("rapidapi")
    assert store.status()["rapidapi"] is False
    assert store.status()["serper"] is True

    store.clear_all()
    assert not store.path.exists()
    assert store.load() == Credentials()


def test_clear_unknown_slot(store):
    with pytest.raises(KeyError):
        store.clear("openai")


def test_corrupt_file_is_ignored(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")
    assert store.load() == Credentials()


def test_resolution_order_explicit_then_stored_then_env(store):
    store.save(Credentials(serper="stored-serper", gemini="stored-gemini"))

    with patch("brand_investigator.services.credential_store.settings") as mock_settings:
        mock_settings.serper_api_key = "env-serper"
        mock_settings.gemini_api_key = "env-gemini"
        mock_settings.firecrawl_api_key = "env-fc"
        mock_settings.rapidapi_key = ""

        resolved = resolve_credentials(Credentials(gemini="explicit-gemini"), store)

    assert resolved.serper == "stored-serper"
    assert resolved.gemini == "explicit-gemini"
    assert resolved.firecrawl == "env-fc"
    assert resolved.rapidapi == ""
