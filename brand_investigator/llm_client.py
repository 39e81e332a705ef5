"""Gemini client factory over the OpenAI-compatible chat completions API."""
from __future__ import annotations

from typing import Any

from brand_investigator.config import settings


def get_client(api_key: str) -> Any:
    """Build an AsyncOpenAI client pointed at the Gemini endpoint."""
    from openai import AsyncOpenAI

    base_url = settings.gemini_base_url.strip() or "https://generativelanguage.googleapis.com/v1beta/openai/"
    return AsyncOpenAI(api_key=api_key, base_url=base_url)


def get_model() -> str:
    """Get the active Gemini model id."""
    return settings.gemini_model

