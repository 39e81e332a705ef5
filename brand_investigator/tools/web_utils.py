from __future__ import annotations

import re
from urllib.parse import urlparse


def is_valid_url(url: str) -> bool:
    """Basic URL validation."""
    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except ValueError:
        return False


def hostname(url: str) -> str:
    """Lower-cased host without a leading www."""
    try:
        host = (urlparse(url).hostname or "").lower().strip()
    except ValueError:
        return ""
    if host.startswith("www."):
        host = host[4:]
    return host


def truncate(text: str | None, max_length: int) -> str:
    """Cut text to at most max_length characters."""
    if not text:
        return ""
    return text[:max_length]


def clean_content(text: str, max_length: int = 300) -> str:
    """Collapse whitespace and trim to a preview length."""
    text = re.sub(r"\s+", " ", text or "").strip()
    if len(text) > max_length:
        text = text[:max_length] + "..."
    return text


def safe_filename(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", name, flags=re.IGNORECASE)
