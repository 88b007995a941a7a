from __future__ import annotations

from typing import Optional


def bearer(token: str) -> str:
    """Format an Authorization header value for ``token``."""
    return f"Bearer {token}"


def token_preview(token: Optional[str], keep: int = 6) -> str:
    """Return a log-safe prefix of ``token``.

    Short tokens are fully masked so nothing usable ends up in log files.
    """
    if not token:
        return "<none>"
    if len(token) <= keep * 2:
        return "*" * len(token)
    return f"{token[:keep]}...({len(token)} chars)"
