"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages.
Handles the response shapes FastAPI produces:

- Request validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Domain validation (422): {"detail": {"field": ["msg", ...]}}
- Everything else (401/403/404/502): {"detail": "msg"}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message suitable for Locust failure messages."""
    try:
        body = response.json()
    except Exception:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    detail = body.get("detail") if isinstance(body, dict) else None

    if isinstance(detail, list):
        parts = []
        for err in detail:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if isinstance(detail, dict):
        return " | ".join(f"{k}: {v}" for k, v in detail.items())

    if detail is not None:
        return str(detail)

    return str(body)[:300]
