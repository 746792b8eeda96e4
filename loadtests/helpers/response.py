"""Response error extraction for load test observability.

Every API rejection has the shape
``{"status": 404, "error": "BookNotFound", "message": "...", "details": ...}``
where ``details`` is present for validation failures only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict) or "message" not in body:
        return str(body)[:300]

    summary = f"{body.get('error', 'Error')}: {body['message']}"
    details = body.get("details")
    if isinstance(details, list):
        fields = " | ".join(f"{d.get('field')}: {d.get('message')}" for d in details if isinstance(d, dict))
        return f"{summary} ({fields})" if fields else summary
    if isinstance(details, dict):
        return f"{summary} ({' | '.join(f'{k}: {v}' for k, v in details.items())})"
    return summary
