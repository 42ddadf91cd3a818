"""Turning Atelier API error bodies into one-line failure messages.

Two body shapes come back:

- request validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- domain and auth errors: {"error": ...} from the domain exception
  handlers, or {"detail": "..."} from HTTPException
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return (getattr(response, "text", "") or "(empty response body)")[:300]

    if isinstance(body.get("detail"), list):
        return " | ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', err)}" for err in body["detail"]
        )
    if "detail" in body:
        return str(body["detail"])

    error = body.get("error", body)
    if isinstance(error, dict):
        return " | ".join(f"{field}: {message}" for field, message in error.items())
    return str(error)[:300]


def fail(response, action: str) -> None:
    """Mark a ``catch_response`` request as failed with the API's reason."""
    response.failure(f"{action} failed: {response.status_code} - {extract_error_detail(response)}")
