"""Normalizes every remote API response into an ApiResult.

The CMS API is inconsistent: some endpoints answer with a bare array or
object, others wrap the payload as ``{success, data, message}``, and errors
come back as ``{message}``, ``{error}`` or plain text. This is the only place
that knows about those shapes.
"""

from typing import Any

import httpx

from cms_admin.domain.entities import ApiResult, ErrorKind

_ENVELOPE_KEYS = frozenset({"success", "data", "message", "count", "total"})


def _error_message(body: Any) -> str | None:
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]
    return None


def unwrap_envelope(body: Any, status_code: int | None = None) -> ApiResult[Any]:
    """Turn a decoded 2xx body into Ok(data) or an APPLICATION failure."""
    if isinstance(body, dict) and "success" in body:
        if not body.get("success"):
            return ApiResult.failure(
                ErrorKind.APPLICATION,
                _error_message(body) or "Operation failed",
                status_code,
            )
        return ApiResult.success(body.get("data"), message=body.get("message"))

    if isinstance(body, dict) and "data" in body and set(body) <= _ENVELOPE_KEYS:
        return ApiResult.success(body.get("data"), message=body.get("message"))

    return ApiResult.success(body)


def normalize_response(response: httpx.Response) -> ApiResult[Any]:
    """Map status code and body of one response to the tagged result."""
    status = response.status_code
    try:
        body = response.json() if response.content.strip() else None
        decoded = True
    except ValueError:
        body = None
        decoded = False

    if not response.is_success:
        message = (
            _error_message(body)
            or response.text.strip()[:300]
            or response.reason_phrase
            or f"HTTP {status}"
        )
        kind = ErrorKind.NOT_FOUND if status == 404 else ErrorKind.HTTP_STATUS
        return ApiResult.failure(kind, message, status)

    if not decoded:
        return ApiResult.failure(ErrorKind.DECODE, "Response body is not valid JSON", status)

    return unwrap_envelope(body, status)
