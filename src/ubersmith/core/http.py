"""
HTTP helpers.

This module centralizes the small amount of httpx plumbing used by the API client.

Design goals:
- Small surface area (POST a JSON body with basic auth).
- Deterministic defaults (User-Agent, JSON content type).
- Do NOT raise on non-2xx: the API reports failures inside its JSON envelope, so the
  caller always gets the response body back.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx


DEFAULT_USER_AGENT = "ubersmith-client/0.1.0"


def encode_json_body(payload: Mapping[str, Any] | None) -> bytes:
    """Serialize request parameters as a compact JSON object.

    Raises:
        TypeError: If a value is not JSON-serializable.
        ValueError: On NaN/Infinity or circular references.
    """
    body = json.dumps(
        dict(payload or {}),
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
        allow_nan=False,
    )
    return body.encode("utf-8")


def post_json(
    url: str,
    *,
    content: bytes,
    auth: tuple[str, str],
    timeout_seconds: float | None = None,
    verify: bool = True,
    client: httpx.Client | None = None,
) -> httpx.Response:
    """POST a pre-encoded JSON `content` to `url` and return the fully read response.

    When `client` is given it is used as-is (the caller owns its lifecycle, transport and
    timeouts); otherwise a short-lived client is opened for this request.

    Raises:
        httpx.HTTPError: On transport errors (connect, TLS, read, ...).
        httpx.InvalidURL: If `url` cannot be parsed.
    """
    request_headers = {"User-Agent": DEFAULT_USER_AGENT, "Content-Type": "application/json"}

    if client is not None:
        return client.post(url, content=content, headers=request_headers, auth=auth)

    client_kwargs: dict[str, Any] = {"verify": verify}
    if timeout_seconds is not None:
        client_kwargs["timeout"] = timeout_seconds

    with httpx.Client(**client_kwargs) as owned:
        return owned.post(url, content=content, headers=request_headers, auth=auth)
