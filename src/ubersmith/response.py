"""
API response envelope + navigator.

Every call returns a `Response`, whether the remote method succeeded, the remote API
reported an error, or the request never completed. The JSON payload (`data` on the
wire) is kept as raw JSON text and re-parsed on each access, so a `Response` is
immutable and safe to share between threads.

Navigating the payload:

    r = client.call("client.get", {"client_id": "1000"})
    name = r.key("full_name")
    tag = r.key("tags.1.tag")

    class Client(BaseModel):
        first: str = ""
        last: str = ""
        email: str = ""

    cl = r.load(Client)
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ubersmith.core.jsonpath import JsonValue, lookup, member_source
from ubersmith.errors import DecodeError

T = TypeVar("T")

# Error code used for failures synthesized locally (request build, transport, body read).
INTERNAL_ERROR_CODE = 500


class _WireEnvelope(BaseModel):
    """Top-level JSON shape returned by the API (`data` is kept as raw text)."""

    model_config = ConfigDict(strict=True)

    status: bool | None = None
    error_code: int | None = None
    error_message: str | None = None


class Response(BaseModel):
    """Normalized result of one API call."""

    model_config = ConfigDict(frozen=True)

    status: bool = False
    error_code: int = 0
    error_message: str = ""
    raw_data: str | None = None

    # Not part of the wire envelope.
    http_status: int | None = None
    decode_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status

    @classmethod
    def failure(cls, exc: BaseException, *, http_status: int | None = None) -> "Response":
        """Build the response for a call that failed before a body could be read."""
        message = str(exc) or exc.__class__.__name__
        return cls(
            status=False,
            error_code=INTERNAL_ERROR_CODE,
            error_message=message,
            http_status=http_status,
        )

    @classmethod
    def from_body(cls, body: bytes | str, *, http_status: int | None = None) -> "Response":
        """Parse a response body as the API envelope.

        A body that is not a valid envelope leaves every envelope field at its default
        (`status=False`) and records the parser message in `decode_error`. Field types
        are checked strictly: `"status": "true"` or `"error_code": "7"` is not an envelope.
        """
        try:
            wire = _WireEnvelope.model_validate_json(body)
        except ValidationError as exc:
            return cls(http_status=http_status, decode_error=_first_error(exc))

        text = body.decode("utf-8") if isinstance(body, bytes) else body
        raw_data = member_source(text, "data")

        return cls(
            status=bool(wire.status),
            error_code=wire.error_code or 0,
            error_message=wire.error_message or "",
            raw_data=raw_data,
            http_status=http_status,
        )

    def data(self) -> JsonValue:
        """Return a freshly decoded copy of the payload (None when absent or invalid)."""
        if not self.raw_data:
            return None
        try:
            return json.loads(self.raw_data)
        except ValueError:
            return None

    def key(self, path: str) -> JsonValue:
        """Return the payload value at dotted `path` (e.g. `tags.1.tag`), or None.

        Never raises: missing fields, out-of-range indexes and shape mismatches yield None.
        Callers cast the result to the shape they expect.
        """
        return lookup(self.data(), path)

    def load(self, destination: type[T]) -> T:
        """Decode the whole payload into `destination`.

        `destination` is anything Pydantic can validate: a model, a dataclass, a TypedDict,
        or a container type such as `list[Model]`. Unknown payload fields are ignored and
        fields missing from the payload keep their defaults. A `null` payload decodes to
        the destination's empty value (all defaults, or an empty list), or to None when
        `destination` accepts None.

        Raises:
            DecodeError: If the payload is absent, not valid JSON, or structurally
                incompatible with `destination`.
        """
        if self.raw_data is None:
            raise DecodeError("response has no data payload")
        adapter = TypeAdapter(destination)
        try:
            return adapter.validate_json(self.raw_data)
        except ValidationError as exc:
            if self.raw_data == "null":
                for empty in ({}, []):
                    try:
                        return adapter.validate_python(empty)
                    except ValidationError:
                        continue
            raise DecodeError(
                f"cannot decode response data into {_type_name(destination)}: {_first_error(exc)}"
            ) from exc


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)
