"""Request decoding and response envelopes for the device API.

Every response body is the envelope ``{"code", "message", "data"}``.
Failures are raised as :class:`GatewayError` subclasses and turned into
envelopes by :func:`envelope_middleware`, so no handler ever leaves a
request without a response.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from aiohttp import web

from . import constants
from .core.models import ActionRequest, VolumeSetting
from .core.utils import clamp_percent

LOGGER = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class GatewayError(RuntimeError):
    """Base error carrying the envelope code it should be reported with."""

    code = 500

    def __init__(self, message: str, *, code: Optional[int] = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self)


class ClientInputError(GatewayError):
    """Malformed body or a missing or invalid field."""

    code = 400


class PayloadTooLargeError(ClientInputError):
    """Request body exceeds the configured maximum length."""


class ActionRejectedError(GatewayError):
    """The device declined a syntactically valid action."""

    code = 400


class ServerUnavailableError(GatewayError):
    """No device is bound or a device subsystem is missing."""

    code = 500


def encode_envelope(
    code: int, message: str, data: Optional[Mapping[str, Any]] = None
) -> dict[str, Any]:
    if not isinstance(data, Mapping):
        if data is not None:
            LOGGER.warning("Discarding non-object response data: %r", data)
        data = {}
    return {"code": code, "message": message, "data": dict(data)}


def envelope_response(
    code: int, message: str, data: Optional[Mapping[str, Any]] = None
) -> web.Response:
    """Wrap an envelope in an HTTP 200 response.

    The outcome travels only in the envelope ``code``; clients read it from
    the body, never from the HTTP status line.
    """

    return web.json_response(
        encode_envelope(code, message, data),
        status=200,
        content_type=CONTENT_TYPE,
        headers=CORS_HEADERS,
    )


async def _read_limited(request: web.Request, limit: int) -> bytes:
    buffer = bytearray()
    while len(buffer) < limit:
        chunk = await request.content.read(limit - len(buffer))
        if not chunk:
            break
        buffer.extend(chunk)
    return bytes(buffer)


async def read_body(
    request: web.Request,
    *,
    max_bytes: int = constants.MAX_BODY_BYTES,
    timeout: float = constants.IO_TIMEOUT_SECONDS,
) -> bytes:
    """Read the request body, rejecting anything longer than ``max_bytes``."""

    declared = request.content_length
    if declared is not None and declared > max_bytes:
        raise PayloadTooLargeError(f"request body exceeds {max_bytes} bytes")

    try:
        raw = await asyncio.wait_for(_read_limited(request, max_bytes + 1), timeout)
    except asyncio.TimeoutError:
        raise ClientInputError("timed out reading request body") from None

    if len(raw) > max_bytes:
        raise PayloadTooLargeError(f"request body exceeds {max_bytes} bytes")
    if not raw.strip():
        raise ClientInputError("request body is empty")
    return raw


def parse_document(raw: bytes) -> dict[str, Any]:
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ClientInputError("request body is not valid JSON") from None
    if not isinstance(document, dict):
        raise ClientInputError("request body must be a JSON object")
    return document


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _optional_int(document: Mapping[str, Any], name: str, default: int) -> int:
    value = document.get(name)
    if value is None:
        return default
    if not _is_number(value):
        raise ClientInputError(f"field '{name}' must be a number")
    try:
        return int(value)
    except (OverflowError, ValueError):
        raise ClientInputError(f"field '{name}' is out of range") from None


def _required_int(document: Mapping[str, Any], name: str) -> int:
    if document.get(name) is None:
        raise ClientInputError(f"missing required field '{name}'")
    return _optional_int(document, name, 0)


def decode_action_request(document: Mapping[str, Any]) -> ActionRequest:
    action = document.get("action")
    if action is None:
        raise ClientInputError("missing required field 'action'")
    if not isinstance(action, str) or not action:
        raise ClientInputError("field 'action' must be a non-empty string")

    return ActionRequest(
        action=action,
        steps=_optional_int(document, "steps", constants.DEFAULT_STEPS),
        speed=_optional_int(document, "speed", constants.DEFAULT_SPEED_MS),
    )


def decode_volume_request(document: Mapping[str, Any]) -> VolumeSetting:
    requested = _required_int(document, "volume")
    return VolumeSetting(requested=requested, applied=clamp_percent(requested))


@web.middleware
async def envelope_middleware(
    request: web.Request, handler: Handler
) -> web.StreamResponse:
    """Convert every failure escaping a handler into an envelope."""

    try:
        return await handler(request)
    except GatewayError as exc:
        LOGGER.info(
            "%s %s -> %d %s", request.method, request.path, exc.code, exc.message
        )
        return envelope_response(exc.code, exc.message)
    except web.HTTPException as exc:
        return envelope_response(exc.status, exc.reason)
    except asyncio.CancelledError:
        raise
    except Exception:
        LOGGER.exception("Unhandled error serving %s %s", request.method, request.path)
        return envelope_response(500, "internal server error")
