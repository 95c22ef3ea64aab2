"""Request logging for HTTP traffic, with credential redaction."""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from fastapi import FastAPI, Request

_PAYLOAD_PREVIEW_LIMIT = 2048
# Paths to skip HTTP request logging (health probes)
_QUIET_PATHS = ("/health",)
# BYOK fields travel in request bodies; they are never logged, not even a prefix.
_SENSITIVE_PAYLOAD_KEYS = {
    "api_key",
    "apikey",
    "authorization",
    "byok_key",
    "password",
    "secret",
    "token",
}
_DATA_URI_PREVIEW = 48


def _format_client_address(client: tuple[str, int] | None) -> str:
    if not client:
        return "unknown"
    host, port = client
    return f"{host}:{port}" if port is not None else host


def _truncate(text: str) -> str:
    text = " ".join(text.split())
    if len(text) > _PAYLOAD_PREVIEW_LIMIT:
        return f"{text[:_PAYLOAD_PREVIEW_LIMIT]}... ({len(text)} chars)"
    return text


def _redact_payload(value: Any, *, depth: int = 8) -> Any:
    if depth <= 0:
        return "<max depth reached>"

    if isinstance(value, Mapping):
        redacted: dict[Any, Any] = {}
        for key, item in value.items():
            if str(key).lower() in _SENSITIVE_PAYLOAD_KEYS:
                redacted[key] = "***" if item else item
            else:
                redacted[key] = _redact_payload(item, depth=depth - 1)
        return redacted

    if isinstance(value, list):
        return [_redact_payload(item, depth=depth - 1) for item in value]

    if isinstance(value, str) and value.startswith("data:") and len(value) > _DATA_URI_PREVIEW:
        return f"{value[:_DATA_URI_PREVIEW]}...<{len(value)} chars>"

    return value


def render_payload_preview(payload: Any) -> str:
    """Return a redacted, length-limited preview for request logging."""

    if payload is None:
        return "<none>"

    if isinstance(payload, (bytes, bytearray)):
        if not payload:
            return "<empty>"
        try:
            payload = json.loads(bytes(payload).decode("utf-8"))
        except UnicodeDecodeError:
            return f"<binary {len(payload)} bytes>"
        except ValueError:
            # Not JSON; only the size is safe to log.
            return f"<{len(payload)} bytes>"

    serialized = json.dumps(_redact_payload(payload), default=repr, ensure_ascii=False, separators=(",", ":"))
    return _truncate(serialized)


def register_http_request_logging(app: FastAPI, *, logger_name: str = "core.http") -> None:
    """Attach middleware that logs every HTTP request."""

    if getattr(app.state, "_http_request_logging_installed", False):  # pragma: no cover - idempotence
        return

    logger = logging.getLogger(logger_name)

    @app.middleware("http")
    async def _log_request(request: Request, call_next):  # type: ignore[override]
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        body = await request.body()
        client = request.client
        client_addr = _format_client_address((client.host, client.port) if client else None)
        logger.info("HTTP %s %s from %s", request.method, path, client_addr)
        if body:
            logger.debug("HTTP %s %s payload %s", request.method, path, render_payload_preview(body))

        return await call_next(request)

    app.state._http_request_logging_installed = True


__all__ = ["register_http_request_logging", "render_payload_preview"]
