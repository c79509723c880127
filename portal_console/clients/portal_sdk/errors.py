from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

TRACE_HEADERS = ("X-Trace-ID", "X-Trace-Id")


@dataclass
class APIError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "APIError":
        trace_id = next((response.headers[key] for key in TRACE_HEADERS if key in response.headers), None)
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            return cls(
                code=str(payload.get("code") or f"HTTP_{response.status_code}"),
                message=str(payload.get("message") or response.text or "HTTP request failed"),
                details=payload.get("details"),
                trace_id=payload.get("trace_id") or trace_id,
                status_code=response.status_code,
            )

        return cls(
            code=f"HTTP_{response.status_code}",
            message=response.text or "HTTP request failed",
            details=payload,
            trace_id=trace_id,
            status_code=response.status_code,
        )
