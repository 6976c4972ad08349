from __future__ import annotations

import enum
import json
from dataclasses import dataclass

from .zone import Zone, ZoneError


class FailureKind(enum.Enum):
    # 4xx response whose body is the provider's own JSON error report
    STRUCTURED = "structured"
    # any other failed response, body kept as plain text
    RAW = "raw"
    # connection never produced a response (refused, reset, timeout)
    NO_RESPONSE = "no_response"


@dataclass(slots=True)
class TransportFailure:
    kind: FailureKind
    message: str
    code: int | None = None
    body: str | None = None
    result: Zone | None = None
    exception: BaseException | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> TransportFailure:
        code = getattr(exc, "status", None)
        if code is None and isinstance(exc, OSError):
            code = exc.errno
        return cls(
            kind=FailureKind.NO_RESPONSE,
            message=str(exc) or type(exc).__name__,
            code=code,
            exception=exc,
        )

    def to_zone(self) -> Zone:
        if self.kind is FailureKind.STRUCTURED and self.result is not None:
            return self.result
        return Zone(
            success=False,
            errors=[ZoneError(code=self.code, message=self.body or self.message)],
        )


def parse_body(body: str) -> Zone | None:
    """Parses a provider JSON body, returns None when it is not one."""
    try:
        return Zone.from_response(json.loads(body))
    except ValueError:
        return None


def classify_response(status: int, reason: str | None, url: str, body: str) -> Zone | TransportFailure:
    """Turns a completed HTTP exchange into a result or a tagged failure.

    Only 4xx responses are trusted to carry a structured error report;
    5xx and other statuses keep their body as raw text even when it
    happens to be JSON.
    """
    parsed = parse_body(body) if 200 <= status < 300 or 400 <= status < 500 else None

    if 200 <= status < 300 and parsed is not None:
        return parsed

    status_line = f"{status} {reason}" if reason else str(status)
    if 200 <= status < 300:
        message = f"Malformed response: DELETE {url} resulted in a {status_line} response"
    elif 400 <= status < 500:
        message = f"Client error: DELETE {url} resulted in a {status_line} response"
    elif 500 <= status < 600:
        message = f"Server error: DELETE {url} resulted in a {status_line} response"
    else:
        message = f"Unexpected response: DELETE {url} resulted in a {status_line} response"

    if 400 <= status < 500 and parsed is not None:
        return TransportFailure(FailureKind.STRUCTURED, message, code=status, body=body, result=parsed)
    return TransportFailure(FailureKind.RAW, message, code=status, body=body)
