from typing import Dict, Any
from dataclasses import dataclass
import time
import secrets
import re


TRACE_ID_PATTERN = re.compile(r'^t\d{10}[0-9a-f]{12}$')
REQUEST_ID_PATTERN = re.compile(r'^r\d{10}[0-9a-f]{12}$')


def generate_trace_id() -> str:
    """
    Generate a new trace_id.

    Format: t + Unix timestamp (seconds) + 12 hexadecimal characters
    Example: t1735228800a1b2c3d4e5f6
    """
    return f"t{int(time.time())}{secrets.token_hex(6)}"


def generate_request_id() -> str:
    """
    Generate a new request_id.

    Format: r + Unix timestamp (seconds) + 12 hexadecimal characters
    Example: r1735228800f6e5d4c3b2a1
    """
    return f"r{int(time.time())}{secrets.token_hex(6)}"


def is_valid_trace_id(trace_id: str) -> bool:
    return bool(TRACE_ID_PATTERN.match(trace_id))


def is_valid_request_id(request_id: str) -> bool:
    return bool(REQUEST_ID_PATTERN.match(request_id))


@dataclass(frozen=True)
class RequestContext:
    """
    Context passed explicitly through repository calls for log correlation.

    Fields:
    - trace_id: Global trace identifier (e.g., "t1735228800a1b2c3d4e5f6")
    - trace_source: Where the trace originated (e.g., "FRIENDS:bootstrap")
    - request_id: Identifier of one logical operation
    - request_source: Component issuing the operation
    """
    trace_id: str
    trace_source: str
    request_id: str
    request_source: str

    @classmethod
    def new(cls, source: str) -> "RequestContext":
        """Start a fresh trace whose first request originates at `source`."""
        return cls(
            trace_id=generate_trace_id(),
            trace_source=source,
            request_id=generate_request_id(),
            request_source=source,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            'trace_id': self.trace_id,
            'trace_source': self.trace_source,
            'request_id': self.request_id,
            'request_source': self.request_source,
        }
