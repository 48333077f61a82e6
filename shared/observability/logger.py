import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, Dict
from .context import RequestContext


# Security: Keys that should never be logged
FORBIDDEN_KEYS = {
    'authorization', 'token', 'password', 'secret',
    'api_key', 'bearer', 'jwt', 'credential', 'auth'
}

# Keys that stay at the top level of the log entry instead of going under "data"
STRUCTURED_KEYS = {
    'trace_id', 'trace_source', 'request_id', 'request_source', 'friend_id'
}


class StructuredLogger:
    """
    Structured JSON logger.

    Each call emits one JSON object per line:
    - timestamp, level, service, message
    - fields of the RequestContext passed positionally (top level)
    - structured keys such as friend_id (top level, override context)
    - everything else merged under "data"

    Usage:
        logger = get_logger("friends.repositories.friend")
        logger.info("Friend created", ctx, friend_id=7, data={"name": "Tomas"})
    """

    def __init__(self, service_name: str):
        self.service_name = service_name
        self.logger = logging.getLogger(service_name)
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(handler)
        self.logger.propagate = False

    def _sanitize(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Remove forbidden keys for security."""
        return {
            k: v for k, v in values.items()
            if k.lower() not in FORBIDDEN_KEYS
        }

    def _log(
        self,
        level: str,
        message: str,
        ctx: Optional[RequestContext] = None,
        data: Any = None,
        **kwargs
    ):
        """
        Internal log method.

        Priority (later overrides earlier):
        1. Base fields (timestamp, level, service, message)
        2. RequestContext fields
        3. Structured top-level kwargs
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": level,
            "service": self.service_name,
            "message": message
        }

        if ctx is not None:
            log_entry.update(ctx.to_dict())

        safe_kwargs = self._sanitize(kwargs)
        payload: Dict[str, Any] = {}
        if isinstance(data, dict):
            payload.update(self._sanitize(data))
        elif data is not None:
            payload["value"] = data

        for key, value in safe_kwargs.items():
            if key in STRUCTURED_KEYS:
                log_entry[key] = value
            else:
                payload[key] = value

        if payload:
            log_entry["data"] = payload

        log_method = getattr(self.logger, level.lower())
        log_method(json.dumps(log_entry, default=str))

    def debug(self, message: str, ctx: Optional[RequestContext] = None, **kwargs):
        self._log("DEBUG", message, ctx, **kwargs)

    def info(self, message: str, ctx: Optional[RequestContext] = None, **kwargs):
        self._log("INFO", message, ctx, **kwargs)

    def warning(self, message: str, ctx: Optional[RequestContext] = None, **kwargs):
        self._log("WARNING", message, ctx, **kwargs)

    def error(self, message: str, ctx: Optional[RequestContext] = None, **kwargs):
        self._log("ERROR", message, ctx, **kwargs)

    def critical(self, message: str, ctx: Optional[RequestContext] = None, **kwargs):
        self._log("CRITICAL", message, ctx, **kwargs)


def get_logger(service_name: str) -> StructuredLogger:
    """Get a structured logger for the given service."""
    return StructuredLogger(service_name)
