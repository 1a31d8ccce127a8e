"""
Logging filters.

RequestIdFilter stamps every record with the current request id, read from a
contextvar so it follows the request across awaits. RequestIDMiddleware sets it;
records logged outside a request get "-".

RedactFilter masks sensitive `extra` keys before any handler formats them.
"""
import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context.

    Returns:
        token: pass it to reset_request_id(token) to restore the previous value
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has `request_id`: an explicit `extra={"request_id": ...}`
    wins, then the contextvar, then "-". Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """
    Replace the value of sensitive `extra` keys with a marker.

    Passenger contact data (email, phone) counts as sensitive, so repositories and
    services can pass it as context without it reaching the log sinks.
    """

    SENSITIVE = {
        "password", "secret", "token", "access_token", "refresh_token", "authorization",
        "email", "phone",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
