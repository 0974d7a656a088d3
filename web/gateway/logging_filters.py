"""Logging filter that stamps records with the current request id."""

from logging import Filter, LogRecord

from .middleware import REQUEST_ID_CTX


class RequestIdFilter(Filter):
    """Set ``record.request_id`` for JSON log output.

    The id comes from the ``request`` attached to the record when there is
    one (``django.request`` logs 4xx/5xx responses after the middleware has
    already reset ``REQUEST_ID_CTX``), otherwise from ``REQUEST_ID_CTX``.
    Records logged outside a request get ``"-"``. A ``request_id`` passed
    explicitly via ``extra`` is left untouched.
    """

    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            rid = getattr(getattr(record, "request", None), "request_id", None)
            record.request_id = rid or REQUEST_ID_CTX.get()
        return True
