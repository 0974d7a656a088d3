"""Request correlation and request size middleware.

``RequestIdMiddleware`` gives every request an identifier: the client's
``X-Request-ID`` header when it looks sane, a fresh UUIDv4 otherwise. The
id is stored on ``request.request_id`` and in ``REQUEST_ID_CTX`` so log
records emitted anywhere during the request can carry it (see
``gateway.logging_filters``), and it is echoed on the response.

``ApiSizeLimitMiddleware`` rejects API requests whose declared body is
larger than ``settings.API_MAX_BYTES`` before any view parses it.
"""

import contextvars
import re
import uuid

from django.conf import settings
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")

# Accept client ids that are safe to log verbatim
REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,128}$")

API_PREFIX = "/v1/"
DEFAULT_MAX_BYTES = 1 * 1024 * 1024


class RequestIdMiddleware(MiddlewareMixin):
    HEADER = "HTTP_X_REQUEST_ID"       # incoming header as found in request.META
    RESPONSE_HEADER = "X-Request-ID"

    def process_request(self, request):
        rid = request.META.get(self.HEADER, "")
        if not REQUEST_ID_RE.match(rid):
            rid = str(uuid.uuid4())
        request.request_id = rid
        request._request_id_token = REQUEST_ID_CTX.set(rid)

    def process_response(self, request, response):
        response[self.RESPONSE_HEADER] = getattr(request, "request_id", REQUEST_ID_CTX.get())
        token = getattr(request, "_request_id_token", None)
        if token is not None:
            REQUEST_ID_CTX.reset(token)
            request._request_id_token = None
        return response


class ApiSizeLimitMiddleware(MiddlewareMixin):
    def process_request(self, request):
        if not request.path.startswith(API_PREFIX):
            return None
        limit = getattr(settings, "API_MAX_BYTES", DEFAULT_MAX_BYTES)
        clen = request.META.get("CONTENT_LENGTH")
        if clen and clen.isdigit() and int(clen) > limit:
            return JsonResponse({"detail": "PAYLOAD_TOO_LARGE"}, status=413)
        return None
