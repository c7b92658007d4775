from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin

from bm_core.common.api.exceptions import ensure_request_id


class RequestIdMiddleware(MiddlewareMixin):
    """
    Gives every request a request_id (client supplied X-Request-Id wins)
    and echoes it back, so error envelopes and log lines can be correlated.
    """

    HEADER_META_KEY = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-Id"

    def process_request(self, request):
        incoming = (request.META.get(self.HEADER_META_KEY) or "").strip()
        if incoming:
            request.request_id = incoming[:64]
        ensure_request_id(request)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid and self.RESPONSE_HEADER not in response:
            response[self.RESPONSE_HEADER] = rid
        return response
