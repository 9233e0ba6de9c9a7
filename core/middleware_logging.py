import logging


class RequestLoggingMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response
        self.logger = logging.getLogger("core.requests")

    def __call__(self, request):
        client_ip = request.META.get("REMOTE_ADDR")
        method = request.method
        path = request.get_full_path()
        response = self.get_response(request)
        self.logger.info(f"[REQ] {method} {path} from {client_ip} -> {response.status_code}")
        return response
