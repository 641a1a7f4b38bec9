# backend/hub/errors.py
from __future__ import annotations


class HubError(Exception):
    """Error that is reported to the caller as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(HubError):
    status_code = 500


class RateLimitError(HubError):
    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded. Please try again later."):
        super().__init__(message)


class CreditsExhaustedError(HubError):
    status_code = 402

    def __init__(self, message: str = "AI credits exhausted. Please add funds."):
        super().__init__(message)


class GatewayError(HubError):
    """Non-2xx answer from the AI gateway. ``upstream_status`` keeps the gateway's code."""

    def __init__(self, upstream_status: int, body: str = ""):
        super().__init__(f"AI gateway error: {upstream_status}", 500)
        self.upstream_status = upstream_status
        self.body = body
