class BadgeError(Exception):
    """Base exception for all badge-service errors."""
    pass


class FetchError(BadgeError):
    """Raised when a provider API call fails for any reason.

    Only the message text is meaningful to callers; it ends up as the
    badge status.
    """
    def __init__(self, message: str = "fetch failed"):
        self.message = message or "fetch failed"
        super().__init__(self.message)


class RenderError(BadgeError):
    """Raised when the renderer is given an unusable style or icon."""
    pass


class UnknownMetricError(BadgeError):
    """Raised when a route names a metric the provider does not serve."""
    def __init__(self, provider: str, request_type: str):
        self.provider = provider
        self.request_type = request_type
        super().__init__(f"unknown metric '{request_type}' for {provider}")
