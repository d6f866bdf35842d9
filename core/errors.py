"""Error types raised by the identifier codec and the services around it."""

from utils.timestamp import format_timestamp


class BaseTuidError(Exception):
    """Base error carrying a timestamp and diagnostic context."""

    def __init__(self, message, context=None):
        super().__init__(message)
        self.timestamp = format_timestamp()
        self.context = context or {}

    def to_dict(self):
        return {"error": type(self).__name__, "detail": str(self), "context": self.context}


class EncodingError(BaseTuidError):
    """An integer could not be represented as base-62 digits."""

    def __init__(self, message, value=None, **kwargs):
        context = kwargs.pop("context", {})
        if value is not None:
            context["value"] = value
        super().__init__(f"base 62 encoding error: {message}", context=context, **kwargs)


class DecodingError(BaseTuidError):
    """A string is not a base-62 number."""

    def __init__(self, message, text=None, digit=None, **kwargs):
        context = kwargs.pop("context", {})
        if text is not None:
            context["text"] = text
        if digit is not None:
            context["digit"] = digit
        super().__init__(f"base 62 decoding error: {message}", context=context, **kwargs)


class MintError(BaseTuidError):
    """Minting request outside the configured limits."""

    def __init__(self, message, count=None, **kwargs):
        context = kwargs.pop("context", {})
        if count is not None:
            context["count"] = count
        super().__init__(message, context=context, **kwargs)


class HealthCheckError(BaseTuidError):
    """Health check failures."""

    def __init__(self, message, component=None, **kwargs):
        context = kwargs.pop("context", {})
        if component:
            context["component"] = component
        super().__init__(message, context=context, **kwargs)
