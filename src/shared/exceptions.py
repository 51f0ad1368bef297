"""Exception taxonomy raised by domain and application code.

Every error carries an HTTP status so the API layer can translate it without
knowing which bounded context raised it. ``messages`` follows the
``{"field": ["message", ...]}`` shape used for validation failures.
"""


class VairanyaError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, messages: dict | str | None = None):
        if messages is None:
            messages = {"_entity": [self.default_message]}
        elif isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)

    @property
    def message(self) -> str:
        """The first message, used as the human readable ``error`` string."""
        for values in self.messages.values():
            if isinstance(values, (list, tuple)) and values:
                return str(values[0])
            if values:
                return str(values)
        return self.default_message


class ValidationError(VairanyaError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(VairanyaError):
    status_code = 401
    default_message = "Unauthorized"


class PermissionDenied(VairanyaError):
    status_code = 403
    default_message = "Forbidden"


class ObjectNotFoundError(VairanyaError):
    status_code = 404
    default_message = "Not found"


class ConflictError(VairanyaError):
    status_code = 409
    default_message = "Already exists"


class RateLimitExceeded(VairanyaError):
    status_code = 429
    default_message = "Too many requests. Please try again later."


class ConfigurationError(VairanyaError):
    status_code = 500
    default_message = "Server configuration error"


class PaymentGatewayError(VairanyaError):
    status_code = 502
    default_message = "Failed to create order"
