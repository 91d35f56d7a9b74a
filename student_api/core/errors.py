"""Typed failures raised by the token service, the authenticator and the
record store. The HTTP layer maps each one to a status code; nothing in here
knows about HTTP beyond that number.
"""


class ConfigurationError(ValueError):
    """Startup configuration is missing or malformed."""


class StudentApiError(Exception):
    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    @classmethod
    def default_message(cls) -> str:
        return cls.__name__

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class AuthenticationFailed(StudentApiError):
    code = "AUTHENTICATION_FAILED"
    http_status = 401

    @classmethod
    def default_message(cls) -> str:
        return "Invalid credentials"


class TokenError(StudentApiError):
    http_status = 401


class InvalidToken(TokenError):
    code = "INVALID_TOKEN"

    @classmethod
    def default_message(cls) -> str:
        return "Invalid token"


class ExpiredToken(TokenError):
    code = "EXPIRED_TOKEN"

    @classmethod
    def default_message(cls) -> str:
        return "Token has expired"


class NotFound(StudentApiError):
    code = "NOT_FOUND"
    http_status = 404


class ValidationFailed(StudentApiError):
    code = "VALIDATION_FAILED"
    http_status = 400

    def __init__(self, message: str | None = None, details: list | None = None):
        super().__init__(message)
        self.details = details or []

    def to_response(self) -> dict:
        body = super().to_response()
        if self.details:
            body["error"]["details"] = self.details
        return body


class DuplicateRecord(ValidationFailed):
    code = "DUPLICATE_RECORD"
    http_status = 409


class StorageError(StudentApiError):
    code = "STORAGE_ERROR"
    http_status = 503

    @classmethod
    def default_message(cls) -> str:
        return "Storage backend unavailable"
