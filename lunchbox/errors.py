"""Errors raised by the AI client and the errors shown to the user."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class AIClientError(Exception):
    """Base class for everything `AIClient.fetch_suggestions` raises."""

    @property
    def user_message(self) -> str:
        return str(self)


class MissingCredential(AIClientError):
    def __init__(self, account: str = "") -> None:
        self.account = account
        super().__init__("No API key found. Please add your API key in Settings.")


class NetworkUnavailable(AIClientError):
    def __init__(self) -> None:
        super().__init__(
            "You appear to be offline. Please check your connection and try again."
        )


class HttpError(AIClientError):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request failed with status {status_code}: {body}")

    @property
    def user_message(self) -> str:
        if self.status_code == 401:
            return "Invalid API key. Please check your key in Settings."
        if self.status_code == 429:
            return "Rate limit reached. Please try again shortly."
        if 500 <= self.status_code <= 599:
            return "The AI service is temporarily unavailable. Please retry."
        return str(self)


class InvalidResponse(AIClientError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Unexpected response from AI. Please retry. ({detail})")


class InsufficientSuggestions(AIClientError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"Only {count} suggestion(s) returned; at least 3 are required. "
            "Please retry."
        )


class AppErrorKind(Enum):
    missing_api_key = "missing_api_key"
    network_unavailable = "network_unavailable"
    http_error = "http_error"
    insufficient_suggestions = "insufficient_suggestions"
    unknown = "unknown"


class AppError(BaseModel):
    """User-facing error state held by the suggestion orchestrator."""

    model_config = ConfigDict(frozen=True)

    kind: AppErrorKind
    detail: str = ""
    status_code: int | None = None

    @classmethod
    def missing_api_key(cls) -> "AppError":
        return cls(kind=AppErrorKind.missing_api_key)

    @classmethod
    def network_unavailable(cls) -> "AppError":
        return cls(kind=AppErrorKind.network_unavailable)

    @classmethod
    def http_error(cls, detail: str, status_code: int | None = None) -> "AppError":
        return cls(kind=AppErrorKind.http_error, detail=detail, status_code=status_code)

    @classmethod
    def insufficient_suggestions(cls) -> "AppError":
        return cls(kind=AppErrorKind.insufficient_suggestions)

    @classmethod
    def unknown(cls, detail: str) -> "AppError":
        return cls(kind=AppErrorKind.unknown, detail=detail)

    @classmethod
    def from_client_error(cls, error: AIClientError) -> "AppError":
        match error:
            case MissingCredential():
                return cls.missing_api_key()
            case NetworkUnavailable():
                return cls.network_unavailable()
            case HttpError(status_code=status_code):
                return cls.http_error(error.user_message, status_code=status_code)
            case InsufficientSuggestions():
                return cls.insufficient_suggestions()
            case InvalidResponse(detail=detail):
                return cls.unknown(detail)
            case _:
                return cls.unknown(str(error))

    @property
    def user_message(self) -> str:
        match self.kind:
            case AppErrorKind.missing_api_key:
                return "No API key found. Please add your API key in Settings."
            case AppErrorKind.network_unavailable:
                return (
                    "You appear to be offline. "
                    "Please check your connection and try again."
                )
            case AppErrorKind.http_error:
                return self.detail
            case AppErrorKind.insufficient_suggestions:
                return "Not enough suggestions were returned. Please try again."
            case _:
                return f"Something went wrong. Please try again. ({self.detail})"

    @property
    def points_to_settings(self) -> bool:
        """Missing keys and rejected keys both send the user to Settings."""
        return self.kind is AppErrorKind.missing_api_key or self.status_code == 401

    @property
    def offline(self) -> bool:
        return self.kind is AppErrorKind.network_unavailable

    @property
    def retryable(self) -> bool:
        if self.offline or self.points_to_settings:
            return False
        if self.kind is AppErrorKind.http_error:
            return self.status_code == 429 or (
                self.status_code is not None and 500 <= self.status_code <= 599
            )
        return True


class CredentialError(Exception):
    pass


class CredentialNotFound(CredentialError):
    def __init__(self, account: str) -> None:
        self.account = account
        super().__init__(f"No credential stored for {account!r}.")


class DuplicateCredential(CredentialError):
    def __init__(self, account: str) -> None:
        self.account = account
        super().__init__(f"A credential is already stored for {account!r}.")


class CredentialStoreError(CredentialError):
    pass
