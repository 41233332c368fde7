class AIError(RuntimeError):
    """Base class for AI provider failures."""


class ConfigurationError(AIError):
    """A provider cannot be called because its configuration is incomplete."""


class ProviderCallFailed(AIError):
    def __init__(self, message: str, *, kind: str = "transport", status_code: int | None = None) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


class EmptyResponse(AIError):
    """The provider answered but the completion text was blank."""


class AllProvidersExhausted(AIError):
    def __init__(self, *, last_error: BaseException | None, attempts: int) -> None:
        self.last_error = last_error
        self.attempts = attempts
        reason = str(last_error).strip() if last_error is not None else ""
        message = "ai_all_providers_exhausted"
        if reason:
            message = f"{message}:{reason}"
        super().__init__(message)
