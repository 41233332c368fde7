from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class TextProvider(Protocol):
    """LLM provider contract that returns the raw completion text."""

    def complete(
        self,
        *,
        prompt: str,
        system_prompt: str,
        json_mode: bool,
        use_search: bool,
    ) -> str:
        ...


class ProviderKind(str, Enum):
    PRIMARY = "primary"
    FAST_A = "fast_a"
    FAST_B = "fast_b"
    FAST_C = "fast_c"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class ProviderConfig:
    kind: ProviderKind
    name: str
    provider: TextProvider
    max_retries: int = 3

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError(f"max_retries_must_be_positive:{self.name}")


@dataclass(frozen=True)
class CallOutcome:
    """Result of a single provider attempt: text on success, reason on failure."""

    text: str = ""
    failure: str = ""
    failure_kind: str = ""
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return not self.failure_kind

    @classmethod
    def success(cls, text: str) -> "CallOutcome":
        return cls(text=text)

    @classmethod
    def failed(cls, kind: str, reason: str, error: BaseException | None = None) -> "CallOutcome":
        return cls(failure=reason, failure_kind=kind, error=error)
