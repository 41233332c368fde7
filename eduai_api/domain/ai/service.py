import logging
import time
from threading import BoundedSemaphore
from typing import Any, Callable, Sequence

from eduai_api.domain.ai.errors import (
    AllProvidersExhausted,
    ConfigurationError,
    EmptyResponse,
    ProviderCallFailed,
)
from eduai_api.domain.ai.providers.base import CallOutcome, ProviderConfig
from eduai_api.domain.ai.providers.common import parse_json_text


logger = logging.getLogger(__name__)

DEFAULT_RETRY_DELAYS_MS = (1000, 2000, 4000)


class AIService:
    """Calls the configured providers in order until one returns text.

    Each provider gets ``max_retries`` attempts with a fixed delay between
    them. A provider that is not configured is skipped without consuming its
    retry budget. When the whole list is exhausted the last call failure is
    attached to :class:`AllProvidersExhausted`; a configuration error is
    attached only when no provider could be called at all.

    The concurrency limit covers provider calls only, so a request waiting
    out a backoff delay does not hold a slot.
    """

    def __init__(
        self,
        *,
        providers: Sequence[ProviderConfig],
        retry_delays_ms: Sequence[int] = DEFAULT_RETRY_DELAYS_MS,
        max_concurrency: int = 4,
        acquire_timeout_ms: int = 200,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not providers:
            raise ConfigurationError("ai_providers_missing")

        delays = tuple(max(0, int(delay)) for delay in retry_delays_ms)
        longest = max(config.max_retries for config in providers)
        if len(delays) < longest - 1:
            raise ValueError(f"retry_delays_too_short:{len(delays)}<{longest - 1}")

        self.providers = tuple(providers)
        self.retry_delays_ms = delays
        self._sleep = sleep
        self._semaphore = BoundedSemaphore(value=max(1, int(max_concurrency)))
        self._acquire_timeout_sec = max(0.01, int(acquire_timeout_ms) / 1000)

    def call_ai_model(
        self,
        prompt: str,
        system_prompt: str = "",
        json_mode: bool = False,
        use_search: bool = False,
    ) -> str:
        return self._run_sequence(prompt, system_prompt, json_mode, use_search)

    def generate_json(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        use_search: bool = False,
    ) -> dict[str, Any]:
        text = self.call_ai_model(user_prompt, system_prompt, json_mode=True, use_search=use_search)
        return parse_json_text(text)

    def _run_sequence(self, prompt: str, system_prompt: str, json_mode: bool, use_search: bool) -> str:
        last_error: BaseException | None = None
        last_config_error: BaseException | None = None
        calls = 0

        for config in self.providers:
            for attempt in range(config.max_retries):
                outcome = self._attempt(config, prompt, system_prompt, json_mode, use_search)
                if outcome.failure_kind == "config":
                    last_config_error = outcome.error
                    logger.warning("Provider %s skipped: %s", config.name, outcome.failure)
                    break

                calls += 1
                if outcome.ok:
                    if calls > 1:
                        logger.info("Provider %s answered on attempt %d", config.name, attempt + 1)
                    return outcome.text

                last_error = outcome.error
                logger.warning(
                    "Provider %s attempt %d/%d failed (%s): %s",
                    config.name,
                    attempt + 1,
                    config.max_retries,
                    outcome.failure_kind,
                    outcome.failure,
                )
                if attempt < config.max_retries - 1:
                    self._sleep(self._delay_for(attempt) / 1000)

        # 설정 누락은 실제 호출 실패가 하나도 없을 때만 원인으로 보고한다.
        if last_error is None:
            last_error = last_config_error
        logger.error("All AI providers failed after %d calls", calls)
        raise AllProvidersExhausted(last_error=last_error, attempts=calls)

    def _attempt(
        self,
        config: ProviderConfig,
        prompt: str,
        system_prompt: str,
        json_mode: bool,
        use_search: bool,
    ) -> CallOutcome:
        # 슬롯은 호출 동안에만 잡는다. 백오프 대기 중인 요청은 슬롯을 차지하지 않는다.
        acquired = self._semaphore.acquire(timeout=self._acquire_timeout_sec)
        if not acquired:
            raise ProviderCallFailed("ai_backpressure_busy", kind="backpressure")
        try:
            text = config.provider.complete(
                prompt=prompt,
                system_prompt=system_prompt,
                json_mode=json_mode,
                use_search=use_search,
            )
        except ConfigurationError as exc:
            return CallOutcome.failed("config", str(exc), exc)
        except ProviderCallFailed as exc:
            return CallOutcome.failed(exc.kind, str(exc), exc)
        except Exception as exc:
            return CallOutcome.failed("error", str(exc) or type(exc).__name__, exc)
        finally:
            self._semaphore.release()

        if not isinstance(text, str) or not text.strip():
            reason = f"{config.name}_empty_response"
            return CallOutcome.failed("empty_response", reason, EmptyResponse(reason))
        return CallOutcome.success(text)

    def _delay_for(self, attempt: int) -> int:
        if not self.retry_delays_ms:
            return 0
        return self.retry_delays_ms[min(attempt, len(self.retry_delays_ms) - 1)]
