"""Planner Agent - request to validated plan via an opaque completion callable."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from uiplanner.core import (
    LogContext,
    MalformedResponse,
    RequestRejected,
    Settings,
    get_logger,
    get_settings,
    hash_string,
    safe_json_dumps,
)
from uiplanner.core.json import JSONParseError, validate_json_size
from uiplanner.monitoring import metrics_collector
from uiplanner.plan import PlanOutcome, UIPlan, extract_plan, validate_plan
from .generator import CodeGenerator
from .plan_cache import PlanCache
from .prompts import PromptBuilder

logger = get_logger(__name__)

Completer = Callable[[str], str]

INJECTION_SIGNALS = (
    "ignore previous",
    "disregard previous",
    "system prompt",
    "developer message",
    "override",
    "jailbreak",
    "act as",
    "bypass",
)


def is_prompt_injection(text: str) -> bool:
    lowered = text.lower()
    return any(signal in lowered for signal in INJECTION_SIGNALS)


class PlanRequest(BaseModel):
    """Validated planner request."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    message: str = Field(min_length=1)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str, info: ValidationInfo) -> str:
        """Strip, then enforce length and reject injection attempts."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Message cannot be empty")
        max_length = (info.context or {}).get("max_length")
        if max_length is not None and len(stripped) > max_length:
            raise ValueError(f"Message exceeds {max_length} characters")
        if is_prompt_injection(stripped):
            raise ValueError("Unsafe prompt detected")
        return stripped


class Planner:
    """
    Turns natural-language requests into validated plans.

    The completion callable is the only I/O; its exceptions propagate to
    the caller untouched.
    """

    def __init__(
        self,
        complete: Completer,
        cache: PlanCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.complete = complete
        self.settings = settings or get_settings()
        self.cache = cache
        self.generator = CodeGenerator(self.settings.import_path)

        logger.info("initialized", cache=cache is not None)

    def plan(self, request: str, previous_plan: UIPlan | None = None) -> PlanOutcome:
        """
        Produce a plan (or its validation errors) for a request.

        Raises:
            RequestRejected: If the request is empty, too long or unsafe
            MalformedResponse: If the completion holds no decodable JSON
        """
        with metrics_collector.measure_plan_request("rejected") as timer:
            message = self._check_request(request, previous_plan)

            with LogContext(request_id=hash_string(message, truncate=8)):
                if self.cache is not None:
                    cached = self.cache.get(message, previous_plan)
                    metrics_collector.record_cache_lookup(cached is not None)
                    if cached is not None:
                        timer.status = "cached"
                        logger.info("cache_hit")
                        return PlanOutcome.accepted(cached)

                prompt = PromptBuilder.build_planner(message, previous_plan)
                logger.info("plan_request", prompt_length=len(prompt), iterating=previous_plan is not None)

                timer.status = "completion_error"
                try:
                    raw_text = self.complete(prompt)
                except Exception as e:
                    logger.error("completion_failed", error=str(e))
                    raise

                timer.status = "malformed"
                candidate = self._extract(raw_text)

                validation = validate_plan(candidate)
                if not validation.is_valid:
                    timer.status = "invalid"
                    metrics_collector.record_validation_errors(len(validation.errors))
                    logger.warning("plan_invalid", errors=validation.errors)
                    return PlanOutcome.rejected(validation.errors)

                plan = UIPlan.model_validate(candidate)
                timer.status = "valid"
                logger.info(
                    "plan_valid",
                    components=len(plan.components),
                    duration_ms=timer.elapsed() * 1000,
                )

                if self.cache is not None:
                    self.cache.set(message, plan, previous_plan)

                return PlanOutcome.accepted(plan)

    def render(self, request: str, previous_plan: UIPlan | None = None) -> str:
        """Plan, then generate code; invalid plans render as a diagnostic."""
        outcome = self.plan(request, previous_plan)
        if outcome.plan is None:
            return self.generator.diagnostic(outcome.errors)
        return self.generator.generate(outcome.plan)

    def explain(self, request: str, plan: UIPlan) -> str:
        """Ask the completion service why a plan fits the request."""
        message = self._check_request(request, plan)
        prompt = PromptBuilder.build_explainer(message, plan)
        logger.info("explain_request", prompt_length=len(prompt))
        return self.complete(prompt).strip()

    def _check_request(self, request: Any, previous_plan: UIPlan | None) -> str:
        try:
            validated = PlanRequest.model_validate(
                {"message": request},
                context={"max_length": self.settings.max_request_length},
            )
        except PydanticValidationError as e:
            reason = e.errors()[0]["msg"] if e.errors() else str(e)
            logger.warning("request_rejected", reason=reason)
            raise RequestRejected(reason) from e

        if previous_plan is not None and is_prompt_injection(
            safe_json_dumps(previous_plan.to_payload())
        ):
            logger.warning("request_rejected", reason="unsafe previous plan")
            raise RequestRejected("Unsafe prompt detected in current plan")

        return validated.message

    def _extract(self, raw_text: Any) -> Any:
        if isinstance(raw_text, str):
            try:
                validate_json_size(raw_text, self.settings.max_response_size, "Planner response")
            except JSONParseError as e:
                logger.warning("response_too_large", error=str(e))
                raise MalformedResponse(str(e), e) from e
        return extract_plan(raw_text)


__all__ = ["Planner", "PlanRequest", "Completer", "is_prompt_injection", "INJECTION_SIGNALS"]
