"""Response Parser - pulls a JSON plan out of raw completion text."""

from typing import Any

from uiplanner.core import get_logger, MalformedResponse, EmptyInput
from uiplanner.core.json import decode_json, JSONParseError

logger = get_logger(__name__)


def extract_json_boundaries(text: str) -> tuple[int, int] | None:
    """
    Locate the span from the first ``{`` to the last ``}``.

    Handles prose or code fences wrapped around a JSON body. Braces inside
    the surrounding prose can shift the span; no attempt is made to balance
    them.

    Returns:
        (start, end) slice bounds, or None if no usable pair exists
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return (start, end + 1)


class ResponseParser:
    """Strict-then-lenient JSON extraction for planner completions."""

    def parse(self, raw_text: Any) -> Any:
        """
        Extract a JSON value from completion text.

        The result has unknown shape and must still be validated.

        Args:
            raw_text: Text returned by the completion service

        Returns:
            Decoded JSON value

        Raises:
            EmptyInput: If the text is empty after stripping
            MalformedResponse: If no JSON could be decoded
        """
        if not isinstance(raw_text, str):
            raise MalformedResponse(
                f"Planner response must be text, got {type(raw_text).__name__}."
            )

        cleaned = raw_text.strip()
        if not cleaned:
            logger.warning("empty_response")
            raise EmptyInput()

        try:
            return decode_json(cleaned)
        except JSONParseError as strict_error:
            logger.debug("strict_parse_failed", error=str(strict_error))

        boundaries = extract_json_boundaries(cleaned)
        if boundaries is None:
            logger.warning("no_json_found", preview=cleaned[:200])
            raise MalformedResponse("Planner response did not contain valid JSON.")

        start, end = boundaries
        try:
            return decode_json(cleaned[start:end])
        except JSONParseError as e:
            logger.warning("lenient_parse_failed", error=str(e), preview=cleaned[:200])
            raise MalformedResponse("Planner response did not contain valid JSON.", e) from e


def extract_plan(raw_text: Any) -> Any:
    """
    Convenience function to extract a candidate plan.

    Args:
        raw_text: Completion text

    Returns:
        Decoded JSON value, not yet validated
    """
    return ResponseParser().parse(raw_text)


__all__ = ["ResponseParser", "extract_plan", "extract_json_boundaries"]
