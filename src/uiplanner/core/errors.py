"""Error taxonomy for plan extraction, validation and planning."""


class PlanError(Exception):
    """Base class for every error raised by the planner core."""

    pass


class MalformedResponse(PlanError):
    """No JSON plan could be located in a completion."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class EmptyInput(MalformedResponse):
    """Completion text was empty after stripping."""

    def __init__(self, message: str = "Planner response was empty.") -> None:
        super().__init__(message)


class SchemaViolation(PlanError):
    """
    Candidate plan broke one or more schema rules.

    Carries the full ordered error list, never just the first entry.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        count = len(self.errors)
        summary = self.errors[0] if count == 1 else f"{count} schema violations"
        super().__init__(f"Plan failed validation: {summary}")


class UnknownKind(SchemaViolation):
    """At least one node used a component kind outside the registry."""

    pass


class RequestRejected(PlanError):
    """User request was refused before reaching the completion service."""

    pass


__all__ = [
    "PlanError",
    "MalformedResponse",
    "EmptyInput",
    "SchemaViolation",
    "UnknownKind",
    "RequestRejected",
]
