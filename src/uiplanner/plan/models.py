"""Plan data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .registry import ComponentKind


class PlanNode(BaseModel):
    """One UI element in a plan tree."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: ComponentKind = Field(..., description="Whitelisted component kind")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list["PlanNode"] = Field(default_factory=list)

    @field_validator("props", mode="before")
    @classmethod
    def null_props_are_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class UIPlan(BaseModel):
    """Root of a validated plan."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    layout: str = Field(..., description="One of the layout variants")
    components: list[PlanNode]

    def to_payload(self) -> dict[str, Any]:
        """Plain JSON-compatible dict, kinds as strings."""
        return self.model_dump(mode="json")


PlanNode.model_rebuild()


class ViolationCode(str, Enum):
    """Category of a single validation failure."""

    NOT_AN_OBJECT = "not_an_object"
    INVALID_LAYOUT = "invalid_layout"
    NOT_AN_ARRAY = "not_an_array"
    UNKNOWN_KIND = "unknown_kind"
    PROP_NOT_ALLOWED = "prop_not_allowed"
    VALUE_NOT_ALLOWED = "value_not_allowed"
    NOT_A_STRING = "not_a_string"
    TABLE_SHAPE = "table_shape"
    TOO_DEEP = "too_deep"


class Violation(BaseModel):
    """A rule failure at a path such as ``components[0].props.size``."""

    model_config = ConfigDict(frozen=True)

    path: str
    message: str
    code: ViolationCode

    def __str__(self) -> str:
        return f"{self.path} {self.message}"


class ValidationResult(BaseModel):
    """Outcome of validating one candidate plan."""

    model_config = ConfigDict(frozen=True)

    violations: tuple[Violation, ...] = ()

    @computed_field(alias="isValid")  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.violations

    @computed_field  # type: ignore[prop-decorator]
    @property
    def errors(self) -> list[str]:
        return [str(v) for v in self.violations]

    @property
    def has_unknown_kind(self) -> bool:
        return any(v.code is ViolationCode.UNKNOWN_KIND for v in self.violations)


class PlanOutcome(BaseModel):
    """What the planner hands to the rendering layer: a plan or its errors."""

    model_config = ConfigDict(frozen=True)

    plan: UIPlan | None = None
    errors: list[str] = Field(default_factory=list)

    @computed_field(alias="isValid")  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return self.plan is not None and not self.errors

    @classmethod
    def accepted(cls, plan: UIPlan) -> "PlanOutcome":
        return cls(plan=plan)

    @classmethod
    def rejected(cls, errors: list[str]) -> "PlanOutcome":
        return cls(plan=None, errors=errors)

    def to_response(self) -> dict[str, Any]:
        """Serialize with camelCase keys for the rendering layer."""
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "PlanNode",
    "UIPlan",
    "ViolationCode",
    "Violation",
    "ValidationResult",
    "PlanOutcome",
]
