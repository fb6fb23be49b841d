"""
UI Planner
Validates untrusted UI plans and renders them as deterministic React code.
"""

from uiplanner.core import (
    EmptyInput,
    MalformedResponse,
    PlanError,
    RequestRejected,
    SchemaViolation,
    UnknownKind,
)
from uiplanner.plan import (
    ComponentKind,
    PlanNode,
    PlanOutcome,
    UIPlan,
    ValidationResult,
    extract_plan,
    known_kinds,
    layout_variants,
    sanitize_props,
    spec_for,
    validate_plan,
)
from uiplanner.agents import Planner, generate_code

__version__ = "0.1.0"

__all__ = [
    "ComponentKind",
    "PlanNode",
    "UIPlan",
    "PlanOutcome",
    "ValidationResult",
    "spec_for",
    "known_kinds",
    "layout_variants",
    "validate_plan",
    "sanitize_props",
    "extract_plan",
    "generate_code",
    "Planner",
    "PlanError",
    "MalformedResponse",
    "EmptyInput",
    "SchemaViolation",
    "UnknownKind",
    "RequestRejected",
]
