"""
Plan schema
Registry, validation, sanitization and parsing of UI plans.
"""

from .registry import (
    ComponentKind,
    ComponentSpec,
    COMPONENT_REGISTRY,
    STRING_PROPS,
    parse_kind,
    spec_for,
    known_kinds,
    layout_variants,
)
from .models import PlanNode, UIPlan, Violation, ViolationCode, ValidationResult, PlanOutcome
from .validator import MAX_DEPTH, PlanValidator, validate_plan, ensure_valid_plan, check_plan
from .sanitizer import sanitize_props
from .parser import ResponseParser, extract_plan

__all__ = [
    "ComponentKind",
    "ComponentSpec",
    "COMPONENT_REGISTRY",
    "STRING_PROPS",
    "parse_kind",
    "spec_for",
    "known_kinds",
    "layout_variants",
    "PlanNode",
    "UIPlan",
    "Violation",
    "ViolationCode",
    "ValidationResult",
    "PlanOutcome",
    "MAX_DEPTH",
    "PlanValidator",
    "validate_plan",
    "ensure_valid_plan",
    "check_plan",
    "sanitize_props",
    "ResponseParser",
    "extract_plan",
]
