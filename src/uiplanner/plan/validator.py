"""Plan Validator - whitelist checks over an untrusted candidate plan."""

from typing import Any

from returns.result import Result, Success, Failure

from uiplanner.core import get_logger, SchemaViolation, UnknownKind
from .models import UIPlan, ValidationResult, Violation, ViolationCode
from .registry import ComponentKind, STRING_PROPS, layout_variants, parse_kind, COMPONENT_REGISTRY

logger = get_logger(__name__)

# Deepest node level accepted; top-level components sit at level 1.
# Must stay below pydantic's recursion limit for UIPlan/PlanNode.
MAX_DEPTH = 64


class PlanValidator:
    """
    Walks a candidate plan and records every rule violation.

    The walk is depth-first and pre-order, driven by an explicit stack so
    that deeply nested input cannot exhaust the interpreter's recursion
    limit. A node that is not an object, whose type is not whitelisted, or
    that sits deeper than MAX_DEPTH is reported once and its subtree is
    skipped.
    """

    def __init__(self) -> None:
        self._violations: list[Violation] = []

    def validate(self, candidate: Any) -> ValidationResult:
        self._violations = []

        if not isinstance(candidate, dict):
            self._add("Plan", "must be an object.", ViolationCode.NOT_AN_OBJECT)
            return self._result()

        layout = candidate.get("layout")
        variants = layout_variants()
        if not isinstance(layout, str) or layout not in variants:
            self._add(
                "Plan.layout",
                f"must be one of: {', '.join(variants)}.",
                ViolationCode.INVALID_LAYOUT,
            )

        components = candidate.get("components")
        if not isinstance(components, list):
            self._add("Plan.components", "must be an array.", ViolationCode.NOT_AN_ARRAY)
            return self._result()

        stack = [(node, f"components[{i}]", 1) for i, node in enumerate(components)]
        stack.reverse()
        while stack:
            node, path, depth = stack.pop()
            if depth > MAX_DEPTH:
                self._add(
                    path,
                    f"must not be nested more than {MAX_DEPTH} levels deep.",
                    ViolationCode.TOO_DEEP,
                )
                continue
            children = self._check_node(node, path)
            stack.extend(
                (child, f"{path}.children[{j}]", depth + 1)
                for j, child in reversed(list(enumerate(children)))
            )

        return self._result()

    def _check_node(self, node: Any, path: str) -> list[Any]:
        """Check one node; returns the children to visit next."""
        if not isinstance(node, dict):
            self._add(path, "must be an object.", ViolationCode.NOT_AN_OBJECT)
            return []

        kind = parse_kind(node.get("type"))
        if kind is None:
            self._add(f"{path}.type", "must be a whitelisted component.", ViolationCode.UNKNOWN_KIND)
            return []

        props = node.get("props")
        if props is None:
            props = {}
        if isinstance(props, dict):
            self._check_props(kind, props, path)
        else:
            self._add(f"{path}.props", "must be an object when provided.", ViolationCode.NOT_AN_OBJECT)

        if "children" not in node:
            return []
        children = node["children"]
        if not isinstance(children, list):
            self._add(
                f"{path}.children", "must be an array when provided.", ViolationCode.NOT_AN_ARRAY
            )
            return []
        return children

    def _check_props(self, kind: ComponentKind, props: dict[str, Any], path: str) -> None:
        spec = COMPONENT_REGISTRY[kind]

        for key in props:
            if not spec.allows(key):
                self._add(
                    f"{path}.props.{key}",
                    f"is not allowed for {kind.value}.",
                    ViolationCode.PROP_NOT_ALLOWED,
                )

        for prop, allowed in spec.allowed_values.items():
            value = props.get(prop)
            if isinstance(value, str) and value not in allowed:
                self._add(
                    f"{path}.props.{prop}",
                    f"must be one of: {', '.join(allowed)}.",
                    ViolationCode.VALUE_NOT_ALLOWED,
                )

        for key, value in props.items():
            if key in STRING_PROPS and not isinstance(value, str):
                self._add(f"{path}.props.{key}", "must be a string.", ViolationCode.NOT_A_STRING)

        if kind is ComponentKind.TABLE:
            if not _is_string_list(props.get("headers")):
                self._add(
                    f"{path}.props.headers",
                    "must be an array of strings.",
                    ViolationCode.TABLE_SHAPE,
                )
            rows = props.get("rows")
            if not (isinstance(rows, list) and all(_is_string_list(row) for row in rows)):
                self._add(
                    f"{path}.props.rows",
                    "must be an array of string arrays.",
                    ViolationCode.TABLE_SHAPE,
                )

    def _add(self, path: str, message: str, code: ViolationCode) -> None:
        self._violations.append(Violation(path=path, message=message, code=code))

    def _result(self) -> ValidationResult:
        result = ValidationResult(violations=tuple(self._violations))
        logger.debug("plan_validated", errors=len(result.violations))
        return result


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def validate_plan(candidate: Any) -> ValidationResult:
    """
    Validate an untrusted plan candidate.

    Never raises: malformed input of any shape yields errors, not exceptions.

    Args:
        candidate: Decoded JSON value of unknown shape

    Returns:
        ValidationResult listing every violation in tree order
    """
    return PlanValidator().validate(candidate)


def ensure_valid_plan(candidate: Any) -> UIPlan:
    """
    Validate and build a UIPlan.

    Raises:
        UnknownKind: If any node references a kind outside the registry
        SchemaViolation: If any other rule fails
    """
    result = validate_plan(candidate)
    if not result.is_valid:
        error_cls = UnknownKind if result.has_unknown_kind else SchemaViolation
        raise error_cls(result.errors)
    return UIPlan.model_validate(candidate)


def check_plan(candidate: Any) -> Result[UIPlan, SchemaViolation]:
    """Validate a candidate plan (Result pattern version)."""
    try:
        return Success(ensure_valid_plan(candidate))
    except SchemaViolation as e:
        return Failure(e)


__all__ = ["MAX_DEPTH", "PlanValidator", "validate_plan", "ensure_valid_plan", "check_plan"]
