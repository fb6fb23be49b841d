"""Prop Sanitizer - projects untrusted props onto the registry whitelist."""

from collections.abc import Mapping
from typing import Any

from .registry import spec_for


def sanitize_props(kind: Any, props: Any) -> dict[str, Any]:
    """
    Keep only the props a component kind allows.

    Safe on raw untrusted input: unknown kinds and non-mapping props give
    an empty dict. Keys come out in registry order with values untouched.

    Args:
        kind: Component kind (enum member or raw string)
        props: Props mapping, possibly None

    Returns:
        New dict holding the allowed subset
    """
    spec = spec_for(kind)
    if spec is None or not isinstance(props, Mapping):
        return {}
    return {key: props[key] for key in spec.allowed_props if key in props}


__all__ = ["sanitize_props"]
