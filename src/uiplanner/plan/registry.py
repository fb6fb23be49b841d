"""
Component Registry
Closed whitelist of component kinds, their props and enumerated prop values.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ComponentKind(str, Enum):
    """Every component a plan may reference."""

    BUTTON = "Button"
    CARD = "Card"
    INPUT = "Input"
    TABLE = "Table"
    LAYOUT = "Layout"


@dataclass(frozen=True)
class ComponentSpec:
    """Allowed props for one component kind."""

    allowed_props: tuple[str, ...]
    allowed_values: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        stray = [prop for prop in self.allowed_values if prop not in self.allowed_props]
        if stray:
            raise ValueError(f"Enumerated props missing from allowed_props: {', '.join(stray)}")
        object.__setattr__(self, "allowed_values", MappingProxyType(dict(self.allowed_values)))

    def allows(self, prop: str) -> bool:
        return prop in self.allowed_props


COMPONENT_REGISTRY: Mapping[ComponentKind, ComponentSpec] = MappingProxyType({
    ComponentKind.BUTTON: ComponentSpec(
        allowed_props=("label", "variant", "size"),
        allowed_values={
            "variant": ("primary", "secondary", "outline"),
            "size": ("sm", "md", "lg"),
        },
    ),
    ComponentKind.CARD: ComponentSpec(
        allowed_props=("title", "description", "content"),
    ),
    ComponentKind.INPUT: ComponentSpec(
        allowed_props=("label", "placeholder", "type"),
        allowed_values={
            "type": ("text", "email", "password", "number", "search", "tel", "url"),
        },
    ),
    ComponentKind.TABLE: ComponentSpec(
        allowed_props=("headers", "rows", "caption"),
    ),
    ComponentKind.LAYOUT: ComponentSpec(
        allowed_props=("type",),
        allowed_values={
            "type": ("grid", "flex", "sidebar-layout"),
        },
    ),
})

# Props that must hold text wherever they appear, regardless of kind
STRING_PROPS: frozenset[str] = frozenset(
    {"label", "placeholder", "title", "description", "content", "caption"}
)


def parse_kind(value: Any) -> ComponentKind | None:
    """Map a raw ``type`` value to a ComponentKind, or None if not whitelisted."""
    if isinstance(value, ComponentKind):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ComponentKind(value)
    except ValueError:
        return None


def spec_for(kind: Any) -> ComponentSpec | None:
    """Return the spec for a kind; None signals an unknown kind."""
    parsed = parse_kind(kind)
    if parsed is None:
        return None
    return COMPONENT_REGISTRY[parsed]


def known_kinds() -> frozenset[str]:
    return frozenset(kind.value for kind in COMPONENT_REGISTRY)


def layout_variants() -> tuple[str, ...]:
    """Root layout variants, in declaration order."""
    return COMPONENT_REGISTRY[ComponentKind.LAYOUT].allowed_values["type"]


__all__ = [
    "ComponentKind",
    "ComponentSpec",
    "COMPONENT_REGISTRY",
    "STRING_PROPS",
    "parse_kind",
    "spec_for",
    "known_kinds",
    "layout_variants",
]
