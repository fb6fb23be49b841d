"""
Prompt Builder
Planner and explainer prompts rendered from the component registry.
"""

from uiplanner.core import safe_json_dumps
from uiplanner.plan import COMPONENT_REGISTRY, STRING_PROPS, ComponentKind, UIPlan, layout_variants

PLANNER_SYSTEM = """You plan user interfaces for a deterministic UI generator.
Use ONLY the components and props listed below. Do not invent components,
props, CSS classes or inline styles. Return a single JSON object and nothing
else: no markdown, no code fences, no explanations."""

EXPLAINER_SYSTEM = """Review the UI plan against the user's request.
In two or three sentences, explain why these components and this layout
were chosen, naming the components explicitly."""

# Prop shapes the registry cannot express on its own
_PROP_SHAPES = {
    "headers": "array of strings",
    "rows": "array of arrays of strings",
}


def describe_registry() -> str:
    """One block per component listing its props and allowed values."""
    blocks = []
    for kind, spec in COMPONENT_REGISTRY.items():
        lines = [f"{kind.value}:"]
        for prop in spec.allowed_props:
            allowed = spec.allowed_values.get(prop)
            if allowed:
                options = ", ".join(f'"{value}"' for value in allowed)
                lines.append(f"- {prop}: one of {options}")
            elif prop in STRING_PROPS:
                lines.append(f"- {prop}: string")
            else:
                lines.append(f"- {prop}: {_PROP_SHAPES.get(prop, 'JSON value')}")
        if kind is ComponentKind.TABLE:
            lines.append("- headers and rows are required")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def output_format() -> str:
    layouts = " | ".join(f'"{variant}"' for variant in layout_variants())
    return (
        "{\n"
        f'  "layout": {layouts},\n'
        '  "components": [{"type": "<Component>", "props": {...}, "children": [...]}]\n'
        "}"
    )


class PromptBuilder:
    """Builds completion prompts."""

    @staticmethod
    def build_planner(request: str, previous_plan: UIPlan | None = None) -> str:
        """
        Build the planner prompt.

        Args:
            request: User request, already validated
            previous_plan: Plan to modify rather than rewrite

        Returns:
            Complete prompt
        """
        parts = [
            PLANNER_SYSTEM,
            f"\n=== COMPONENTS ===\n{describe_registry()}",
            f"\n=== OUTPUT FORMAT ===\n{output_format()}",
        ]

        if previous_plan is not None:
            current = safe_json_dumps(previous_plan.to_payload(), indent=2)
            parts.append(f"\n=== CURRENT UI PLAN (modify instead of rewrite) ===\n{current}")
        else:
            parts.append("\n=== CURRENT UI PLAN ===\nNone. Create a new plan.")

        parts.append(f"\n=== REQUEST ===\n{request}")
        return "\n".join(parts)

    @staticmethod
    def build_explainer(request: str, plan: UIPlan) -> str:
        parts = [
            EXPLAINER_SYSTEM,
            f"\n=== REQUEST ===\n{request}",
            f"\n=== UI PLAN ===\n{safe_json_dumps(plan.to_payload(), indent=2)}",
        ]
        return "\n".join(parts)


__all__ = ["PromptBuilder", "describe_registry", "output_format"]
