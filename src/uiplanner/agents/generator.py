"""Code Generator - deterministic React source from a validated plan."""

from collections.abc import Mapping
from typing import Any

from uiplanner.core import get_logger, safe_json_dumps
from uiplanner.monitoring import metrics_collector
from uiplanner.plan import COMPONENT_REGISTRY, UIPlan, sanitize_props, validate_plan

logger = get_logger(__name__)

DEFAULT_IMPORT_PATH = "@/components/lib"
INDENT = "  "

# Fixed stand-in emitted for plans that fail validation
INVALID_PLAN_BODY = """export default function GeneratedUI() {
  return <div>Invalid UI plan.</div>;
}"""


class CodeGenerator:
    """
    Serializes plans into a React module.

    Output depends only on the plan: props are sanitized again at render
    time and written in registry order, children in input order.
    """

    def __init__(self, import_path: str = DEFAULT_IMPORT_PATH) -> None:
        self.import_path = import_path

    def generate(self, plan: UIPlan | Mapping[str, Any]) -> str:
        payload = plan.to_payload() if isinstance(plan, UIPlan) else plan

        validation = validate_plan(payload)
        if not validation.is_valid:
            logger.warning("generate_invalid_plan", errors=len(validation.errors))
            metrics_collector.record_generation("diagnostic")
            return self.diagnostic(validation.errors)

        body = self._render_tree(payload["components"], depth=3)
        kinds = ", ".join(kind.value for kind in COMPONENT_REGISTRY)
        lines = [
            "import React from 'react';",
            f"import {{ {kinds} }} from '{self.import_path}';",
            "",
            "export default function GeneratedUI() {",
            "  return (",
            f'    <Layout type="{payload["layout"]}">',
            *body,
            "    </Layout>",
            "  );",
            "}",
        ]
        metrics_collector.record_generation("rendered")
        return "\n".join(lines)

    @staticmethod
    def diagnostic(errors: list[str]) -> str:
        """Placeholder module listing why a plan was refused."""
        listing = "\n".join(errors)
        return f"/* Invalid UI plan:\n{listing} */\n\n{INVALID_PLAN_BODY}"

    def _render_tree(self, components: list[Any], depth: int) -> list[str]:
        lines: list[str] = []
        # Entries are (node, depth) to open, or (closing tag, depth) to close
        stack: list[tuple[Any, int]] = [(node, depth) for node in reversed(components)]

        while stack:
            item, level = stack.pop()
            pad = INDENT * level
            if isinstance(item, str):
                lines.append(f"{pad}{item}")
                continue

            kind = item["type"]
            tag = self._open_tag(kind, item.get("props"))
            children = item.get("children") or []
            if not children:
                lines.append(f"{pad}<{tag} />")
                continue

            lines.append(f"{pad}<{tag}>")
            stack.append((f"</{kind}>", level))
            stack.extend((child, level + 1) for child in reversed(children))

        return lines

    @staticmethod
    def _open_tag(kind: str, props: Any) -> str:
        safe = sanitize_props(kind, props)
        attrs = " ".join(f"{key}={{{safe_json_dumps(value)}}}" for key, value in safe.items())
        return f"{kind} {attrs}" if attrs else kind


def generate_code(plan: UIPlan | Mapping[str, Any], import_path: str = DEFAULT_IMPORT_PATH) -> str:
    """
    Render a plan as React source.

    Invalid plans produce a diagnostic module instead of partial output.

    Args:
        plan: Validated UIPlan, or a raw plan mapping
        import_path: Module the components are imported from

    Returns:
        Source text
    """
    return CodeGenerator(import_path).generate(plan)


__all__ = ["CodeGenerator", "generate_code", "DEFAULT_IMPORT_PATH"]
