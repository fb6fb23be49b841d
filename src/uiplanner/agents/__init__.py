"""Agents that turn requests into plans and plans into code."""

from .generator import CodeGenerator, generate_code
from .plan_cache import PlanCache
from .planner import Planner, PlanRequest, Completer
from .prompts import PromptBuilder

__all__ = [
    "CodeGenerator",
    "generate_code",
    "PlanCache",
    "Planner",
    "PlanRequest",
    "Completer",
    "PromptBuilder",
]
