"""Plan Cache - lightweight wrapper around the generic LRU cache."""

from uiplanner.core import LRUCache, Stats, canonical_json, hash_fields
from uiplanner.plan import UIPlan


class PlanCache:
    """
    Type-safe LRU cache of accepted plans.

    Entries are keyed by the request together with the canonical form of
    the plan it modifies, so the same request against different plans
    never collides.
    """

    def __init__(self, max_size: int = 100, ttl_seconds: int = 3600) -> None:
        self._cache: LRUCache[UIPlan] = LRUCache(max_size=max_size, ttl_seconds=ttl_seconds)

    @staticmethod
    def key_for(request: str, previous_plan: UIPlan | None = None) -> str:
        previous = canonical_json(previous_plan.to_payload()) if previous_plan is not None else ""
        return hash_fields(request, previous)

    def get(self, request: str, previous_plan: UIPlan | None = None) -> UIPlan | None:
        return self._cache.get(self.key_for(request, previous_plan))

    def set(self, request: str, plan: UIPlan, previous_plan: UIPlan | None = None) -> None:
        self._cache.set(self.key_for(request, previous_plan), plan)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    @property
    def stats(self) -> Stats:
        return self._cache.stats


__all__ = ["PlanCache"]
