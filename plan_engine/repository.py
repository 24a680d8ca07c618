"""
Plan Repository: Storage seam for the current plan.

The engine never touches storage directly. Callers inject something with
load/save/clear; the in-memory implementation stores serialized plans so
every load hands back an independent copy.
"""

from typing import Any, Dict, Optional, Protocol

from .plans import GeneratedPlan


class PlanRepository(Protocol):
    def load(self) -> Optional[GeneratedPlan]:
        ...

    def save(self, plan: GeneratedPlan) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryPlanRepository:
    """Single-slot repository holding the plan as a plain dictionary."""

    def __init__(self, plan: Optional[GeneratedPlan] = None):
        self._stored: Optional[Dict[str, Any]] = None
        if plan is not None:
            self.save(plan)

    def load(self) -> Optional[GeneratedPlan]:
        if self._stored is None:
            return None
        return GeneratedPlan.from_dict(self._stored)

    def save(self, plan: GeneratedPlan) -> None:
        self._stored = plan.to_dict()

    def clear(self) -> None:
        self._stored = None

    @property
    def has_plan(self) -> bool:
        return self._stored is not None
