"""
FitPlan Engine: Stateful facade over generation, adjustment and storage.

The pure functions (generate_plan, adjust_plan) do the work; this class wires
them to an injected repository, random source and clock, and adds the
plan-lifecycle helpers the application screens need (expiry, stats, next
actions).
"""

import logging
import math
import random
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from .adjuster import AdjustmentResult, adjust_plan
from .generator import GOAL_LABELS, generate_plan
from .params import EngineParams
from .plans import GeneratedPlan, PlanStatus
from .profile import Goal, ProgressEntry, UserProfile
from .repository import InMemoryPlanRepository, PlanRepository

logger = logging.getLogger(__name__)


EXPIRING_SOON_DAYS = 7

ACTIONS_BY_PLAN_AGE: Dict[int, List[str]] = {
    0: ['Start following the plan today', 'Prepare a shopping list for the week'],
    1: ['Review how the first day went', 'Adjust meal times if needed'],
    3: ['First progress check', 'Adjust intensity if needed'],
    7: ['Full weekly review', 'Regenerate the plan if needed'],
}

ACTIONS_BY_GOAL: Dict[Goal, List[str]] = {
    Goal.LOSE_WEIGHT: ['Weigh yourself and log it in the app', 'Measure your waist and hips'],
    Goal.GAIN_MASS: ['Log the weights you lifted', 'Take progress photos'],
}


class FitPlanEngine:
    """
    Plan lifecycle manager.

    Holds no plan state of its own: the repository is the single source of
    truth, and each call loads, computes and saves.
    """

    def __init__(
        self,
        repository: Optional[PlanRepository] = None,
        params: Optional[EngineParams] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the engine.

        Args:
            repository: Plan storage (default: in-memory)
            params: Engine parameters (default: EngineParams())
            rng: Random source for food selection
            clock: Callable returning the current time
        """
        self.repository = repository if repository is not None else InMemoryPlanRepository()
        self.params = params or EngineParams()
        self.rng = rng or random.Random()
        self.clock = clock or datetime.now

    def generate_new_plan(self, profile: UserProfile) -> GeneratedPlan:
        """Generate and store a fresh plan."""
        plan = generate_plan(profile, rng=self.rng, now=self.clock(), params=self.params)
        self.repository.save(plan)
        return plan

    def regenerate_plan(self, profile: UserProfile) -> GeneratedPlan:
        """Replace the stored plan wholesale, e.g. after a profile change."""
        return self.generate_new_plan(profile)

    def load_existing_plan(self) -> Optional[GeneratedPlan]:
        """
        Load the stored plan.

        Expired plans are removed from storage and None is returned.
        """
        plan = self.repository.load()
        if plan is None:
            return None

        if plan.status(self.clock()) == PlanStatus.EXPIRED:
            logger.info("Plan %s expired on %s; clearing", plan.plan_id, plan.expires_at)
            self.repository.clear()
            return None

        return plan

    def adjust_automatically(
        self,
        profile: UserProfile,
        history: Sequence[ProgressEntry]
    ) -> Optional[AdjustmentResult]:
        """
        Adjust the stored plan from the progress log.

        Does nothing without a stored plan or with an empty log.
        """
        plan = self.load_existing_plan()
        if plan is None or not history:
            return None

        latest = max(history, key=lambda e: e.date)
        result = adjust_plan(
            plan, profile, history, latest,
            rng=self.rng, now=self.clock(), params=self.params
        )
        self.repository.save(result.plan)
        return result

    def remove_plan(self) -> None:
        self.repository.clear()

    def is_plan_expiring_soon(self, days: int = EXPIRING_SOON_DAYS) -> bool:
        plan = self.repository.load()
        if plan is None:
            return False
        return math.ceil(plan.days_until_expiry(self.clock())) <= days

    def get_plan_stats(self) -> Optional[Dict[str, Any]]:
        """Headline numbers for the stored plan."""
        plan = self.repository.load()
        if plan is None:
            return None

        diet, training = plan.diet, plan.training
        return {
            'diet': {
                'meal_count': len(diet.meals) if diet else 0,
                'calories_per_day': diet.calories_per_day if diet else 0,
                'duration_days': diet.duration_days if diet else 0,
            },
            'training': {
                'workout_count': len(training.workouts) if training else 0,
                'weekly_frequency': training.weekly_frequency if training else 0,
                'duration_weeks': training.duration_weeks if training else 0,
            },
            'next_review': plan.next_review.isoformat(),
            'expires_at': plan.expires_at.isoformat(),
        }

    def get_next_actions(self) -> List[str]:
        """Suggested next steps from plan age and goal."""
        plan = self.repository.load()
        if plan is None:
            return []

        age = math.floor(plan.age_days(self.clock()))
        actions = list(ACTIONS_BY_PLAN_AGE.get(age, []))

        for goal, goal_actions in ACTIONS_BY_GOAL.items():
            if plan.goal_label == GOAL_LABELS[goal]:
                actions.extend(goal_actions)

        return actions
