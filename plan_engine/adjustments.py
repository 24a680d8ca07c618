"""
Plan Adjustments: Typed changes the adjuster can make to a plan.

Each variant owns one concrete field of the plan and knows how to apply
itself, so there is no string-path lookup at apply time. field_path is kept
for display and for the serialized audit trail only.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from .meals import rescale_meals
from .nutrition import calculate_macros
from .plans import Difficulty, GeneratedPlan, Workout
from .profile import UserProfile
from .training import build_workout, goal_load, refresh_workout_totals, rest_days


class AdjustmentScope(Enum):
    DIET = "diet"
    TRAINING = "training"
    GENERAL = "general"


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return list(Priority).index(self)


class Adjustment:
    """
    Base for all adjustment variants.

    Subclasses are dataclasses carrying old_value, new_value, reason and
    priority, and implement apply().
    """
    scope: ClassVar[AdjustmentScope]
    field_path: ClassVar[str]

    old_value: Any
    new_value: Any
    reason: str
    priority: Priority

    def apply(self, plan: GeneratedPlan, profile: UserProfile) -> GeneratedPlan:
        """Apply to plan (already owned by the caller) and return the result."""
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': type(self).__name__,
            'scope': self.scope.value,
            'field': self.field_path,
            'old_value': _plain(self.old_value),
            'new_value': _plain(self.new_value),
            'reason': self.reason,
            'priority': self.priority.value,
        }


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _load_offset(workouts: List[Workout], profile: UserProfile) -> Tuple[int, int]:
    """(sets, reps) the current prescription adds over the base goal load."""
    for workout in workouts:
        if workout.exercises:
            base = goal_load(profile.goal)
            exercise = workout.exercises[0]
            return exercise.sets - base.sets, exercise.reps - base.reps
    return 0, 0


@dataclass
class CalorieTargetChange(Adjustment):
    """New daily calorie target; meal slots are rescaled to match."""
    old_value: int
    new_value: int
    reason: str
    priority: Priority = Priority.MEDIUM

    scope: ClassVar[AdjustmentScope] = AdjustmentScope.DIET
    field_path: ClassVar[str] = "diet.calories_per_day"

    def apply(self, plan: GeneratedPlan, profile: UserProfile) -> GeneratedPlan:
        if plan.diet is None:
            return plan
        plan.diet.calories_per_day = self.new_value
        plan.diet.macros = calculate_macros(self.new_value)
        plan.diet.meals = rescale_meals(plan.diet.meals, self.new_value)
        return plan


@dataclass
class HydrationChange(Adjustment):
    """New daily water target in liters."""
    old_value: float
    new_value: float
    reason: str
    priority: Priority = Priority.LOW

    scope: ClassVar[AdjustmentScope] = AdjustmentScope.DIET
    field_path: ClassVar[str] = "diet.hydration.liters"

    def apply(self, plan: GeneratedPlan, profile: UserProfile) -> GeneratedPlan:
        if plan.diet is None:
            return plan
        plan.diet.hydration.liters = self.new_value
        return plan


@dataclass
class FrequencyChange(Adjustment):
    """
    New weekly training frequency.

    Fewer days truncates the workout list; more days continues the
    strength -> cardio -> flexibility cycle so the list always matches.
    Added workouts carry the same set/rep offset over the goal load as
    the existing ones, so earlier difficulty changes hold for the week.
    """
    old_value: int
    new_value: int
    reason: str
    priority: Priority = Priority.MEDIUM

    scope: ClassVar[AdjustmentScope] = AdjustmentScope.TRAINING
    field_path: ClassVar[str] = "training.weekly_frequency"

    def apply(self, plan: GeneratedPlan, profile: UserProfile) -> GeneratedPlan:
        training = plan.training
        if training is None:
            return plan

        extra_sets, extra_reps = _load_offset(training.workouts, profile)
        workouts = training.workouts[:self.new_value]
        for index in range(len(workouts), self.new_value):
            workout = build_workout(index, profile.goal, profile.weight_kg)
            if extra_sets or extra_reps:
                for exercise in workout.exercises:
                    exercise.sets += extra_sets
                    exercise.reps += extra_reps
                refresh_workout_totals(workout, profile.weight_kg)
            workouts.append(workout)

        training.workouts = workouts
        training.weekly_frequency = len(workouts)
        training.rest.days = rest_days(len(workouts))
        return plan


@dataclass
class DifficultyChange(Adjustment):
    """
    New training difficulty.

    Advanced adds one set to every exercise; beginner adds two reps.
    """
    old_value: Difficulty
    new_value: Difficulty
    reason: str
    priority: Priority = Priority.MEDIUM

    scope: ClassVar[AdjustmentScope] = AdjustmentScope.TRAINING
    field_path: ClassVar[str] = "training.difficulty"

    def apply(self, plan: GeneratedPlan, profile: UserProfile) -> GeneratedPlan:
        training = plan.training
        if training is None:
            return plan

        training.difficulty = self.new_value
        for workout in training.workouts:
            for exercise in workout.exercises:
                if self.new_value == Difficulty.ADVANCED:
                    exercise.sets += 1
                elif self.new_value == Difficulty.BEGINNER:
                    exercise.reps += 2
            refresh_workout_totals(workout, profile.weight_kg)
        return plan


@dataclass
class PlanRegeneration(Adjustment):
    """The whole plan was discarded and generated again."""
    old_value: str                 # Previous plan id
    new_value: str                 # Replacement plan id
    reason: str
    priority: Priority = Priority.HIGH
    replacement: Optional[GeneratedPlan] = None

    scope: ClassVar[AdjustmentScope] = AdjustmentScope.GENERAL
    field_path: ClassVar[str] = "plan"

    def apply(self, plan: GeneratedPlan, profile: UserProfile) -> GeneratedPlan:
        if self.replacement is None:
            return plan
        return copy.deepcopy(self.replacement)


def apply_adjustments(
    plan: GeneratedPlan,
    adjustments: List[Adjustment],
    profile: UserProfile
) -> GeneratedPlan:
    """
    Apply adjustments in order to a copy of the plan.

    Args:
        plan: Current plan (not modified)
        adjustments: Adjustments to apply
        profile: Profile, used when workouts must be synthesized

    Returns:
        Adjusted copy of the plan
    """
    adjusted = copy.deepcopy(plan)
    for adjustment in adjustments:
        adjusted = adjustment.apply(adjusted, profile)
    return adjusted


def highest_priority(adjustments: List[Adjustment]) -> Optional[Priority]:
    if not adjustments:
        return None
    return max((a.priority for a in adjustments), key=lambda p: p.rank)
