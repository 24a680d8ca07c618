"""
Plan Generator: Builds a complete diet + training plan from a profile.

Orchestrates the nutrition calculator, meal composer and training scheduler,
stamps the validity window and attaches recommendations. Output is
deterministic except for food selection, which is deterministic too when a
seeded random source is passed in.
"""

import logging
import random
import uuid
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from .meals import compose_meals
from .nutrition import (
    HYDRATION_BEVERAGES,
    calculate_nutrition_targets,
    calculate_water_intake,
    diet_observations,
    difficulty_for_activity,
    supplements_for_goal,
)
from .params import DEFAULT_PARAMS, EngineParams
from .plans import (
    DietPlan,
    GeneratedPlan,
    Hydration,
    PlanKind,
    ProgressionPolicy,
    RestSchedule,
    TrainingPlan,
)
from .profile import Goal, UserProfile
from .training import rest_days, rest_recommendations, schedule_workouts

logger = logging.getLogger(__name__)


GOAL_LABELS: Dict[Goal, str] = {
    Goal.LOSE_WEIGHT: 'Weight Loss',
    Goal.GAIN_MASS: 'Muscle Mass Gain',
    Goal.MAINTAIN: 'Weight Maintenance',
    Goal.IMPROVE_HEALTH: 'Health Improvement',
    Goal.GAIN_STRENGTH: 'Strength Gain',
}

GOAL_TIPS: Dict[Goal, List[str]] = {
    Goal.LOSE_WEIGHT: [
        'Keep a consistent calorie deficit',
        'Combine cardio with strength training',
        'Track your progress weekly',
    ],
    Goal.GAIN_MASS: [
        'Eat protein at every meal',
        'Increase the weights gradually',
        'Rest well between workouts',
    ],
    Goal.GAIN_STRENGTH: [
        'Focus on technique before adding weight',
        'Keep a training log',
        'Include compound exercises',
    ],
    Goal.MAINTAIN: [
        'Keep your calorie intake close to your daily target',
        'Mix strength, cardio and mobility work',
        'Weigh in weekly to catch drift early',
    ],
    Goal.IMPROVE_HEALTH: [
        'Favor whole, minimally processed foods',
        'Move a little every day',
        'Build habits you can sustain',
    ],
}

UNIVERSAL_TIPS = [
    'Stay hydrated throughout the day',
    'Sleep 7-9 hours per night',
    'Adjust the plan as needed',
]


def goal_label(goal: Goal) -> str:
    return GOAL_LABELS.get(goal, goal.value.replace('_', ' ').title())


def generate_recommendations(profile: UserProfile, params: EngineParams = DEFAULT_PARAMS) -> List[str]:
    """Three goal-specific tips followed by the universal ones."""
    recommendations = list(GOAL_TIPS.get(profile.goal, []))
    recommendations.extend(UNIVERSAL_TIPS)
    return recommendations[:params.max_recommendations]


def generate_diet_plan(profile: UserProfile, rng: Optional[random.Random] = None) -> DietPlan:
    """Diet half of the plan."""
    targets = calculate_nutrition_targets(profile)
    label = goal_label(profile.goal)

    return DietPlan(
        plan_id=f"diet-{uuid.uuid4().hex[:12]}",
        name=f"Diet Plan - {label}",
        goal_label=label,
        calories_per_day=targets.calories_per_day,
        macros=targets.macros,
        meals=compose_meals(targets.target_calories, profile.dietary_restrictions, rng),
        hydration=Hydration(
            liters=calculate_water_intake(profile.weight_kg, profile.activity_level),
            beverages=list(HYDRATION_BEVERAGES),
        ),
        supplements=supplements_for_goal(profile.goal),
        observations=diet_observations(profile),
        duration_days=30,
        difficulty=difficulty_for_activity(profile.activity_level),
    )


def generate_training_plan(profile: UserProfile) -> TrainingPlan:
    """Training half of the plan."""
    workouts = schedule_workouts(profile.goal, profile.activity_level, profile.weight_kg)
    label = goal_label(profile.goal)

    return TrainingPlan(
        plan_id=f"training-{uuid.uuid4().hex[:12]}",
        name=f"Training Plan - {label}",
        goal_label=label,
        weekly_frequency=len(workouts),
        workouts=workouts,
        rest=RestSchedule(
            days=rest_days(len(workouts)),
            recommendations=rest_recommendations(profile.goal),
        ),
        progression=ProgressionPolicy(),
        duration_weeks=12,
        difficulty=difficulty_for_activity(profile.activity_level),
    )


def generate_plan(
    profile: UserProfile,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    params: EngineParams = DEFAULT_PARAMS
) -> GeneratedPlan:
    """
    Generate a complete plan for a profile.

    Args:
        profile: Pre-validated user profile
        rng: Random source for food selection
        now: Generation timestamp (default: current time)
        params: Engine parameters (validity window, recommendation cap)

    Returns:
        GeneratedPlan with both diet and training sub-plans
    """
    now = now or datetime.now()
    rng = rng or random.Random()

    plan = GeneratedPlan(
        plan_id=f"plan-{uuid.uuid4().hex[:12]}",
        kind=PlanKind.COMPLETE,
        goal_label=goal_label(profile.goal),
        generated_at=now,
        expires_at=now + timedelta(days=params.validity_days),
        next_review=now + timedelta(days=params.review_interval_days),
        diet=generate_diet_plan(profile, rng),
        training=generate_training_plan(profile),
        recommendations=generate_recommendations(profile, params),
    )

    logger.info("Generated plan %s (%s): %d kcal/day, %d workouts/week",
                plan.plan_id, plan.goal_label, plan.diet.calories_per_day,
                plan.training.weekly_frequency)

    return plan
