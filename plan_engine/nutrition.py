"""
Nutrition Calculator: Energy expenditure and macronutrient targets.

Based on:
- Harris, J. A. & Benedict, F. G. (1918), revised by Roza & Shizgal (1984)
- Standard activity multipliers for Total Daily Energy Expenditure (TDEE)

These equations turn a user profile into a daily calorie target and a fixed
25/55/20 protein/carbohydrate/fat split.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

from .plans import Difficulty, MacroTargets
from .profile import ActivityLevel, Goal, Sex, UserProfile

logger = logging.getLogger(__name__)


# Calories per gram
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARB = 4
KCAL_PER_G_FAT = 9

# Share of calories per macro
PROTEIN_SHARE = 0.25
CARB_SHARE = 0.55
FAT_SHARE = 0.20

ACTIVITY_FACTORS: Dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.20,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.90,
}

GOAL_CALORIE_FACTORS: Dict[Goal, float] = {
    Goal.LOSE_WEIGHT: 0.85,   # 15% deficit
    Goal.GAIN_MASS: 1.15,     # 15% surplus
}

# Extra water on top of 35 ml/kg
HYDRATION_FACTORS: Dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.1,
    ActivityLevel.MODERATE: 1.2,
    ActivityLevel.ACTIVE: 1.3,
    ActivityLevel.VERY_ACTIVE: 1.4,
}

DIFFICULTY_BY_ACTIVITY: Dict[ActivityLevel, Difficulty] = {
    ActivityLevel.SEDENTARY: Difficulty.BEGINNER,
    ActivityLevel.LIGHT: Difficulty.BEGINNER,
    ActivityLevel.MODERATE: Difficulty.INTERMEDIATE,
    ActivityLevel.ACTIVE: Difficulty.INTERMEDIATE,
    ActivityLevel.VERY_ACTIVE: Difficulty.ADVANCED,
}

SUPPLEMENTS: Dict[Goal, List[str]] = {
    Goal.LOSE_WEIGHT: ['Multivitamin', 'Omega-3'],
    Goal.GAIN_MASS: ['Whey protein', 'Creatine', 'Multivitamin'],
    Goal.GAIN_STRENGTH: ['Creatine', 'Multivitamin', 'Omega-3'],
    Goal.MAINTAIN: ['Multivitamin'],
    Goal.IMPROVE_HEALTH: ['Multivitamin', 'Omega-3', 'Vitamin D'],
}

HYDRATION_BEVERAGES = ['Green tea', 'Coconut water', 'Fresh fruit juice']


@dataclass
class NutritionTargets:
    """Everything the diet plan needs from the calculator."""
    bmr: float
    tdee: float
    target_calories: float     # Unrounded; meal slots are split from this
    calories_per_day: int
    macros: MacroTargets


def calculate_bmr(profile: UserProfile) -> float:
    """
    Calculate Basal Metabolic Rate with the Harris-Benedict equation.

    male:   88.362 + 13.397 W + 4.799 H - 5.677 A
    female: 447.593 + 9.247 W + 3.098 H - 4.330 A

    Profiles that are neither male nor female use the female equation.

    Args:
        profile: User profile (weight kg, height cm, age years)

    Returns:
        BMR in kcal/day
    """
    if profile.sex == Sex.MALE:
        return (88.362 + 13.397 * profile.weight_kg
                + 4.799 * profile.height_cm - 5.677 * profile.age)
    return (447.593 + 9.247 * profile.weight_kg
            + 3.098 * profile.height_cm - 4.330 * profile.age)


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Apply the activity multiplier to BMR."""
    return bmr * ACTIVITY_FACTORS.get(activity_level, ACTIVITY_FACTORS[ActivityLevel.SEDENTARY])


def apply_goal_adjustment(tdee: float, goal: Goal) -> float:
    """Deficit for weight loss, surplus for mass gain, TDEE otherwise."""
    return tdee * GOAL_CALORIE_FACTORS.get(goal, 1.0)


def calculate_macros(calories: float) -> MacroTargets:
    """
    Split calories into macro grams using the fixed 25/55/20 ratio.

    Args:
        calories: Calories to split (daily total or a single meal)

    Returns:
        MacroTargets in whole grams
    """
    return MacroTargets(
        protein_g=round(calories * PROTEIN_SHARE / KCAL_PER_G_PROTEIN),
        carb_g=round(calories * CARB_SHARE / KCAL_PER_G_CARB),
        fat_g=round(calories * FAT_SHARE / KCAL_PER_G_FAT),
    )


def calculate_nutrition_targets(profile: UserProfile) -> NutritionTargets:
    """
    Derive the daily calorie target and macros for a profile.

    Args:
        profile: Pre-validated user profile

    Returns:
        NutritionTargets
    """
    bmr = calculate_bmr(profile)
    tdee = calculate_tdee(bmr, profile.activity_level)
    target = apply_goal_adjustment(tdee, profile.goal)

    logger.debug("BMR %.1f, TDEE %.1f, target %.1f kcal (%s)",
                 bmr, tdee, target, profile.goal.value)

    return NutritionTargets(
        bmr=bmr,
        tdee=tdee,
        target_calories=target,
        calories_per_day=round(target),
        macros=calculate_macros(target),
    )


def calculate_water_intake(weight_kg: float, activity_level: ActivityLevel) -> float:
    """Daily water target: 35 ml/kg scaled by activity, in liters (0.1 L steps)."""
    base_liters = weight_kg * 0.035
    return round(base_liters * HYDRATION_FACTORS.get(activity_level, 1.0), 1)


def supplements_for_goal(goal: Goal) -> List[str]:
    return list(SUPPLEMENTS.get(goal, ['Multivitamin']))


def difficulty_for_activity(activity_level: ActivityLevel) -> Difficulty:
    return DIFFICULTY_BY_ACTIVITY.get(activity_level, Difficulty.BEGINNER)


def diet_observations(profile: UserProfile) -> List[str]:
    """Free-text notes attached to the diet plan."""
    observations = []

    if profile.dietary_restrictions:
        restrictions = ', '.join(sorted(profile.dietary_restrictions))
        observations.append(f"Respect restrictions: {restrictions}")

    if any('vegetarian' in p.lower() for p in profile.preferences):
        observations.append("Focus on plant-based protein sources")

    observations.append("Drink water regularly throughout the day")
    observations.append("Chew your food well")
    observations.append("Avoid large meals close to bedtime")

    return observations
