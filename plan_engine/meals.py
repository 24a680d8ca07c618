"""
Meal Composer: Daily calorie distribution across fixed meal slots.

Each slot receives a fixed share of the day's calories; its macros are
re-derived from the slot's own calories with the same 25/55/20 split rather
than carved out of the daily macro totals. Foods are drawn at random from a
reference list, skipping anything that matches a dietary restriction.
"""

import logging
import random
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from .nutrition import calculate_macros
from .plans import MealCategory, MealSlot

logger = logging.getLogger(__name__)


FOOD_CATALOG: Dict[str, List[str]] = {
    'protein': [
        'Grilled chicken', 'Baked fish', 'Eggs', 'Tofu', 'Chickpeas', 'Lentils',
        'Quinoa', 'Oats', 'Greek yogurt', 'Cottage cheese', 'Tuna', 'Salmon',
    ],
    'carb': [
        'Brown rice', 'Sweet potato', 'Whole wheat bread', 'Whole wheat pasta', 'Beans',
        'Fruit', 'Vegetables', 'Corn', 'Peas', 'Carrot', 'Beetroot',
    ],
    'fat': [
        'Avocado', 'Nuts', 'Olive oil', 'Chia seeds', 'Flaxseeds',
        'Coconut', 'Dark chocolate', 'Oily fish', 'Whole milk yogurt',
    ],
}

# (name, category, share of daily calories, time of day)
MEAL_DISTRIBUTION: List[Tuple[str, MealCategory, float, str]] = [
    ('Breakfast', MealCategory.BREAKFAST, 0.25, '08:00'),
    ('Morning snack', MealCategory.SNACK, 0.15, '10:30'),
    ('Lunch', MealCategory.LUNCH, 0.30, '12:30'),
    ('Afternoon snack', MealCategory.SNACK, 0.15, '16:00'),
    ('Dinner', MealCategory.DINNER, 0.15, '19:30'),
]

PREPARATION: Dict[MealCategory, str] = {
    MealCategory.BREAKFAST: 'Quick, nutritious preparation to start the day',
    MealCategory.SNACK: 'Practical, healthy option between meals',
    MealCategory.LUNCH: 'Main meal with balanced nutrition',
    MealCategory.DINNER: 'Light, nutritious meal to end the day',
    MealCategory.SUPPER: 'Light option before sleep',
}

PREP_MINUTES: Dict[MealCategory, int] = {
    MealCategory.BREAKFAST: 15,
    MealCategory.SNACK: 10,
    MealCategory.LUNCH: 30,
    MealCategory.DINNER: 25,
    MealCategory.SUPPER: 10,
}


def filter_foods(foods: Iterable[str], restrictions: Iterable[str]) -> List[str]:
    """Drop foods whose name contains any restricted term (case-insensitive)."""
    terms = [r.lower() for r in restrictions if r]
    return [food for food in foods if not any(term in food.lower() for term in terms)]


def select_foods(
    restrictions: Iterable[str],
    rng: Optional[random.Random] = None
) -> List[str]:
    """
    Pick one food per macro category, honoring dietary restrictions.

    A category whose every food is restricted contributes nothing.

    Args:
        restrictions: Restricted terms from the profile
        rng: Random source (seed it for reproducible plans)

    Returns:
        Up to three food names (protein, carb, fat order)
    """
    rng = rng or random.Random()
    restrictions = list(restrictions)
    selected = []

    for category in ('protein', 'carb', 'fat'):
        allowed = filter_foods(FOOD_CATALOG[category], restrictions)
        if allowed:
            selected.append(rng.choice(allowed))
        else:
            logger.debug("No %s food left after restrictions %s", category, restrictions)

    return selected


def compose_meals(
    daily_calories: float,
    restrictions: Iterable[str] = (),
    rng: Optional[random.Random] = None
) -> List[MealSlot]:
    """
    Distribute daily calories over the five meal slots.

    Args:
        daily_calories: Daily target (unrounded is fine)
        restrictions: Restricted food terms
        rng: Random source for food selection

    Returns:
        Ordered list of MealSlot
    """
    rng = rng or random.Random()
    restrictions = list(restrictions)
    meals = []

    for index, (name, category, share, time_of_day) in enumerate(MEAL_DISTRIBUTION):
        calories = round(daily_calories * share)
        macros = calculate_macros(calories)

        meals.append(MealSlot(
            slot_id=f"meal-{index + 1}",
            name=name,
            category=category,
            time_of_day=time_of_day,
            calories=calories,
            protein_g=macros.protein_g,
            carb_g=macros.carb_g,
            fat_g=macros.fat_g,
            foods=select_foods(restrictions, rng),
            preparation=PREPARATION.get(category, 'Healthy, balanced preparation'),
            prep_minutes=PREP_MINUTES.get(category, 20),
        ))

    return meals


def rescale_meals(meals: List[MealSlot], new_total: float) -> List[MealSlot]:
    """
    Rescale meal calories proportionally to a new daily total.

    Macros are recomputed from each slot's new calories with the fixed split.
    When the current total is zero there is nothing to scale: the meals are
    returned unchanged and a warning is logged.

    Args:
        meals: Current meal slots (not modified)
        new_total: New daily calorie target

    Returns:
        New list of MealSlot
    """
    current_total = sum(meal.calories for meal in meals)
    if current_total == 0:
        logger.warning("Meal calories total 0; skipping rescale to %s kcal", new_total)
        return [replace(meal, foods=list(meal.foods)) for meal in meals]

    ratio = new_total / current_total
    rescaled = []
    for meal in meals:
        scaled = meal.calories * ratio
        macros = calculate_macros(scaled)
        rescaled.append(replace(
            meal,
            calories=round(scaled),
            protein_g=macros.protein_g,
            carb_g=macros.carb_g,
            fat_g=macros.fat_g,
            foods=list(meal.foods),
        ))

    return rescaled
