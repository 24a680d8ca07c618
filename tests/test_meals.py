"""
Tests for meal composition and rescaling.

Run with: python -m pytest tests/test_meals.py -v
"""

import logging
import random

from plan_engine.meals import (
    FOOD_CATALOG,
    compose_meals,
    filter_foods,
    rescale_meals,
    select_foods,
)
from plan_engine.plans import MealCategory


class TestComposeMeals:
    """Fixed slot distribution."""

    def test_five_slots_in_order(self, rng):
        meals = compose_meals(2000, rng=rng)
        assert [m.name for m in meals] == [
            'Breakfast', 'Morning snack', 'Lunch', 'Afternoon snack', 'Dinner'
        ]
        assert [m.slot_id for m in meals] == ['meal-1', 'meal-2', 'meal-3', 'meal-4', 'meal-5']
        assert [m.time_of_day for m in meals] == ['08:00', '10:30', '12:30', '16:00', '19:30']

    def test_calorie_shares(self, rng):
        meals = compose_meals(2000, rng=rng)
        assert [m.calories for m in meals] == [500, 300, 600, 300, 300]
        assert sum(m.calories for m in meals) == 2000

    def test_slot_macros_from_slot_calories(self, rng):
        breakfast = compose_meals(2000, rng=rng)[0]
        assert (breakfast.protein_g, breakfast.carb_g, breakfast.fat_g) == (31, 69, 11)

    def test_categories(self, rng):
        meals = compose_meals(2000, rng=rng)
        assert meals[0].category == MealCategory.BREAKFAST
        assert meals[1].category == MealCategory.SNACK
        assert meals[2].category == MealCategory.LUNCH
        assert meals[4].category == MealCategory.DINNER

    def test_unrounded_total_within_rounding(self, rng):
        meals = compose_meals(2346.078, rng=rng)
        assert abs(sum(m.calories for m in meals) - 2346) <= 5

    def test_one_food_per_macro_category(self, rng):
        for meal in compose_meals(1800, rng=rng):
            assert len(meal.foods) == 3
            assert meal.foods[0] in FOOD_CATALOG['protein']
            assert meal.foods[1] in FOOD_CATALOG['carb']
            assert meal.foods[2] in FOOD_CATALOG['fat']

    def test_seeded_selection_is_reproducible(self):
        first = compose_meals(2000, rng=random.Random(7))
        second = compose_meals(2000, rng=random.Random(7))
        assert [m.foods for m in first] == [m.foods for m in second]


class TestFoodSelection:
    """Dietary restriction filtering."""

    def test_filter_is_case_insensitive_substring(self):
        foods = ['Grilled chicken', 'Baked fish', 'Tofu']
        assert filter_foods(foods, ['CHICKEN']) == ['Baked fish', 'Tofu']

    def test_empty_restriction_ignored(self):
        foods = ['Eggs', 'Tofu']
        assert filter_foods(foods, ['']) == foods

    def test_restricted_foods_never_selected(self):
        rng = random.Random(3)
        for _ in range(50):
            for food in select_foods(['fish', 'chicken', 'yogurt'], rng):
                assert 'fish' not in food.lower()
                assert 'chicken' not in food.lower()
                assert 'yogurt' not in food.lower()

    def test_fully_restricted_category_skipped(self, rng):
        foods = select_foods(FOOD_CATALOG['fat'], rng)
        assert len(foods) == 2
        assert not any(f in FOOD_CATALOG['fat'] for f in foods)


class TestRescaleMeals:
    """Proportional rescaling."""

    def test_rescale_to_new_total(self, rng):
        meals = compose_meals(2000, rng=rng)
        rescaled = rescale_meals(meals, 1900)
        assert [m.calories for m in rescaled] == [475, 285, 570, 285, 285]
        assert sum(m.calories for m in rescaled) == 1900

    def test_macros_recomputed(self, rng):
        rescaled = rescale_meals(compose_meals(2000, rng=rng), 1600)
        lunch = rescaled[2]
        assert lunch.calories == 480
        assert (lunch.protein_g, lunch.carb_g, lunch.fat_g) == (30, 66, 11)

    def test_input_not_modified(self, rng):
        meals = compose_meals(2000, rng=rng)
        rescale_meals(meals, 2500)
        assert sum(m.calories for m in meals) == 2000

    def test_foods_and_ids_preserved(self, rng):
        meals = compose_meals(2000, rng=rng)
        rescaled = rescale_meals(meals, 2200)
        assert [m.foods for m in rescaled] == [m.foods for m in meals]
        assert [m.slot_id for m in rescaled] == [m.slot_id for m in meals]

    def test_zero_total_is_noop_with_warning(self, rng, caplog):
        meals = compose_meals(0, rng=rng)
        with caplog.at_level(logging.WARNING, logger='plan_engine.meals'):
            rescaled = rescale_meals(meals, 2000)
        assert [m.calories for m in rescaled] == [0, 0, 0, 0, 0]
        assert rescaled[0] is not meals[0]
        assert 'skipping rescale' in caplog.text
