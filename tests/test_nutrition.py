"""
Tests for the nutrition calculator and profile parsing.

Run with: python -m pytest tests/test_nutrition.py -v
"""

import pytest

from plan_engine.nutrition import (
    calculate_bmr,
    calculate_macros,
    calculate_nutrition_targets,
    calculate_tdee,
    calculate_water_intake,
    diet_observations,
    difficulty_for_activity,
)
from plan_engine.plans import Difficulty
from plan_engine.profile import ActivityLevel, Goal, Sex, UserProfile


# =============================================================================
# BMR / TDEE
# =============================================================================

class TestBMR:
    """Harris-Benedict BMR."""

    def test_male_equation(self, loser_profile):
        """88.362 + 13.397*75.5 + 4.799*175 - 5.677*28."""
        assert calculate_bmr(loser_profile) == pytest.approx(1780.7045)

    def test_female_equation(self):
        profile = UserProfile(age=30, weight_kg=60, height_cm=165, sex=Sex.FEMALE)
        assert calculate_bmr(profile) == pytest.approx(1383.683)

    def test_other_uses_female_equation(self):
        female = UserProfile(age=30, weight_kg=60, height_cm=165, sex=Sex.FEMALE)
        other = UserProfile(age=30, weight_kg=60, height_cm=165, sex=Sex.OTHER)
        assert calculate_bmr(other) == calculate_bmr(female)

    def test_bmr_decreases_with_age(self):
        young = UserProfile(age=25, weight_kg=70, height_cm=175, sex=Sex.MALE)
        old = UserProfile(age=65, weight_kg=70, height_cm=175, sex=Sex.MALE)
        assert calculate_bmr(old) < calculate_bmr(young)


class TestTDEE:
    """Activity multipliers."""

    @pytest.mark.parametrize("level,factor", [
        (ActivityLevel.SEDENTARY, 1.2),
        (ActivityLevel.LIGHT, 1.375),
        (ActivityLevel.MODERATE, 1.55),
        (ActivityLevel.ACTIVE, 1.725),
        (ActivityLevel.VERY_ACTIVE, 1.9),
    ])
    def test_activity_factor(self, level, factor):
        assert calculate_tdee(1000.0, level) == pytest.approx(1000.0 * factor)


# =============================================================================
# Targets and macros
# =============================================================================

class TestNutritionTargets:
    """Goal adjustment and rounding."""

    def test_weight_loss_deficit(self, loser_profile):
        targets = calculate_nutrition_targets(loser_profile)
        assert targets.tdee == pytest.approx(2760.0920, abs=1e-3)
        assert targets.target_calories == pytest.approx(2346.0782, abs=1e-3)
        assert targets.calories_per_day == 2346

    def test_macros_from_unrounded_target(self, loser_profile):
        macros = calculate_nutrition_targets(loser_profile).macros
        assert (macros.protein_g, macros.carb_g, macros.fat_g) == (147, 323, 52)

    def test_mass_gain_surplus(self, gainer_profile):
        targets = calculate_nutrition_targets(gainer_profile)
        assert targets.target_calories == pytest.approx(targets.tdee * 1.15)

    @pytest.mark.parametrize("goal", [Goal.MAINTAIN, Goal.IMPROVE_HEALTH, Goal.GAIN_STRENGTH])
    def test_other_goals_use_tdee(self, goal):
        profile = UserProfile(age=40, weight_kg=70, height_cm=170, sex=Sex.FEMALE, goal=goal)
        targets = calculate_nutrition_targets(profile)
        assert targets.calories_per_day == round(targets.tdee)


class TestMacros:
    """Fixed 25/55/20 split."""

    def test_split_for_2000_kcal(self):
        macros = calculate_macros(2000)
        assert macros.protein_g == 125
        assert macros.carb_g == 275
        assert macros.fat_g == 44

    def test_macro_energy_matches_calories(self):
        """Macro kcal stay within rounding of the input."""
        for calories in (1200, 1850, 2346, 3100):
            macros = calculate_macros(calories)
            energy = macros.protein_g * 4 + macros.carb_g * 4 + macros.fat_g * 9
            assert abs(energy - calories) <= 10


# =============================================================================
# Hydration, difficulty, observations
# =============================================================================

class TestHydration:

    def test_moderate_activity(self):
        """75.5 kg * 35 ml * 1.2 = 3.17 L."""
        assert calculate_water_intake(75.5, ActivityLevel.MODERATE) == 3.2

    def test_sedentary(self):
        assert calculate_water_intake(80, ActivityLevel.SEDENTARY) == 2.8

    def test_more_activity_more_water(self):
        low = calculate_water_intake(70, ActivityLevel.LIGHT)
        high = calculate_water_intake(70, ActivityLevel.VERY_ACTIVE)
        assert high > low


class TestDifficulty:

    @pytest.mark.parametrize("level,expected", [
        (ActivityLevel.SEDENTARY, Difficulty.BEGINNER),
        (ActivityLevel.LIGHT, Difficulty.BEGINNER),
        (ActivityLevel.MODERATE, Difficulty.INTERMEDIATE),
        (ActivityLevel.ACTIVE, Difficulty.INTERMEDIATE),
        (ActivityLevel.VERY_ACTIVE, Difficulty.ADVANCED),
    ])
    def test_difficulty_by_activity(self, level, expected):
        assert difficulty_for_activity(level) == expected

    def test_next_level_caps_at_advanced(self):
        assert Difficulty.BEGINNER.next_level() == Difficulty.INTERMEDIATE
        assert Difficulty.ADVANCED.next_level() == Difficulty.ADVANCED


class TestObservations:

    def test_restrictions_listed(self):
        profile = UserProfile.create(30, 70, 170, dietary_restrictions=['nuts', 'lactose'])
        notes = diet_observations(profile)
        assert notes[0] == 'Respect restrictions: lactose, nuts'

    def test_vegetarian_preference(self):
        profile = UserProfile.create(30, 70, 170, preferences=['Vegetarian meals'])
        assert 'Focus on plant-based protein sources' in diet_observations(profile)

    def test_universal_notes_only(self):
        profile = UserProfile.create(30, 70, 170)
        assert len(diet_observations(profile)) == 3


# =============================================================================
# Profile parsing
# =============================================================================

class TestProfileParsing:
    """Loose enum input resolves with documented fallbacks."""

    def test_parse_by_value_and_name(self):
        assert Goal.parse('lose_weight') == Goal.LOSE_WEIGHT
        assert Goal.parse('Lose-Weight') == Goal.LOSE_WEIGHT
        assert ActivityLevel.parse('very active') == ActivityLevel.VERY_ACTIVE
        assert Sex.parse(Sex.MALE) == Sex.MALE

    def test_unknown_values_fall_back(self):
        assert Goal.parse('get_shredded') == Goal.MAINTAIN
        assert ActivityLevel.parse(None) == ActivityLevel.SEDENTARY
        assert Sex.parse('unknown') == Sex.OTHER

    @pytest.mark.parametrize("enum_cls,default", [
        (Sex, Sex.OTHER),
        (ActivityLevel, ActivityLevel.SEDENTARY),
        (Goal, Goal.MAINTAIN),
    ])
    def test_default_is_a_member_not_a_value(self, enum_cls, default):
        assert enum_cls._DEFAULT is default
        assert '_DEFAULT' not in enum_cls.__members__
        assert enum_cls.parse(42) is default

    def test_create_resolves_enums(self):
        profile = UserProfile.create(30, 70, 170, sex='female', activity_level='light', goal='gain_mass')
        assert profile.sex == Sex.FEMALE
        assert profile.activity_level == ActivityLevel.LIGHT
        assert profile.goal == Goal.GAIN_MASS
        assert profile.dietary_restrictions == frozenset()

    def test_bmi(self):
        profile = UserProfile(age=30, weight_kg=80, height_cm=200)
        assert profile.bmi == pytest.approx(20.0)

    @pytest.mark.parametrize("label,expected", [
        ('masculino', Sex.MALE),
        ('feminino', Sex.FEMALE),
        ('outro', Sex.OTHER),
        ('sedentario', ActivityLevel.SEDENTARY),
        ('sedentário', ActivityLevel.SEDENTARY),
        ('leve', ActivityLevel.LIGHT),
        ('moderado', ActivityLevel.MODERATE),
        ('ativo', ActivityLevel.ACTIVE),
        ('muito-ativo', ActivityLevel.VERY_ACTIVE),
        ('perder-peso', Goal.LOSE_WEIGHT),
        ('ganhar-massa', Goal.GAIN_MASS),
        ('manter-peso', Goal.MAINTAIN),
        ('melhorar-saude', Goal.IMPROVE_HEALTH),
        ('ganhar-forca', Goal.GAIN_STRENGTH),
        ('Ganhar Força', Goal.GAIN_STRENGTH),
    ])
    def test_app_labels(self, label, expected):
        assert type(expected).parse(label) == expected

    def test_alias_of_another_enum_falls_back(self):
        assert Goal.parse('moderado') == Goal.MAINTAIN
        assert Sex.parse('perder-peso') == Sex.OTHER

    def test_app_labels_drive_calorie_target(self):
        profile = UserProfile.create(28, 75.5, 175, sex='masculino',
                                     activity_level='moderado', goal='perder-peso')
        assert (profile.sex, profile.activity_level, profile.goal) == (
            Sex.MALE, ActivityLevel.MODERATE, Goal.LOSE_WEIGHT)
        assert calculate_nutrition_targets(profile).calories_per_day == 2346
