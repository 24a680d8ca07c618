"""
Tests for complete plan generation.

Run with: python -m pytest tests/test_generator.py -v
"""

import random
from datetime import timedelta

import pytest

from plan_engine.generator import GOAL_LABELS, generate_plan, generate_recommendations
from plan_engine.params import EngineParams
from plan_engine.plans import Difficulty, GeneratedPlan, PlanKind, PlanStatus
from plan_engine.profile import ActivityLevel, Goal, Sex, UserProfile


@pytest.fixture
def plan(loser_profile, rng, start):
    return generate_plan(loser_profile, rng=rng, now=start)


class TestGeneratePlan:
    """Envelope and sub-plans."""

    def test_envelope(self, plan, start):
        assert plan.kind == PlanKind.COMPLETE
        assert plan.goal_label == 'Weight Loss'
        assert plan.generated_at == start
        assert plan.expires_at == start + timedelta(days=30)
        assert plan.next_review == start + timedelta(days=7)
        assert plan.plan_id.startswith('plan-')

    def test_diet(self, plan):
        diet = plan.diet
        assert diet.calories_per_day == 2346
        assert len(diet.meals) == 5
        assert diet.hydration.liters == 3.2
        assert diet.supplements == ['Multivitamin', 'Omega-3']
        assert diet.difficulty == Difficulty.INTERMEDIATE
        assert diet.duration_days == 30

    def test_meal_total_tracks_daily_target(self, plan):
        assert abs(plan.diet.meal_calories_total - plan.diet.calories_per_day) <= 5

    def test_training(self, plan):
        training = plan.training
        assert training.weekly_frequency == 4
        assert len(training.workouts) == training.weekly_frequency
        assert training.rest.days == ['Friday', 'Saturday', 'Sunday']
        assert training.duration_weeks == 12

    def test_recommendations(self, plan):
        assert len(plan.recommendations) == 6
        assert plan.recommendations[0] == 'Keep a consistent calorie deficit'
        assert 'Sleep 7-9 hours per night' in plan.recommendations

    def test_status(self, plan, start):
        assert plan.status(start + timedelta(days=29)) == PlanStatus.ACTIVE
        assert plan.status(start + timedelta(days=31)) == PlanStatus.EXPIRED

    def test_unique_ids(self, loser_profile, start):
        first = generate_plan(loser_profile, now=start)
        second = generate_plan(loser_profile, now=start)
        assert first.plan_id != second.plan_id

    def test_seeded_generation_is_reproducible(self, loser_profile, start):
        first = generate_plan(loser_profile, rng=random.Random(11), now=start)
        second = generate_plan(loser_profile, rng=random.Random(11), now=start)
        assert [m.foods for m in first.diet.meals] == [m.foods for m in second.diet.meals]
        assert first.diet.calories_per_day == second.diet.calories_per_day

    def test_every_goal_generates(self, start):
        for goal in Goal:
            profile = UserProfile(age=35, weight_kg=70, height_cm=170,
                                  sex=Sex.FEMALE, activity_level=ActivityLevel.LIGHT, goal=goal)
            plan = generate_plan(profile, now=start)
            assert plan.goal_label == GOAL_LABELS[goal]
            assert len(plan.training.workouts) >= 3
            assert len(plan.recommendations) == 6

    def test_restrictions_respected(self, start):
        profile = UserProfile.create(30, 70, 170, dietary_restrictions=['fish', 'egg'])
        plan = generate_plan(profile, rng=random.Random(5), now=start)
        for meal in plan.diet.meals:
            for food in meal.foods:
                assert 'fish' not in food.lower()
                assert 'egg' not in food.lower()


# =============================================================================
# Properties across the validated input range
# =============================================================================

def plan_shape(plan):
    """Everything generation fixes deterministically (food picks excluded)."""
    return {
        'calories_per_day': plan.diet.calories_per_day,
        'macros': plan.diet.macros,
        'hydration': plan.diet.hydration.liters,
        'meals': [(m.name, m.time_of_day, m.calories) for m in plan.diet.meals],
        'weekly_frequency': plan.training.weekly_frequency,
        'difficulty': plan.training.difficulty,
        'workouts': [
            (w.day, w.category, [(e.name, e.sets, e.reps) for e in w.exercises])
            for w in plan.training.workouts
        ],
        'rest_days': plan.training.rest.days,
        'recommendations': plan.recommendations,
    }


class TestRangeCorners:
    """Targets stay positive at every corner of the accepted profile ranges."""

    @pytest.mark.parametrize("age", [13, 120])
    @pytest.mark.parametrize("weight_kg", [30, 300])
    @pytest.mark.parametrize("height_cm", [100, 250])
    @pytest.mark.parametrize("sex", [Sex.MALE, Sex.FEMALE])
    @pytest.mark.parametrize("activity_level", list(ActivityLevel))
    def test_targets_positive(self, age, weight_kg, height_cm, sex, activity_level, start):
        profile = UserProfile(age=age, weight_kg=weight_kg, height_cm=height_cm, sex=sex,
                              activity_level=activity_level, goal=Goal.LOSE_WEIGHT)
        diet = generate_plan(profile, rng=random.Random(0), now=start).diet

        assert diet.calories_per_day > 0
        assert diet.macros.protein_g > 0
        assert diet.macros.carb_g > 0
        assert diet.macros.fat_g > 0

    @pytest.mark.parametrize("goal", list(Goal))
    def test_smallest_profile_every_goal(self, goal, start):
        profile = UserProfile(age=120, weight_kg=30, height_cm=100, sex=Sex.MALE,
                              activity_level=ActivityLevel.SEDENTARY, goal=goal)
        diet = generate_plan(profile, now=start).diet
        assert diet.calories_per_day > 0
        assert min(diet.macros.protein_g, diet.macros.carb_g, diet.macros.fat_g) > 0


class TestUnseededIdempotence:
    """Two unseeded generations differ only in ids and food picks."""

    @pytest.mark.parametrize("goal", list(Goal))
    @pytest.mark.parametrize("activity_level", [ActivityLevel.SEDENTARY, ActivityLevel.VERY_ACTIVE])
    def test_same_shape(self, goal, activity_level, start):
        profile = UserProfile(age=40, weight_kg=82, height_cm=178, sex=Sex.FEMALE,
                              activity_level=activity_level, goal=goal)
        first = generate_plan(profile, now=start)
        second = generate_plan(profile, now=start)

        assert plan_shape(first) == plan_shape(second)
        assert [len(m.foods) for m in first.diet.meals] == [len(m.foods) for m in second.diet.meals]


class TestRecommendations:

    def test_cap(self, loser_profile):
        params = EngineParams(max_recommendations=4)
        assert len(generate_recommendations(loser_profile, params)) == 4


class TestSerialization:
    """Plans survive a dict round trip."""

    def test_round_trip(self, plan):
        restored = GeneratedPlan.from_dict(plan.to_dict())
        assert restored == plan

    def test_dict_is_plain(self, plan):
        d = plan.to_dict()
        assert d['kind'] == 'complete'
        assert isinstance(d['generated_at'], str)
        assert d['training']['workouts'][0]['category'] == 'strength'
