"""
Tests for synthetic data, the simulation loop and reports.

Run with: python -m pytest tests/test_simulation.py -v
"""

from datetime import timedelta

import pytest

from analysis.reports import format_adjustment_result, format_plan, generate_simulation_report
from data.synthetic import generate_progress_history, generate_user_profiles
from plan_engine.adjuster import adjust_plan
from plan_engine.generator import generate_plan
from plan_engine.params import EngineParams
from plan_engine.profile import Goal, ProgressEntry
from simulation.engine import SimulationEngine, aggregate_results, results_to_frame


@pytest.fixture
def users():
    return generate_user_profiles(6, seed=42)


class TestSyntheticUsers:

    def test_count_and_archetypes(self, users):
        assert len(users) == 6
        assert [u.archetype for u in users] == [
            'steady_loser', 'steady_loser', 'steady_loser',
            'rapid_loser', 'rapid_loser', 'mass_gainer',
        ]
        assert users[0].profile.goal == Goal.LOSE_WEIGHT
        assert users[5].profile.goal == Goal.GAIN_MASS

    def test_seeded_generation_is_reproducible(self):
        first = [u.to_dict() for u in generate_user_profiles(4, seed=7)]
        second = [u.to_dict() for u in generate_user_profiles(4, seed=7)]
        assert first == second

    def test_profiles_within_validated_ranges(self):
        for user in generate_user_profiles(20, seed=3):
            profile = user.profile
            assert 13 <= profile.age <= 120
            assert 30 <= profile.weight_kg <= 300
            assert 100 <= profile.height_cm <= 250
            assert 0 <= user.logging_rate <= 1

    def test_progress_history(self, users, start):
        history = generate_progress_history(users[0], weeks=8, start=start, seed=1)
        assert history[0] == ProgressEntry(date=start, weight_kg=users[0].profile.weight_kg)
        assert 1 <= len(history) <= 9
        dates = [e.date for e in history]
        assert dates == sorted(dates)
        assert len(set(dates)) == len(dates)


class TestSimulationEngine:

    @pytest.fixture
    def results(self, users):
        return SimulationEngine().run_batch(users, num_weeks=8, seed=42)

    def test_one_result_per_user(self, results, users):
        assert len(results) == len(users)
        assert all(len(r.weeks) == 8 for r in results)

    def test_weekly_dates(self, results):
        weeks = results[0].weeks
        for previous, current in zip(weeks, weeks[1:]):
            assert current.date - previous.date == timedelta(weeks=1)

    def test_frequency_within_bounds(self, results):
        params = EngineParams()
        for result in results:
            for week in result.weeks:
                assert params.min_frequency <= week.weekly_frequency <= params.max_frequency

    def test_calories_positive(self, results):
        for result in results:
            assert all(week.calories_per_day > 0 for week in result.weeks)

    def test_frame(self, results):
        frame = results[0].to_frame()
        assert len(frame) == 8
        assert 'calories_per_day' in frame.columns
        assert frame.index.name == 'week'

    def test_trajectories(self, results):
        assert results[0].get_weight_trajectory().shape == (8,)
        assert results[0].get_calorie_trajectory().shape == (8,)

    def test_aggregate(self, results):
        agg = aggregate_results(results)
        assert agg['n_simulations'] == 6
        assert agg['total_regenerations'] >= 0
        assert 0 <= agg['pct_with_regeneration'] <= 100
        assert {row['archetype'] for row in agg['by_archetype']} == {
            'steady_loser', 'rapid_loser', 'mass_gainer'
        }
        assert len(results_to_frame(results)) == 6

    def test_progress_frame_holds_logged_entries(self, results):
        for result in results:
            frame = result.progress_frame()
            assert len(frame) == result.entries_logged == len(result.history)
            assert frame.index.is_monotonic_increasing
            assert frame['weight_kg'].iloc[0] == result.initial_weight_kg
            assert frame['exercise_sessions'].iloc[0] == 0

    def test_mean_sessions_logged(self, results):
        for result in results:
            weekly = result.history[1:]
            expected = (sum(e.exercise_sessions for e in weekly) / len(weekly)) if weekly else 0.0
            assert result.to_dict()['mean_sessions_logged'] == pytest.approx(expected)
            assert 0 <= result.mean_logged('exercise_sessions') <= EngineParams().max_frequency

    def test_aggregate_logged_sessions(self, results):
        agg = aggregate_results(results)
        expected = sum(r.mean_logged('exercise_sessions') for r in results) / len(results)
        assert agg['mean_sessions_logged'] == pytest.approx(expected)
        assert all('mean_sessions_logged' in row for row in agg['by_archetype'])

    def test_aggregate_empty(self):
        assert aggregate_results([]) == {}


class TestReports:

    def test_format_plan(self, loser_profile, rng, start):
        plan = generate_plan(loser_profile, rng=rng, now=start)
        text = format_plan(plan, now=start)
        assert plan.plan_id in text
        assert 'Breakfast' in text
        assert '2346 kcal' in text
        assert 'Monday' in text

    def test_format_adjustment_result(self, loser_profile, start):
        plan = generate_plan(loser_profile, now=start)
        history = [ProgressEntry(date=start, weight_kg=80),
                   ProgressEntry(date=start + timedelta(days=28), weight_kg=80)]
        result = adjust_plan(plan, loser_profile, history, None, now=start + timedelta(days=28))
        text = format_adjustment_result(result)
        assert result.message in text
        assert 'training.weekly_frequency' in text

    def test_simulation_report(self, users):
        results = SimulationEngine().run_batch(users[:2], num_weeks=4, seed=1)
        report = generate_simulation_report(results, EngineParams())
        assert 'Plan Adjustment Simulation Report' in report
        assert users[0].profile.name[:24] in report
        assert 'ENGINE PARAMETERS' in report
        assert 'Sessions per logged week' in report
