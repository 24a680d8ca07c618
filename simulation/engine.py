"""
Simulation Engine: Week-by-week run of the plan lifecycle.

Simulates how a plan evolves for a synthetic user: a plan is generated at
week 0, the user logs (or skips) a weekly weigh-in, and the plan engine
tunes or regenerates the plan at every weekly review.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import List, Optional, Dict, Any

import numpy as np
import pandas as pd

from plan_engine.engine import FitPlanEngine
from plan_engine.params import EngineParams
from plan_engine.plans import GeneratedPlan
from plan_engine.profile import ProgressEntry
from plan_engine.progress import history_to_frame
from data.synthetic import SimulatedUser, generate_progress_entry

logger = logging.getLogger(__name__)


DEFAULT_START = datetime(2025, 1, 6, 8, 0)


@dataclass
class WeeklySnapshot:
    """State of the plan after one weekly review."""
    week: int
    date: datetime
    true_weight_kg: float             # Underlying weight
    logged_weight_kg: Optional[float] # None when the user skipped logging
    calories_per_day: int
    hydration_liters: float
    weekly_frequency: int
    difficulty: str
    consistency: float
    adherence: float
    adjustments: List[str] = field(default_factory=list)
    regenerated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'week': self.week,
            'date': self.date.isoformat(),
            'true_weight_kg': self.true_weight_kg,
            'logged_weight_kg': self.logged_weight_kg,
            'calories_per_day': self.calories_per_day,
            'hydration_liters': self.hydration_liters,
            'weekly_frequency': self.weekly_frequency,
            'difficulty': self.difficulty,
            'consistency': self.consistency,
            'adherence': self.adherence,
            'adjustment_count': len(self.adjustments),
            'adjustments': ', '.join(self.adjustments),
            'regenerated': self.regenerated,
        }


@dataclass
class SimulationResult:
    """Complete results from one simulation run."""
    user_id: str
    user_name: str
    archetype: str
    goal: str
    weeks: List[WeeklySnapshot]

    # Summary metrics
    initial_weight_kg: float
    final_weight_kg: float
    initial_calories: int
    final_calories: int
    initial_frequency: int
    final_frequency: int

    # Adjustment activity
    regenerations: int
    total_adjustments: int
    entries_logged: int

    # Every logged entry, baseline weigh-in first
    history: List[ProgressEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for analysis."""
        return {
            'user_id': self.user_id,
            'user_name': self.user_name,
            'archetype': self.archetype,
            'goal': self.goal,
            'initial_weight_kg': self.initial_weight_kg,
            'final_weight_kg': self.final_weight_kg,
            'weight_change_kg': self.final_weight_kg - self.initial_weight_kg,
            'initial_calories': self.initial_calories,
            'final_calories': self.final_calories,
            'initial_frequency': self.initial_frequency,
            'final_frequency': self.final_frequency,
            'regenerations': self.regenerations,
            'total_adjustments': self.total_adjustments,
            'entries_logged': self.entries_logged,
            'mean_sessions_logged': self.mean_logged('exercise_sessions'),
            'mean_water_logged': self.mean_logged('water_liters'),
            'weeks_simulated': len(self.weeks),
        }

    def to_frame(self) -> pd.DataFrame:
        """Weekly snapshots as a DataFrame indexed by week."""
        return pd.DataFrame([w.to_dict() for w in self.weeks]).set_index('week')

    def progress_frame(self) -> pd.DataFrame:
        """Logged entries as a date-indexed DataFrame."""
        return history_to_frame(self.history)

    def mean_logged(self, column: str) -> float:
        """Mean of a logged column over the weekly entries (baseline excluded)."""
        weekly = self.progress_frame().iloc[1:]
        if weekly.empty:
            return 0.0
        return float(weekly[column].mean())

    def get_weight_trajectory(self) -> np.ndarray:
        """Get array of underlying weekly weights."""
        return np.array([w.true_weight_kg for w in self.weeks])

    def get_calorie_trajectory(self) -> np.ndarray:
        """Get array of daily calorie targets after each review."""
        return np.array([w.calories_per_day for w in self.weeks])


class SimulationEngine:
    """
    Engine for simulating plan adjustment over time.

    Drives a FitPlanEngine with a simulated clock so expiry, review and
    consistency all follow simulated time.
    """

    def __init__(
        self,
        params: Optional[EngineParams] = None,
        start: datetime = DEFAULT_START,
        verbose: bool = False
    ):
        """
        Initialize simulation engine.

        Args:
            params: Engine parameters (uses defaults if None)
            start: Simulated date of plan generation
            verbose: Print progress during simulation
        """
        self.params = params or EngineParams()
        self.start = start
        self.verbose = verbose

    def run_simulation(
        self,
        user: SimulatedUser,
        num_weeks: int = 12,
        seed: Optional[int] = None
    ) -> SimulationResult:
        """
        Run full simulation for one user.

        Args:
            user: Simulated user
            num_weeks: Number of weekly reviews
            seed: Random seed for reproducibility

        Returns:
            SimulationResult with complete data
        """
        if seed is not None:
            np.random.seed(seed)

        today = self.start
        engine = FitPlanEngine(
            params=self.params,
            rng=random.Random(seed),
            clock=lambda: today,
        )

        profile = user.profile
        plan = engine.generate_new_plan(profile)
        initial_calories, initial_frequency = _plan_targets(plan)

        true_weight = profile.weight_kg
        window: List[ProgressEntry] = [ProgressEntry(date=today, weight_kg=true_weight)]
        logged = list(window)
        entries_logged = 1
        snapshots = []

        if self.verbose:
            print(f"Simulating {profile.name}: {num_weeks} weeks")
            print(f"  Start: {true_weight:.1f} kg, {initial_calories} kcal, "
                  f"{initial_frequency}x/week")

        for week in range(1, num_weeks + 1):
            today = self.start + timedelta(weeks=week)
            true_weight += user.weekly_weight_change_kg
            calories, frequency = _plan_targets(plan)

            logged_weight = None
            if np.random.random() <= user.logging_rate:
                entry = generate_progress_entry(
                    user, true_weight, today, frequency,
                    target_calories=calories,
                    target_water_liters=plan.diet.hydration.liters if plan.diet else 0.0,
                )
                window.append(entry)
                logged.append(entry)
                entries_logged += 1
                logged_weight = entry.weight_kg
                profile = replace(profile, weight_kg=entry.weight_kg)

            result = engine.adjust_automatically(profile, window)
            if result is None:
                # Plan expired without a review; start over
                plan = engine.generate_new_plan(profile)
                window = window[-1:]
                adjustments, regenerated = [], True
                consistency, adherence = 100.0, 100.0
            else:
                plan = result.plan
                adjustments = [type(a).__name__ for a in result.adjustments]
                regenerated = result.regenerated
                consistency = result.analysis.consistency if result.analysis else 100.0
                adherence = result.analysis.adherence if result.analysis else 100.0
                if regenerated:
                    window = window[-1:]

            calories, frequency = _plan_targets(plan)
            snapshots.append(WeeklySnapshot(
                week=week,
                date=today,
                true_weight_kg=round(true_weight, 2),
                logged_weight_kg=logged_weight,
                calories_per_day=calories,
                hydration_liters=plan.diet.hydration.liters if plan.diet else 0.0,
                weekly_frequency=frequency,
                difficulty=plan.training.difficulty.value if plan.training else '',
                consistency=consistency,
                adherence=adherence,
                adjustments=adjustments,
                regenerated=regenerated,
            ))

            if self.verbose and week % 4 == 0:
                print(f"  Week {week}: {true_weight:.1f} kg, {calories} kcal, "
                      f"{frequency}x/week, consistency {consistency:.0f}")

        logger.debug("Simulated %s for %d weeks", profile.user_id, num_weeks)

        final_calories, final_frequency = _plan_targets(plan)
        return SimulationResult(
            user_id=profile.user_id,
            user_name=profile.name,
            archetype=user.archetype,
            goal=profile.goal.value,
            weeks=snapshots,
            initial_weight_kg=user.profile.weight_kg,
            final_weight_kg=round(true_weight, 2),
            initial_calories=initial_calories,
            final_calories=final_calories,
            initial_frequency=initial_frequency,
            final_frequency=final_frequency,
            regenerations=sum(1 for s in snapshots if s.regenerated),
            total_adjustments=sum(len(s.adjustments) for s in snapshots if not s.regenerated),
            entries_logged=entries_logged,
            history=logged,
        )

    def run_batch(
        self,
        users: List[SimulatedUser],
        num_weeks: int = 12,
        seed: Optional[int] = None
    ) -> List[SimulationResult]:
        """
        Run simulations for multiple users.

        Args:
            users: Simulated users
            num_weeks: Weeks per simulation
            seed: Base random seed

        Returns:
            List of SimulationResult objects
        """
        results = []
        for i, user in enumerate(users):
            user_seed = seed + i if seed is not None else None
            results.append(self.run_simulation(user, num_weeks, seed=user_seed))
        return results


def _plan_targets(plan: GeneratedPlan):
    calories = plan.diet.calories_per_day if plan.diet else 0
    frequency = plan.training.weekly_frequency if plan.training else 0
    return calories, frequency


def results_to_frame(results: List[SimulationResult]) -> pd.DataFrame:
    """One row per simulation run."""
    return pd.DataFrame([r.to_dict() for r in results])


def aggregate_results(results: List[SimulationResult]) -> Dict[str, Any]:
    """
    Aggregate metrics across multiple simulation results.

    Args:
        results: List of SimulationResult objects

    Returns:
        Dictionary of aggregated metrics
    """
    if not results:
        return {}

    frame = results_to_frame(results)
    n = len(results)
    total_weeks = int(frame['weeks_simulated'].sum())

    by_archetype = frame.groupby('archetype').agg(
        users=('user_id', 'count'),
        mean_weight_change=('weight_change_kg', 'mean'),
        mean_adjustments=('total_adjustments', 'mean'),
        regenerations=('regenerations', 'sum'),
        mean_sessions_logged=('mean_sessions_logged', 'mean'),
    )

    return {
        'n_simulations': n,

        # Weight
        'mean_weight_change': float(frame['weight_change_kg'].mean()),
        'std_weight_change': float(frame['weight_change_kg'].std(ddof=0)),

        # Plan activity
        'mean_adjustments': float(frame['total_adjustments'].mean()),
        'total_regenerations': int(frame['regenerations'].sum()),
        'pct_with_regeneration': float((frame['regenerations'] > 0).mean() * 100),
        'mean_calorie_change': float((frame['final_calories'] - frame['initial_calories']).mean()),
        'mean_frequency_change': float((frame['final_frequency'] - frame['initial_frequency']).mean()),

        # Logging
        'logging_rate': float(frame['entries_logged'].sum() / (total_weeks + n) * 100),
        'mean_sessions_logged': float(frame['mean_sessions_logged'].mean()),
        'mean_water_logged': float(frame['mean_water_logged'].mean()),

        'by_archetype': by_archetype.reset_index().to_dict(orient='records'),
    }
