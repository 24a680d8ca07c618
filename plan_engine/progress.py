"""
Progress Analyzer: Weight trend, logging consistency and goal adherence.

Reads the full progress log and reduces it to the handful of numbers the
adjuster decides on:
- weight change between the first and last entries, and its trend
- consistency: logged entries against one expected entry per week
- adherence: whether the weight moved in the goal's direction
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from .params import DEFAULT_PARAMS, EngineParams
from .profile import Goal, ProgressEntry

logger = logging.getLogger(__name__)


class WeightTrend(Enum):
    LOSING = "losing"
    GAINING = "gaining"
    STABLE = "stable"


@dataclass
class ProgressAnalysis:
    """
    Summary of a progress history.

    weight_change is reported as an absolute value; signed_change keeps the
    direction (last minus first).
    """
    weight_trend: WeightTrend = WeightTrend.STABLE
    weight_change: float = 0.0
    signed_change: float = 0.0
    consistency: float = 100.0      # 0-100
    adherence: float = 100.0        # 0-100
    weekly_rate: float = 0.0        # kg/week, least-squares slope
    entry_count: int = 0
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'weight_trend': self.weight_trend.value,
            'weight_change': self.weight_change,
            'signed_change': self.signed_change,
            'consistency': self.consistency,
            'adherence': self.adherence,
            'weekly_rate': self.weekly_rate,
            'entry_count': self.entry_count,
            'recommendations': list(self.recommendations),
        }


def neutral_analysis(entry_count: int = 0) -> ProgressAnalysis:
    """Analysis used when there is not enough history to judge."""
    return ProgressAnalysis(
        entry_count=entry_count,
        recommendations=['Keep following your current plan'],
    )


def ordered_history(
    history: Sequence[ProgressEntry],
    latest: Optional[ProgressEntry] = None
) -> List[ProgressEntry]:
    """
    Chronological copy of the history.

    The latest entry is appended when it is newer than anything in the
    history; callers may pass it either inside or alongside the log.
    """
    series = sorted(history, key=lambda e: e.date)
    if latest is not None and (not series or latest.date > series[-1].date):
        series.append(latest)
    return series


def history_to_frame(history: Sequence[ProgressEntry]) -> pd.DataFrame:
    """Progress log as a date-indexed DataFrame."""
    columns = ['weight_kg', 'calories_consumed', 'exercise_sessions', 'water_liters']
    if not history:
        return pd.DataFrame(columns=columns, index=pd.DatetimeIndex([], name='date'))

    frame = pd.DataFrame(
        [{
            'date': e.date,
            'weight_kg': e.weight_kg,
            'calories_consumed': e.calories_consumed,
            'exercise_sessions': e.exercise_sessions,
            'water_liters': e.water_liters,
        } for e in history]
    )
    return frame.set_index('date').sort_index()[columns]


def classify_weight_trend(
    weight_change: float,
    threshold_kg: float = DEFAULT_PARAMS.trend_threshold_kg
) -> WeightTrend:
    """Stable inside the threshold, otherwise the sign of the change."""
    if abs(weight_change) < threshold_kg:
        return WeightTrend.STABLE
    return WeightTrend.GAINING if weight_change > 0 else WeightTrend.LOSING


def calculate_consistency(history: Sequence[ProgressEntry], now: datetime) -> float:
    """
    Logging consistency on a 0-100 scale.

    Formula:
        expected = ceil(days_since_first_entry / 7)   (at least 1)
        consistency = min(100, round(entries / expected * 100))

    Args:
        history: Progress entries (any order)
        now: Reference time

    Returns:
        Consistency percentage
    """
    if not history:
        return 100.0

    first = min(e.date for e in history)
    days = (now - first).total_seconds() / 86400
    expected = max(1, math.ceil(days / 7))

    return float(min(100, round(len(history) / expected * 100)))


def calculate_adherence(weight_change: float, goal: Goal) -> float:
    """
    Goal adherence on a 0-100 scale from the signed weight change.

    Losing weight: 100 if weight went down, else 100 - 10 per kg gained.
    Gaining mass:  100 if weight went up, else 100 - 10 per kg lost.
    Other goals:   100.
    """
    if goal == Goal.LOSE_WEIGHT:
        return 100.0 if weight_change < 0 else max(0.0, 100 - abs(weight_change) * 10)
    if goal == Goal.GAIN_MASS:
        return 100.0 if weight_change > 0 else max(0.0, 100 - abs(weight_change) * 10)
    return 100.0


def calculate_weekly_rate(history: Sequence[ProgressEntry]) -> float:
    """Weight slope in kg/week via linear regression on days elapsed."""
    if len(history) < 2:
        return 0.0

    first = history[0].date
    days = np.array([(e.date - first).total_seconds() / 86400 for e in history])
    weights = np.array([e.weight_kg for e in history])

    if np.ptp(days) == 0:
        return 0.0

    result = stats.linregress(days, weights)
    return float(result.slope * 7)


def progress_recommendations(
    trend: WeightTrend,
    weight_change: float,
    consistency: float,
    adherence: float,
    goal: Goal,
    params: EngineParams = DEFAULT_PARAMS
) -> List[str]:
    """Free-text notes for the user; weight_change is the absolute change."""
    recommendations = []

    if consistency < params.low_consistency:
        recommendations.append('Try to log your progress at least once a week')

    if adherence < params.low_adherence:
        recommendations.append('Consider adjusting your schedule to stick to the plan')

    if trend == WeightTrend.LOSING and goal == Goal.LOSE_WEIGHT:
        if weight_change > params.fast_loss_kg:
            recommendations.append('Weight loss is very fast - consider a smaller calorie deficit')
        elif weight_change < params.slow_change_kg:
            recommendations.append('Weight loss is slow - check that you are following the plan')

    if trend == WeightTrend.GAINING and goal == Goal.GAIN_MASS:
        if weight_change < params.slow_change_kg:
            recommendations.append('Mass gain is slow - consider increasing calories')

    return recommendations


def analyze_progress(
    history: Sequence[ProgressEntry],
    latest: Optional[ProgressEntry],
    goal: Goal,
    now: Optional[datetime] = None,
    params: EngineParams = DEFAULT_PARAMS
) -> ProgressAnalysis:
    """
    Analyze a progress history.

    Fewer than two entries yields a neutral analysis (stable, no change,
    full consistency and adherence).

    Args:
        history: Full progress log (not modified)
        latest: Most recent entry
        goal: User goal, drives adherence
        now: Reference time for consistency (default: current time)
        params: Engine parameters

    Returns:
        ProgressAnalysis
    """
    now = now or datetime.now()
    series = ordered_history(history, latest)

    if len(series) < 2:
        return neutral_analysis(len(series))

    signed_change = series[-1].weight_kg - series[0].weight_kg
    trend = classify_weight_trend(signed_change, params.trend_threshold_kg)
    consistency = calculate_consistency(series, now)
    adherence = calculate_adherence(signed_change, goal)
    weight_change = abs(signed_change)

    analysis = ProgressAnalysis(
        weight_trend=trend,
        weight_change=weight_change,
        signed_change=signed_change,
        consistency=consistency,
        adherence=adherence,
        weekly_rate=calculate_weekly_rate(series),
        entry_count=len(series),
        recommendations=progress_recommendations(
            trend, weight_change, consistency, adherence, goal, params
        ),
    )

    logger.debug("Progress: %s %.2f kg, consistency %.0f, adherence %.0f",
                 trend.value, signed_change, consistency, adherence)

    return analysis
