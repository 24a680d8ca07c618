"""
Plan Adjuster: Tunes or regenerates a plan from recorded progress.

Decision order:
1. Regenerate when progress has drifted too far for tuning (large weight
   change, very low consistency or adherence, or a stale plan).
2. Otherwise derive independent diet and training adjustments from the
   progress analysis and apply them to a copy of the plan.
3. Re-stamp the validity window and refresh the recommendations.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from .adjustments import (
    Adjustment,
    CalorieTargetChange,
    DifficultyChange,
    FrequencyChange,
    HydrationChange,
    PlanRegeneration,
    Priority,
    apply_adjustments,
    highest_priority,
)
from .generator import generate_plan
from .params import DEFAULT_PARAMS, EngineParams
from .plans import DietPlan, GeneratedPlan, TrainingPlan
from .profile import Goal, ProgressEntry, UserProfile
from .progress import ProgressAnalysis, WeightTrend, analyze_progress

logger = logging.getLogger(__name__)


MESSAGES = {
    None: 'Your plan is optimized for your current progress!',
    Priority.HIGH: ('Your plan was adjusted based on your progress. '
                    'Some important changes were made to optimize your results.'),
    Priority.MEDIUM: ('Your plan was adjusted based on your progress. '
                      'Small optimizations were applied to improve your experience.'),
    Priority.LOW: ('Your plan was adjusted based on your progress. '
                   'Minor tweaks were made to keep everything aligned.'),
}
REGENERATED_MESSAGE = 'Your plan was fully regenerated based on your progress!'


@dataclass
class AdjustmentResult:
    """Outcome of one adjust_plan call."""
    plan: GeneratedPlan
    adjustments: List[Adjustment] = field(default_factory=list)
    message: str = ""
    regenerated: bool = False
    analysis: Optional[ProgressAnalysis] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'plan': self.plan.to_dict(),
            'adjustments': [a.to_dict() for a in self.adjustments],
            'message': self.message,
            'regenerated': self.regenerated,
            'analysis': self.analysis.to_dict() if self.analysis else None,
        }


def should_regenerate(
    analysis: ProgressAnalysis,
    plan: GeneratedPlan,
    now: datetime,
    params: EngineParams = DEFAULT_PARAMS
) -> bool:
    """Any single trigger discards the current plan."""
    if analysis.weight_change > params.regen_weight_change_kg:
        return True
    if analysis.consistency < params.regen_min_consistency:
        return True
    if analysis.adherence < params.regen_min_adherence:
        return True
    return plan.age_days(now) > params.regen_max_age_days


def adjust_diet(
    diet: DietPlan,
    analysis: ProgressAnalysis,
    goal: Goal,
    params: EngineParams = DEFAULT_PARAMS
) -> List[Adjustment]:
    """Calorie and hydration adjustments for the diet plan."""
    adjustments: List[Adjustment] = []
    current = diet.calories_per_day

    if analysis.weight_trend == WeightTrend.LOSING and goal == Goal.LOSE_WEIGHT:
        if analysis.weight_change > params.diet_loss_trigger_kg:
            adjustments.append(CalorieTargetChange(
                old_value=current,
                new_value=round(current * (1 - params.calorie_step)),
                reason='Weight loss too fast - reducing calories for sustainable progress',
                priority=Priority.MEDIUM,
            ))
    elif analysis.weight_trend == WeightTrend.GAINING and goal == Goal.GAIN_MASS:
        if analysis.weight_change < params.diet_gain_trigger_kg:
            adjustments.append(CalorieTargetChange(
                old_value=current,
                new_value=round(current * (1 + params.calorie_step)),
                reason='Insufficient weight gain - increasing calories to support growth',
                priority=Priority.MEDIUM,
            ))

    if analysis.consistency < params.hydration_consistency:
        water = diet.hydration.liters
        adjustments.append(HydrationChange(
            old_value=water,
            new_value=round(water * (1 + params.hydration_step), 1),
            reason='Low consistency detected - raising the water recommendation',
            priority=Priority.LOW,
        ))

    return adjustments


def adjust_training(
    training: TrainingPlan,
    analysis: ProgressAnalysis,
    goal: Goal,
    params: EngineParams = DEFAULT_PARAMS
) -> List[Adjustment]:
    """Frequency and difficulty adjustments for the training plan."""
    adjustments: List[Adjustment] = []
    frequency = training.weekly_frequency

    if analysis.consistency < params.frequency_decrease_consistency:
        new_frequency = max(params.min_frequency, frequency - 1)
        if new_frequency != frequency:
            adjustments.append(FrequencyChange(
                old_value=frequency,
                new_value=new_frequency,
                reason='Low consistency detected - fewer sessions to make the plan easier to follow',
                priority=Priority.MEDIUM,
            ))
    elif (analysis.consistency > params.frequency_increase_consistency
          and analysis.adherence > params.frequency_increase_adherence):
        new_frequency = min(params.max_frequency, frequency + 1)
        if new_frequency != frequency:
            adjustments.append(FrequencyChange(
                old_value=frequency,
                new_value=new_frequency,
                reason='High consistency and adherence - one more session to optimize results',
                priority=Priority.LOW,
            ))

    losing_on_target = (analysis.weight_trend == WeightTrend.LOSING
                        and goal == Goal.LOSE_WEIGHT)
    if (losing_on_target
            and analysis.consistency > params.difficulty_consistency
            and analysis.weight_change > params.difficulty_loss_kg):
        new_difficulty = training.difficulty.next_level()
        if new_difficulty != training.difficulty:
            adjustments.append(DifficultyChange(
                old_value=training.difficulty,
                new_value=new_difficulty,
                reason='Consistent progress detected - raising workout difficulty',
                priority=Priority.MEDIUM,
            ))

    return adjustments


def updated_recommendations(
    current: List[str],
    analysis: ProgressAnalysis,
    params: EngineParams = DEFAULT_PARAMS
) -> List[str]:
    """Existing recommendations plus progress notes, capped."""
    recommendations = list(current)

    if analysis.weight_trend == WeightTrend.LOSING and analysis.weight_change > params.fast_loss_kg:
        recommendations.append('Excellent weight loss progress! Keep up the consistency.')
    elif (analysis.weight_trend == WeightTrend.GAINING
          and analysis.weight_change > params.diet_gain_trigger_kg):
        recommendations.append('Great mass gain! Keep focusing on nutrition and rest.')

    if analysis.consistency < params.low_consistency:
        recommendations.append('Try to be more consistent with your updates for better results.')

    if analysis.adherence < params.low_adherence:
        recommendations.append('Consider adjusting your schedule for better adherence to the plan.')

    return recommendations[:params.max_recommendations]


def adjustment_message(adjustments: List[Adjustment]) -> str:
    """Summary message keyed on the highest priority present."""
    return MESSAGES[highest_priority(adjustments)]


def adjust_plan(
    current_plan: GeneratedPlan,
    profile: UserProfile,
    history: Sequence[ProgressEntry],
    latest: Optional[ProgressEntry] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    params: EngineParams = DEFAULT_PARAMS
) -> AdjustmentResult:
    """
    Adjust a plan from recorded progress.

    Args:
        current_plan: Plan in use (not modified)
        profile: Current user profile
        history: Full progress log (not modified)
        latest: Most recent entry
        rng: Random source, used only if the plan is regenerated
        now: Reference time (default: current time)
        params: Engine parameters

    Returns:
        AdjustmentResult with the new or tuned plan
    """
    now = now or datetime.now()
    analysis = analyze_progress(history, latest, profile.goal, now, params)

    if should_regenerate(analysis, current_plan, now, params):
        replacement = generate_plan(profile, rng=rng, now=now, params=params)
        regeneration = PlanRegeneration(
            old_value=current_plan.plan_id,
            new_value=replacement.plan_id,
            reason='Significant progress detected - plan fully regenerated',
            priority=Priority.HIGH,
            replacement=replacement,
        )
        logger.info("Regenerating plan %s -> %s", current_plan.plan_id, replacement.plan_id)
        return AdjustmentResult(
            plan=regeneration.apply(current_plan, profile),
            adjustments=[regeneration],
            message=REGENERATED_MESSAGE,
            regenerated=True,
            analysis=analysis,
        )

    adjustments: List[Adjustment] = []
    if current_plan.diet is not None:
        adjustments.extend(adjust_diet(current_plan.diet, analysis, profile.goal, params))
    if current_plan.training is not None:
        adjustments.extend(adjust_training(current_plan.training, analysis, profile.goal, params))

    plan = apply_adjustments(current_plan, adjustments, profile)
    plan.recommendations = updated_recommendations(current_plan.recommendations, analysis, params)
    plan.generated_at = now
    plan.expires_at = now + timedelta(days=params.validity_days)
    plan.next_review = now + timedelta(days=params.review_interval_days)

    logger.info("Tuned plan %s with %d adjustment(s)", plan.plan_id, len(adjustments))

    return AdjustmentResult(
        plan=plan,
        adjustments=adjustments,
        message=adjustment_message(adjustments),
        regenerated=False,
        analysis=analysis,
    )
