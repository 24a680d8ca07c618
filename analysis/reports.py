"""
Report generation utilities for plans and simulations.

Formats generated plans, adjustment results and simulation batches as
plain text for the CLI.
"""

from typing import List, Optional
from datetime import datetime

import numpy as np

from plan_engine.adjuster import AdjustmentResult
from plan_engine.params import EngineParams
from plan_engine.plans import GeneratedPlan
from simulation.engine import SimulationResult, aggregate_results


def format_plan(plan: GeneratedPlan, now: Optional[datetime] = None) -> str:
    """
    Human-readable summary of a generated plan.

    Args:
        plan: Plan to format
        now: Reference time for the status line

    Returns:
        Formatted report string
    """
    now = now or datetime.now()
    lines = [
        '=' * 70,
        f"PLAN {plan.plan_id} ({plan.goal_label})",
        '=' * 70,
        f"Generated:   {plan.generated_at:%Y-%m-%d %H:%M}",
        f"Next review: {plan.next_review:%Y-%m-%d}",
        f"Expires:     {plan.expires_at:%Y-%m-%d} ({plan.status(now).value})",
    ]

    diet = plan.diet
    if diet is not None:
        lines += [
            '',
            'DIET',
            '----',
            f"Calories/day:  {diet.calories_per_day:>6d} kcal",
            f"Macros:        {diet.macros.protein_g}g protein / "
            f"{diet.macros.carb_g}g carbs / {diet.macros.fat_g}g fat",
            f"Water:         {diet.hydration.liters:>6.1f} L",
            f"Difficulty:    {diet.difficulty.value}",
            '',
            f"{'Time':<6} {'Meal':<18} {'kcal':>5} {'P':>4} {'C':>4} {'F':>4}  Foods",
        ]
        for meal in diet.meals:
            lines.append(
                f"{meal.time_of_day:<6} {meal.name:<18} {meal.calories:>5d} "
                f"{meal.protein_g:>4d} {meal.carb_g:>4d} {meal.fat_g:>4d}  "
                f"{', '.join(meal.foods)}"
            )
        if diet.supplements:
            lines.append(f"Supplements:   {', '.join(diet.supplements)}")

    training = plan.training
    if training is not None:
        lines += [
            '',
            'TRAINING',
            '--------',
            f"Frequency:     {training.weekly_frequency}x/week ({training.difficulty.value})",
            f"Rest days:     {', '.join(training.rest.days)}",
            '',
        ]
        for workout in training.workouts:
            lines.append(
                f"{workout.day:<10} {workout.name:<22} "
                f"{workout.total_duration_seconds // 60:>3d} min  "
                f"~{workout.estimated_calories} kcal"
            )
            for exercise in workout.exercises:
                load = (f"{exercise.duration_seconds // 60} min"
                        if exercise.duration_seconds else f"{exercise.reps} reps")
                lines.append(f"    {exercise.name:<20} {exercise.sets} x {load}")

    if plan.recommendations:
        lines += ['', 'RECOMMENDATIONS', '---------------']
        lines += [f"- {r}" for r in plan.recommendations]

    lines.append('=' * 70)
    return '\n'.join(lines) + '\n'


def format_adjustment_result(result: AdjustmentResult) -> str:
    """Summary of one adjustment pass."""
    lines = ['=' * 70, 'PLAN ADJUSTMENT', '=' * 70, result.message, '']

    analysis = result.analysis
    if analysis is not None:
        lines += [
            f"Trend:        {analysis.weight_trend.value} ({analysis.signed_change:+.1f} kg)",
            f"Weekly rate:  {analysis.weekly_rate:+.2f} kg/week",
            f"Consistency:  {analysis.consistency:.0f}%",
            f"Adherence:    {analysis.adherence:.0f}%",
            '',
        ]

    if result.adjustments:
        lines.append(f"{'Priority':<8} {'Field':<26} {'Old':>10} {'New':>10}  Reason")
        for adjustment in result.adjustments:
            d = adjustment.to_dict()
            lines.append(
                f"{d['priority']:<8} {d['field']:<26} {str(d['old_value'])[:10]:>10} "
                f"{str(d['new_value'])[:10]:>10}  {d['reason']}"
            )
    else:
        lines.append('No adjustments needed.')

    lines.append('=' * 70)
    return '\n'.join(lines) + '\n'


def generate_simulation_report(
    results: List[SimulationResult],
    params: Optional[EngineParams] = None,
    title: str = "Plan Adjustment Simulation Report"
) -> str:
    """
    Generate text report from simulation results.

    Args:
        results: Simulation results
        params: Parameters used (for documentation)
        title: Report title

    Returns:
        Formatted report string
    """
    agg = aggregate_results(results)
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    if not results:
        return f"{'='*70}\n{title}\n{'='*70}\nNo simulations.\n"

    report = f"""
{'='*70}
{title}
{'='*70}
Generated: {timestamp}
Simulations: {len(results)}
Weeks per simulation: {len(results[0].weeks)}

WEIGHT
------
Initial weight (mean):     {np.mean([r.initial_weight_kg for r in results]):>8.1f} kg
Final weight (mean):       {np.mean([r.final_weight_kg for r in results]):>8.1f} kg
Change (mean):             {agg['mean_weight_change']:>+8.2f} kg
Change (std):              {agg['std_weight_change']:>8.2f}

PLAN ACTIVITY
-------------
Adjustments/user (mean):   {agg['mean_adjustments']:>8.2f}
Regenerations (total):     {agg['total_regenerations']:>8d}
Users regenerated:         {agg['pct_with_regeneration']:>8.1f}%
Calorie change (mean):     {agg['mean_calorie_change']:>+8.0f} kcal
Frequency change (mean):   {agg['mean_frequency_change']:>+8.2f} sessions
Logging rate:              {agg['logging_rate']:>8.1f}%
Sessions per logged week:  {agg['mean_sessions_logged']:>8.2f}
Water logged (mean):       {agg['mean_water_logged']:>8.2f} L
"""

    report += """
PER-USER BREAKDOWN
------------------
"""
    report += (f"{'User':<24} {'Goal':<14} {'Weight':>7} {'kcal':>11} "
               f"{'Freq':>5} {'Adj':>4} {'Regen':>5}\n")
    report += "-" * 70 + "\n"

    for r in results:
        report += (f"{r.user_name[:24]:<24} "
                   f"{r.goal[:14]:<14} "
                   f"{r.final_weight_kg - r.initial_weight_kg:>+7.1f} "
                   f"{r.initial_calories:>5d}>{r.final_calories:<5d} "
                   f"{r.initial_frequency:>2d}>{r.final_frequency:<2d} "
                   f"{r.total_adjustments:>4d} "
                   f"{r.regenerations:>5d}\n")

    if params:
        report += f"""
ENGINE PARAMETERS
-----------------
Regenerate when:  |weight change| > {params.regen_weight_change_kg} kg, consistency < {params.regen_min_consistency},
                  adherence < {params.regen_min_adherence}, or plan older than {params.regen_max_age_days} days
Calorie step:     {params.calorie_step * 100:.0f}%
Hydration step:   {params.hydration_step * 100:.0f}% below {params.hydration_consistency} consistency
Frequency bounds: {params.min_frequency}-{params.max_frequency} sessions/week
"""

    report += "\n" + "=" * 70 + "\n"
    return report
