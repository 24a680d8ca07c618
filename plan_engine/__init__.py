"""
Plan generation and adaptive adjustment engine.

This package provides:
- Nutrition targets (BMR, TDEE, macros)
- Meal composition across fixed daily slots
- Weekly training schedules
- Complete plan generation
- Progress analysis (trend, consistency, adherence)
- Plan adjustment and regeneration
"""

# Profile and plan types
from .profile import (
    Sex,
    ActivityLevel,
    Goal,
    UserProfile,
    ProgressEntry,
)
from .plans import (
    Difficulty,
    MealCategory,
    WorkoutCategory,
    PlanKind,
    PlanStatus,
    MacroTargets,
    MealSlot,
    DietPlan,
    Exercise,
    Workout,
    TrainingPlan,
    GeneratedPlan,
)
from .params import EngineParams

# Nutrition
from .nutrition import (
    NutritionTargets,
    calculate_bmr,
    calculate_tdee,
    calculate_macros,
    calculate_nutrition_targets,
)

# Meals
from .meals import (
    compose_meals,
    select_foods,
    rescale_meals,
)

# Training
from .training import (
    DayOfWeek,
    calculate_weekly_frequency,
    schedule_workouts,
)

# Generation
from .generator import generate_plan

# Progress
from .progress import (
    WeightTrend,
    ProgressAnalysis,
    analyze_progress,
    calculate_consistency,
    calculate_adherence,
)

# Adjustment
from .adjustments import (
    AdjustmentScope,
    Priority,
    Adjustment,
    CalorieTargetChange,
    HydrationChange,
    FrequencyChange,
    DifficultyChange,
    PlanRegeneration,
    apply_adjustments,
)
from .adjuster import AdjustmentResult, adjust_plan

# Storage and facade
from .repository import PlanRepository, InMemoryPlanRepository
from .engine import FitPlanEngine

__all__ = [
    # Profile
    'Sex',
    'ActivityLevel',
    'Goal',
    'UserProfile',
    'ProgressEntry',
    # Plans
    'Difficulty',
    'MealCategory',
    'WorkoutCategory',
    'PlanKind',
    'PlanStatus',
    'MacroTargets',
    'MealSlot',
    'DietPlan',
    'Exercise',
    'Workout',
    'TrainingPlan',
    'GeneratedPlan',
    'EngineParams',
    # Nutrition
    'NutritionTargets',
    'calculate_bmr',
    'calculate_tdee',
    'calculate_macros',
    'calculate_nutrition_targets',
    # Meals
    'compose_meals',
    'select_foods',
    'rescale_meals',
    # Training
    'DayOfWeek',
    'calculate_weekly_frequency',
    'schedule_workouts',
    # Generation
    'generate_plan',
    # Progress
    'WeightTrend',
    'ProgressAnalysis',
    'analyze_progress',
    'calculate_consistency',
    'calculate_adherence',
    # Adjustment
    'AdjustmentScope',
    'Priority',
    'Adjustment',
    'CalorieTargetChange',
    'HydrationChange',
    'FrequencyChange',
    'DifficultyChange',
    'PlanRegeneration',
    'apply_adjustments',
    'AdjustmentResult',
    'adjust_plan',
    # Storage
    'PlanRepository',
    'InMemoryPlanRepository',
    'FitPlanEngine',
]
