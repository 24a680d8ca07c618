"""
Training Scheduler: Weekly frequency, workout categories and exercise loads.

Frequency comes from a goal/activity lookup. Workouts are laid out from
Monday onward, cycling strength -> cardio -> flexibility, and each one takes
up to four exercises from the category's catalog with goal-specific sets,
reps, rest and starting weight.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .plans import Exercise, Workout, WorkoutCategory
from .profile import ActivityLevel, Goal

logger = logging.getLogger(__name__)


class DayOfWeek(Enum):
    """Days of the week, Monday first."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class CatalogExercise:
    name: str
    muscle_group: str
    equipment: str


@dataclass(frozen=True)
class GoalLoad:
    """Per-exercise prescription for a goal."""
    sets: int
    reps: int
    rest_seconds: int
    weight_kg: Optional[float] = None


CATEGORY_CYCLE = [WorkoutCategory.STRENGTH, WorkoutCategory.CARDIO, WorkoutCategory.FLEXIBILITY]

MAX_EXERCISES_PER_WORKOUT = 4
CARDIO_SET_SECONDS = 300             # 5 minutes per cardio set
STRENGTH_SET_SECONDS = 30            # Estimate for rep-based sets
WARM_UP_COOL_DOWN_SECONDS = 600
KCAL_PER_KG_MINUTE = 0.1

EXERCISE_CATALOG: Dict[WorkoutCategory, List[CatalogExercise]] = {
    WorkoutCategory.STRENGTH: [
        CatalogExercise('Squat', 'legs', 'bodyweight'),
        CatalogExercise('Push-up', 'chest/triceps', 'bodyweight'),
        CatalogExercise('Plank', 'core', 'bodyweight'),
        CatalogExercise('Burpee', 'full body', 'bodyweight'),
        CatalogExercise('Mountain climber', 'core', 'bodyweight'),
    ],
    WorkoutCategory.CARDIO: [
        CatalogExercise('Running', 'cardio', 'treadmill'),
        CatalogExercise('Cycling', 'cardio', 'bike'),
        CatalogExercise('Jumping jacks', 'cardio', 'bodyweight'),
        CatalogExercise('Jump rope', 'cardio', 'jump rope'),
        CatalogExercise('Stair climbing', 'cardio', 'stairs'),
    ],
    WorkoutCategory.FLEXIBILITY: [
        CatalogExercise('Leg stretch', 'flexibility', 'bodyweight'),
        CatalogExercise('Basic yoga', 'flexibility', 'mat'),
        CatalogExercise('Arm stretch', 'flexibility', 'bodyweight'),
        CatalogExercise('Back stretch', 'flexibility', 'bodyweight'),
    ],
}

GOAL_LOADS: Dict[Goal, GoalLoad] = {
    Goal.LOSE_WEIGHT: GoalLoad(sets=3, reps=15, rest_seconds=30),
    Goal.GAIN_MASS: GoalLoad(sets=4, reps=8, rest_seconds=90, weight_kg=20.0),
    Goal.GAIN_STRENGTH: GoalLoad(sets=5, reps=5, rest_seconds=120, weight_kg=20.0),
    Goal.MAINTAIN: GoalLoad(sets=3, reps=12, rest_seconds=60),
    Goal.IMPROVE_HEALTH: GoalLoad(sets=2, reps=10, rest_seconds=45),
}
DEFAULT_LOAD = GoalLoad(sets=3, reps=10, rest_seconds=60)

# goal -> (frequency when sedentary, frequency otherwise)
FREQUENCY_TABLE: Dict[Goal, Tuple[int, int]] = {
    Goal.LOSE_WEIGHT: (3, 4),
    Goal.GAIN_MASS: (3, 5),
    Goal.GAIN_STRENGTH: (4, 4),
}
DEFAULT_FREQUENCY = 3

TECHNIQUES: Dict[str, str] = {
    'Squat': 'Feet shoulder-width apart, knees tracking over the toes',
    'Push-up': 'Body in a straight line, elbows close to the torso',
    'Plank': 'Rigid body, controlled breathing',
    'Burpee': 'Fluid, controlled movement',
    'Mountain climber': 'Keep the core engaged',
}

VARIATIONS: Dict[str, List[str]] = {
    'Squat': ['Jump squat', 'Sumo squat', 'Bulgarian split squat'],
    'Push-up': ['Incline push-up', 'Decline push-up', 'Diamond push-up'],
    'Plank': ['Side plank', 'Plank with leg raise', 'Plank shoulder taps'],
}

EXERCISE_NOTES: Dict[str, List[str]] = {
    'Squat': ['Keep the chest up', 'Knees should not pass the toes'],
    'Push-up': ['Keep the body straight', 'Lower until almost touching the floor'],
    'Plank': ['Breathe normally', 'Keep the abs braced'],
}

WARM_UP = ['Dynamic stretching', 'Joint mobility', 'Light cardio']
COOL_DOWN = ['Static stretching', 'Deep breathing', 'Muscle relaxation']

REST_RECOMMENDATIONS: Dict[Goal, List[str]] = {
    Goal.LOSE_WEIGHT: ['Stay active on rest days', 'Do light stretching'],
    Goal.GAIN_MASS: ['Rest is essential for muscle growth', 'Avoid intense activity'],
    Goal.GAIN_STRENGTH: ['Muscle recovery is essential', 'Do passive stretching'],
    Goal.MAINTAIN: ['Stay active with light activities', 'Go for walks'],
    Goal.IMPROVE_HEALTH: ['Light activities are welcome', 'Practice meditation or yoga'],
}


def calculate_weekly_frequency(goal: Goal, activity_level: ActivityLevel) -> int:
    """
    Training days per week from goal and activity level.

    lose weight: 3 if sedentary else 4
    gain mass:   3 if sedentary else 5
    strength:    4
    other goals: 3
    """
    if goal not in FREQUENCY_TABLE:
        return DEFAULT_FREQUENCY
    sedentary, otherwise = FREQUENCY_TABLE[goal]
    return sedentary if activity_level == ActivityLevel.SEDENTARY else otherwise


def goal_load(goal: Goal) -> GoalLoad:
    return GOAL_LOADS.get(goal, DEFAULT_LOAD)


def build_exercises(category: WorkoutCategory, goal: Goal) -> List[Exercise]:
    """Prescribe up to four catalog exercises for a category and goal."""
    load = goal_load(goal)
    exercises = []

    for index, entry in enumerate(EXERCISE_CATALOG.get(category, [])[:MAX_EXERCISES_PER_WORKOUT]):
        exercises.append(Exercise(
            exercise_id=f"exercise-{category.value}-{index + 1}",
            name=entry.name,
            sets=load.sets,
            reps=load.reps,
            rest_seconds=load.rest_seconds,
            weight_kg=load.weight_kg,
            duration_seconds=CARDIO_SET_SECONDS if category == WorkoutCategory.CARDIO else None,
            technique=TECHNIQUES.get(entry.name, 'Use correct form and control'),
            variations=list(VARIATIONS.get(entry.name, [])),
            observations=list(EXERCISE_NOTES.get(
                entry.name, ['Keep correct posture', 'Breathe in a controlled way'])),
            equipment=entry.equipment,
        ))

    return exercises


def calculate_workout_duration(exercises: List[Exercise]) -> int:
    """
    Workout length in seconds.

    Each exercise: work time (duration x sets, or 30 s x sets) plus rest
    between sets. A fixed 10 minutes covers warm-up and cool-down.
    """
    total = 0
    for exercise in exercises:
        if exercise.duration_seconds:
            total += exercise.duration_seconds * exercise.sets
        else:
            total += STRENGTH_SET_SECONDS * exercise.sets
        total += exercise.rest_seconds * (exercise.sets - 1)
    return total + WARM_UP_COOL_DOWN_SECONDS


def calculate_workout_calories(exercises: List[Exercise], weight_kg: float) -> int:
    """Flat burn-rate estimate: 0.1 kcal per kg per minute."""
    minutes = calculate_workout_duration(exercises) / 60
    return round(weight_kg * KCAL_PER_KG_MINUTE * minutes)


def required_equipment(exercises: List[Exercise]) -> List[str]:
    return sorted({e.equipment for e in exercises if e.equipment != 'bodyweight'})


def refresh_workout_totals(workout: Workout, weight_kg: float) -> None:
    """Recompute duration and calories after the exercise list changed."""
    workout.total_duration_seconds = calculate_workout_duration(workout.exercises)
    workout.estimated_calories = calculate_workout_calories(workout.exercises, weight_kg)


def build_workout(index: int, goal: Goal, weight_kg: float) -> Workout:
    """
    Build the workout for the index-th training day of the week.

    Args:
        index: Zero-based slot in the week (0 = Monday)
        goal: User goal, selects the load table
        weight_kg: Body weight for calorie estimates

    Returns:
        Workout
    """
    category = CATEGORY_CYCLE[index % len(CATEGORY_CYCLE)]
    exercises = build_exercises(category, goal)

    return Workout(
        workout_id=f"workout-{index + 1}",
        name=f"{category.value.capitalize()} workout",
        day=DayOfWeek(index % 7).label,
        category=category,
        exercises=exercises,
        total_duration_seconds=calculate_workout_duration(exercises),
        estimated_calories=calculate_workout_calories(exercises, weight_kg),
        equipment=required_equipment(exercises),
        warm_up=list(WARM_UP),
        cool_down=list(COOL_DOWN),
    )


def schedule_workouts(goal: Goal, activity_level: ActivityLevel, weight_kg: float) -> List[Workout]:
    """
    Build the full week of workouts.

    Returns:
        One Workout per training day; never empty
    """
    frequency = calculate_weekly_frequency(goal, activity_level)
    logger.debug("Scheduling %d workouts for %s/%s", frequency, goal.value, activity_level.value)
    return [build_workout(i, goal, weight_kg) for i in range(frequency)]


def rest_days(frequency: int) -> List[str]:
    """Week days after the last training day."""
    return [day.label for day in DayOfWeek if day.value >= frequency]


def rest_recommendations(goal: Goal) -> List[str]:
    return list(REST_RECOMMENDATIONS.get(goal, ['Stay active with light activities']))
