"""
Plan Structures: Diet plans, training plans and the generated plan envelope.

These are the objects the engine produces and the calling application
persists. Each structure converts to and from plain dictionaries so a
repository can store it as JSON.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, List


class Difficulty(Enum):
    """Plan difficulty, ordered from easiest to hardest."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    def next_level(self) -> 'Difficulty':
        """One level harder, or self when already at the top."""
        levels = list(Difficulty)
        index = levels.index(self)
        return levels[min(index + 1, len(levels) - 1)]


class MealCategory(Enum):
    BREAKFAST = "breakfast"
    SNACK = "snack"
    LUNCH = "lunch"
    DINNER = "dinner"
    SUPPER = "supper"


class WorkoutCategory(Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"


class PlanKind(Enum):
    DIET = "diet"
    TRAINING = "training"
    COMPLETE = "complete"


class ProgressionType(Enum):
    LINEAR = "linear"
    WAVE = "wave"
    PYRAMID = "pyramid"


class PlanStatus(Enum):
    """Read-time status of a stored plan."""
    ACTIVE = "active"
    EXPIRED = "expired"


# ═══════════════════════════════════════════════════════════════════════════════
# DIET
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class MacroTargets:
    """Macronutrient grams for a day or a single meal."""
    protein_g: int
    carb_g: int
    fat_g: int

    def to_dict(self) -> Dict[str, Any]:
        return {'protein_g': self.protein_g, 'carb_g': self.carb_g, 'fat_g': self.fat_g}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'MacroTargets':
        return cls(protein_g=d['protein_g'], carb_g=d['carb_g'], fat_g=d['fat_g'])


@dataclass
class MealSlot:
    """One meal of the day with its calorie and macro allotment."""
    slot_id: str
    name: str
    category: MealCategory
    time_of_day: str          # "HH:MM"
    calories: int
    protein_g: int
    carb_g: int
    fat_g: int
    foods: List[str] = field(default_factory=list)
    preparation: str = ""
    prep_minutes: int = 20

    def to_dict(self) -> Dict[str, Any]:
        return {
            'slot_id': self.slot_id,
            'name': self.name,
            'category': self.category.value,
            'time_of_day': self.time_of_day,
            'calories': self.calories,
            'protein_g': self.protein_g,
            'carb_g': self.carb_g,
            'fat_g': self.fat_g,
            'foods': list(self.foods),
            'preparation': self.preparation,
            'prep_minutes': self.prep_minutes,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'MealSlot':
        return cls(
            slot_id=d['slot_id'],
            name=d['name'],
            category=MealCategory(d['category']),
            time_of_day=d['time_of_day'],
            calories=d['calories'],
            protein_g=d['protein_g'],
            carb_g=d['carb_g'],
            fat_g=d['fat_g'],
            foods=list(d.get('foods', [])),
            preparation=d.get('preparation', ""),
            prep_minutes=d.get('prep_minutes', 20),
        )


@dataclass
class Hydration:
    liters: float
    beverages: List[str] = field(default_factory=list)


@dataclass
class DietPlan:
    """Daily nutrition plan."""
    plan_id: str
    name: str
    goal_label: str
    calories_per_day: int
    macros: MacroTargets
    meals: List[MealSlot]
    hydration: Hydration
    supplements: Optional[List[str]] = None
    observations: List[str] = field(default_factory=list)
    duration_days: int = 30
    difficulty: Difficulty = Difficulty.BEGINNER

    @property
    def meal_calories_total(self) -> int:
        return sum(meal.calories for meal in self.meals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'plan_id': self.plan_id,
            'name': self.name,
            'goal_label': self.goal_label,
            'calories_per_day': self.calories_per_day,
            'macros': self.macros.to_dict(),
            'meals': [m.to_dict() for m in self.meals],
            'hydration': {
                'liters': self.hydration.liters,
                'beverages': list(self.hydration.beverages),
            },
            'supplements': list(self.supplements) if self.supplements is not None else None,
            'observations': list(self.observations),
            'duration_days': self.duration_days,
            'difficulty': self.difficulty.value,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'DietPlan':
        supplements = d.get('supplements')
        return cls(
            plan_id=d['plan_id'],
            name=d['name'],
            goal_label=d['goal_label'],
            calories_per_day=d['calories_per_day'],
            macros=MacroTargets.from_dict(d['macros']),
            meals=[MealSlot.from_dict(m) for m in d['meals']],
            hydration=Hydration(
                liters=d['hydration']['liters'],
                beverages=list(d['hydration'].get('beverages', [])),
            ),
            supplements=list(supplements) if supplements is not None else None,
            observations=list(d.get('observations', [])),
            duration_days=d.get('duration_days', 30),
            difficulty=Difficulty(d.get('difficulty', Difficulty.BEGINNER.value)),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# TRAINING
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class Exercise:
    """
    A single exercise prescription.

    Strength and flexibility work is counted in reps; cardio also carries a
    per-set duration in seconds.
    """
    exercise_id: str
    name: str
    sets: int
    reps: int
    rest_seconds: int
    weight_kg: Optional[float] = None
    duration_seconds: Optional[int] = None
    technique: str = ""
    variations: List[str] = field(default_factory=list)
    observations: List[str] = field(default_factory=list)
    equipment: str = "bodyweight"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'exercise_id': self.exercise_id,
            'name': self.name,
            'sets': self.sets,
            'reps': self.reps,
            'rest_seconds': self.rest_seconds,
            'weight_kg': self.weight_kg,
            'duration_seconds': self.duration_seconds,
            'technique': self.technique,
            'variations': list(self.variations),
            'observations': list(self.observations),
            'equipment': self.equipment,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Exercise':
        return cls(
            exercise_id=d['exercise_id'],
            name=d['name'],
            sets=d['sets'],
            reps=d['reps'],
            rest_seconds=d['rest_seconds'],
            weight_kg=d.get('weight_kg'),
            duration_seconds=d.get('duration_seconds'),
            technique=d.get('technique', ""),
            variations=list(d.get('variations', [])),
            observations=list(d.get('observations', [])),
            equipment=d.get('equipment', "bodyweight"),
        )


@dataclass
class Workout:
    """One training day."""
    workout_id: str
    name: str
    day: str
    category: WorkoutCategory
    exercises: List[Exercise]
    total_duration_seconds: int
    estimated_calories: int
    equipment: List[str] = field(default_factory=list)
    warm_up: List[str] = field(default_factory=list)
    cool_down: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'workout_id': self.workout_id,
            'name': self.name,
            'day': self.day,
            'category': self.category.value,
            'exercises': [e.to_dict() for e in self.exercises],
            'total_duration_seconds': self.total_duration_seconds,
            'estimated_calories': self.estimated_calories,
            'equipment': list(self.equipment),
            'warm_up': list(self.warm_up),
            'cool_down': list(self.cool_down),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Workout':
        return cls(
            workout_id=d['workout_id'],
            name=d['name'],
            day=d['day'],
            category=WorkoutCategory(d['category']),
            exercises=[Exercise.from_dict(e) for e in d['exercises']],
            total_duration_seconds=d['total_duration_seconds'],
            estimated_calories=d['estimated_calories'],
            equipment=list(d.get('equipment', [])),
            warm_up=list(d.get('warm_up', [])),
            cool_down=list(d.get('cool_down', [])),
        )


@dataclass
class ProgressionPolicy:
    kind: ProgressionType = ProgressionType.LINEAR
    increment_kg: float = 2.5
    review_interval_weeks: int = 2


@dataclass
class RestSchedule:
    days: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class TrainingPlan:
    """Weekly training plan. weekly_frequency always equals len(workouts)."""
    plan_id: str
    name: str
    goal_label: str
    weekly_frequency: int
    workouts: List[Workout]
    rest: RestSchedule = field(default_factory=RestSchedule)
    progression: ProgressionPolicy = field(default_factory=ProgressionPolicy)
    duration_weeks: int = 12
    difficulty: Difficulty = Difficulty.BEGINNER

    def to_dict(self) -> Dict[str, Any]:
        return {
            'plan_id': self.plan_id,
            'name': self.name,
            'goal_label': self.goal_label,
            'weekly_frequency': self.weekly_frequency,
            'workouts': [w.to_dict() for w in self.workouts],
            'rest': {
                'days': list(self.rest.days),
                'recommendations': list(self.rest.recommendations),
            },
            'progression': {
                'kind': self.progression.kind.value,
                'increment_kg': self.progression.increment_kg,
                'review_interval_weeks': self.progression.review_interval_weeks,
            },
            'duration_weeks': self.duration_weeks,
            'difficulty': self.difficulty.value,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'TrainingPlan':
        rest = d.get('rest', {})
        progression = d.get('progression', {})
        return cls(
            plan_id=d['plan_id'],
            name=d['name'],
            goal_label=d['goal_label'],
            weekly_frequency=d['weekly_frequency'],
            workouts=[Workout.from_dict(w) for w in d['workouts']],
            rest=RestSchedule(
                days=list(rest.get('days', [])),
                recommendations=list(rest.get('recommendations', [])),
            ),
            progression=ProgressionPolicy(
                kind=ProgressionType(progression.get('kind', ProgressionType.LINEAR.value)),
                increment_kg=progression.get('increment_kg', 2.5),
                review_interval_weeks=progression.get('review_interval_weeks', 2),
            ),
            duration_weeks=d.get('duration_weeks', 12),
            difficulty=Difficulty(d.get('difficulty', Difficulty.BEGINNER.value)),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# ENVELOPE
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class GeneratedPlan:
    """
    Complete generated plan.

    Created by the generator, persisted by the caller, then either tuned in
    place by the adjuster or replaced wholesale on regeneration.
    """
    plan_id: str
    kind: PlanKind
    goal_label: str
    generated_at: datetime
    expires_at: datetime
    next_review: datetime
    diet: Optional[DietPlan] = None
    training: Optional[TrainingPlan] = None
    recommendations: List[str] = field(default_factory=list)

    def status(self, now: datetime) -> PlanStatus:
        """Expiry is checked at read time, never stored."""
        return PlanStatus.EXPIRED if now > self.expires_at else PlanStatus.ACTIVE

    def is_expired(self, now: datetime) -> bool:
        return self.status(now) == PlanStatus.EXPIRED

    def age_days(self, now: datetime) -> float:
        return (now - self.generated_at).total_seconds() / 86400

    def days_until_expiry(self, now: datetime) -> float:
        return (self.expires_at - now).total_seconds() / 86400

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            'plan_id': self.plan_id,
            'kind': self.kind.value,
            'goal_label': self.goal_label,
            'generated_at': self.generated_at.isoformat(),
            'expires_at': self.expires_at.isoformat(),
            'next_review': self.next_review.isoformat(),
            'diet': self.diet.to_dict() if self.diet else None,
            'training': self.training.to_dict() if self.training else None,
            'recommendations': list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'GeneratedPlan':
        """Rebuild a plan from to_dict() output."""
        return cls(
            plan_id=d['plan_id'],
            kind=PlanKind(d['kind']),
            goal_label=d['goal_label'],
            generated_at=datetime.fromisoformat(d['generated_at']),
            expires_at=datetime.fromisoformat(d['expires_at']),
            next_review=datetime.fromisoformat(d['next_review']),
            diet=DietPlan.from_dict(d['diet']) if d.get('diet') else None,
            training=TrainingPlan.from_dict(d['training']) if d.get('training') else None,
            recommendations=list(d.get('recommendations', [])),
        )
