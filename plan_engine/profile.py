"""
User Profile and Progress Log types.

The profile drives every generation decision; progress entries are the
append-only log the adjuster reads. Both are frozen: the engine treats
caller-owned data as read-only.
"""

import unicodedata
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Union


def _normalize_label(value: str) -> str:
    """Lowercase, strip accents and unify separators ('Muito-Ativo' -> 'muito_ativo')."""
    decomposed = unicodedata.normalize('NFKD', value.strip().lower())
    plain = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return plain.replace('-', '_').replace(' ', '_')


class _ParsableEnum(Enum):
    """
    Enum that resolves loose input with a fallback.

    Accepts a member, its value, its name or one of the app labels in
    _ALIASES. Anything else resolves to the subclass's _DEFAULT, which is
    assigned after each subclass is created (a value in the class body
    would become a member).
    """
    _DEFAULT: '_ParsableEnum'

    @classmethod
    def parse(cls, value: Union['_ParsableEnum', str, None]):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = _normalize_label(value)
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
            alias = _ALIASES.get(key)
            if isinstance(alias, cls):
                return alias
        return cls._DEFAULT


class Sex(_ParsableEnum):
    """Sex used to pick the BMR equation."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"         # Uses the female equation


class ActivityLevel(_ParsableEnum):
    """Five-point daily activity classification."""
    SEDENTARY = "sedentary"       # Desk job, no exercise
    LIGHT = "light"               # 1-3 sessions/week
    MODERATE = "moderate"         # 3-5 sessions/week
    ACTIVE = "active"             # 6-7 sessions/week
    VERY_ACTIVE = "very_active"   # Physical job or twice-daily training


class Goal(_ParsableEnum):
    """Primary user goal."""
    LOSE_WEIGHT = "lose_weight"
    GAIN_MASS = "gain_mass"
    MAINTAIN = "maintain"
    IMPROVE_HEALTH = "improve_health"
    GAIN_STRENGTH = "gain_strength"


Sex._DEFAULT = Sex.OTHER
ActivityLevel._DEFAULT = ActivityLevel.SEDENTARY
Goal._DEFAULT = Goal.MAINTAIN

# Labels stored by the mobile app (Portuguese), already normalized
_ALIASES: Dict[str, _ParsableEnum] = {
    'masculino': Sex.MALE,
    'feminino': Sex.FEMALE,
    'outro': Sex.OTHER,
    'sedentario': ActivityLevel.SEDENTARY,
    'leve': ActivityLevel.LIGHT,
    'moderado': ActivityLevel.MODERATE,
    'ativo': ActivityLevel.ACTIVE,
    'muito_ativo': ActivityLevel.VERY_ACTIVE,
    'perder_peso': Goal.LOSE_WEIGHT,
    'ganhar_massa': Goal.GAIN_MASS,
    'manter_peso': Goal.MAINTAIN,
    'melhorar_saude': Goal.IMPROVE_HEALTH,
    'ganhar_forca': Goal.GAIN_STRENGTH,
}


@dataclass(frozen=True)
class UserProfile:
    """
    Profile snapshot used for one generation or adjustment call.

    Range validation (age 13-120, weight 30-300 kg, height 100-250 cm) is the
    caller's job and happens before the engine is invoked.
    """
    # Demographics
    age: int
    weight_kg: float
    height_cm: float
    sex: Sex = Sex.OTHER

    # Goals and habits
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    goal: Goal = Goal.MAINTAIN
    dietary_restrictions: FrozenSet[str] = field(default_factory=frozenset)
    preferences: FrozenSet[str] = field(default_factory=frozenset)

    # Identity
    user_id: str = ""
    name: str = ""

    @property
    def bmi(self) -> float:
        """Calculate Body Mass Index."""
        height_m = self.height_cm / 100
        return self.weight_kg / (height_m ** 2)

    @classmethod
    def create(
        cls,
        age: int,
        weight_kg: float,
        height_cm: float,
        sex: Union[Sex, str, None] = None,
        activity_level: Union[ActivityLevel, str, None] = None,
        goal: Union[Goal, str, None] = None,
        dietary_restrictions: Optional[Iterable[str]] = None,
        preferences: Optional[Iterable[str]] = None,
        user_id: str = "",
        name: str = "",
    ) -> 'UserProfile':
        """Build a profile from loosely typed input, resolving enums."""
        return cls(
            age=age,
            weight_kg=weight_kg,
            height_cm=height_cm,
            sex=Sex.parse(sex),
            activity_level=ActivityLevel.parse(activity_level),
            goal=Goal.parse(goal),
            dietary_restrictions=frozenset(dietary_restrictions or ()),
            preferences=frozenset(preferences or ()),
            user_id=user_id,
            name=name,
        )


@dataclass(frozen=True)
class ProgressEntry:
    """One dated progress log entry. The date is unique within a series."""
    date: datetime
    weight_kg: float
    calories_consumed: float = 0.0
    exercise_sessions: int = 0
    water_liters: float = 0.0
