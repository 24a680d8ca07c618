"""
Synthetic user data generation for simulation and demos.

Generates realistic user profiles and progress logs with:
- Varied demographics and goals (archetypes)
- Weekly weight response with day-to-day noise
- Logging compliance (missed weigh-ins)
- Training compliance (missed sessions)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Dict, Any

import numpy as np

from plan_engine.profile import ActivityLevel, Goal, ProgressEntry, Sex, UserProfile


@dataclass
class SimulatedUser:
    """
    Profile plus the behavioral traits that drive a simulated progress log.

    The profile is what the engine sees; the traits are hidden ground truth.
    """
    profile: UserProfile
    archetype: str

    # Response characteristics
    weekly_weight_change_kg: float   # Typical weight drift per week
    weight_noise_kg: float           # Std dev of a single weigh-in

    # Behavioral characteristics
    logging_rate: float              # 0-1, probability of logging in a week
    session_rate: float              # 0-1, share of planned sessions done

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'user_id': self.profile.user_id,
            'name': self.profile.name,
            'archetype': self.archetype,
            'age': self.profile.age,
            'sex': self.profile.sex.value,
            'weight_kg': self.profile.weight_kg,
            'height_cm': self.profile.height_cm,
            'activity_level': self.profile.activity_level.value,
            'goal': self.profile.goal.value,
            'weekly_weight_change_kg': self.weekly_weight_change_kg,
            'logging_rate': self.logging_rate,
            'session_rate': self.session_rate,
        }


def _build_profile(
    id_num: int,
    archetype: str,
    age_range: tuple,
    bmi_range: tuple,
    activity_levels: List[ActivityLevel],
    goal: Goal,
    restrictions: Optional[List[str]] = None
) -> UserProfile:
    sex = Sex(str(np.random.choice([Sex.MALE.value, Sex.FEMALE.value])))
    if sex == Sex.MALE:
        height_cm = np.random.uniform(165, 190)
    else:
        height_cm = np.random.uniform(152, 178)
    bmi = np.random.uniform(*bmi_range)
    weight_kg = bmi * (height_cm / 100) ** 2
    activity = activity_levels[np.random.randint(len(activity_levels))]

    return UserProfile(
        age=int(np.random.randint(*age_range)),
        weight_kg=round(float(weight_kg), 1),
        height_cm=round(float(height_cm), 1),
        sex=sex,
        activity_level=activity,
        goal=goal,
        dietary_restrictions=frozenset(restrictions or ()),
        user_id=f"{archetype}_{id_num}",
        name=f"{archetype.replace('_', ' ').title()} {id_num}",
    )


# ═══════════════════════════════════════════════════════════════════════════════
# USER ARCHETYPES
# ═══════════════════════════════════════════════════════════════════════════════

def create_steady_loser(id_num: int) -> SimulatedUser:
    """Overweight user losing weight at a sustainable pace."""
    profile = _build_profile(
        id_num, 'steady_loser', (28, 50), (27, 33),
        [ActivityLevel.SEDENTARY, ActivityLevel.LIGHT], Goal.LOSE_WEIGHT,
    )
    return SimulatedUser(
        profile=profile,
        archetype='steady_loser',
        weekly_weight_change_kg=float(np.random.uniform(-0.5, -0.3)),
        weight_noise_kg=float(np.random.uniform(0.1, 0.3)),
        logging_rate=float(np.random.uniform(0.85, 0.98)),
        session_rate=float(np.random.uniform(0.75, 0.90)),
    )


def create_rapid_loser(id_num: int) -> SimulatedUser:
    """Aggressive dieter; large losses trigger plan regeneration."""
    profile = _build_profile(
        id_num, 'rapid_loser', (25, 45), (29, 36),
        [ActivityLevel.LIGHT, ActivityLevel.MODERATE], Goal.LOSE_WEIGHT,
    )
    return SimulatedUser(
        profile=profile,
        archetype='rapid_loser',
        weekly_weight_change_kg=float(np.random.uniform(-1.2, -0.8)),
        weight_noise_kg=float(np.random.uniform(0.2, 0.4)),
        logging_rate=float(np.random.uniform(0.90, 1.0)),
        session_rate=float(np.random.uniform(0.85, 0.98)),
    )


def create_mass_gainer(id_num: int) -> SimulatedUser:
    """Lean user in a bulking phase, often gaining too slowly."""
    profile = _build_profile(
        id_num, 'mass_gainer', (18, 35), (19, 23),
        [ActivityLevel.MODERATE, ActivityLevel.ACTIVE], Goal.GAIN_MASS,
    )
    return SimulatedUser(
        profile=profile,
        archetype='mass_gainer',
        weekly_weight_change_kg=float(np.random.uniform(0.05, 0.25)),
        weight_noise_kg=float(np.random.uniform(0.1, 0.3)),
        logging_rate=float(np.random.uniform(0.80, 0.95)),
        session_rate=float(np.random.uniform(0.85, 0.98)),
    )


def create_strength_athlete(id_num: int) -> SimulatedUser:
    """Experienced lifter chasing strength at stable weight."""
    profile = _build_profile(
        id_num, 'strength_athlete', (20, 40), (22, 27),
        [ActivityLevel.ACTIVE, ActivityLevel.VERY_ACTIVE], Goal.GAIN_STRENGTH,
    )
    return SimulatedUser(
        profile=profile,
        archetype='strength_athlete',
        weekly_weight_change_kg=float(np.random.uniform(-0.05, 0.1)),
        weight_noise_kg=float(np.random.uniform(0.1, 0.2)),
        logging_rate=float(np.random.uniform(0.90, 1.0)),
        session_rate=float(np.random.uniform(0.90, 1.0)),
    )


def create_health_seeker(id_num: int) -> SimulatedUser:
    """Older user exercising for general health."""
    profile = _build_profile(
        id_num, 'health_seeker', (45, 70), (23, 29),
        [ActivityLevel.SEDENTARY, ActivityLevel.LIGHT], Goal.IMPROVE_HEALTH,
        restrictions=['lactose'],
    )
    return SimulatedUser(
        profile=profile,
        archetype='health_seeker',
        weekly_weight_change_kg=float(np.random.uniform(-0.1, 0.05)),
        weight_noise_kg=float(np.random.uniform(0.1, 0.3)),
        logging_rate=float(np.random.uniform(0.75, 0.90)),
        session_rate=float(np.random.uniform(0.65, 0.85)),
    )


def create_inconsistent_logger(id_num: int) -> SimulatedUser:
    """Maintainer who rarely logs; low consistency drives adjustments."""
    profile = _build_profile(
        id_num, 'inconsistent_logger', (22, 45), (21, 28),
        [ActivityLevel.LIGHT, ActivityLevel.MODERATE], Goal.MAINTAIN,
    )
    return SimulatedUser(
        profile=profile,
        archetype='inconsistent_logger',
        weekly_weight_change_kg=float(np.random.uniform(-0.1, 0.1)),
        weight_noise_kg=float(np.random.uniform(0.2, 0.5)),
        logging_rate=float(np.random.uniform(0.35, 0.60)),
        session_rate=float(np.random.uniform(0.40, 0.65)),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# PROFILE GENERATION
# ═══════════════════════════════════════════════════════════════════════════════

ARCHETYPE_CREATORS = [
    (create_steady_loser, 3),      # 3 instances
    (create_rapid_loser, 2),
    (create_mass_gainer, 3),
    (create_strength_athlete, 2),
    (create_health_seeker, 2),
    (create_inconsistent_logger, 2),
]


def generate_user_profiles(
    n_profiles: int = 14,
    seed: Optional[int] = None
) -> List[SimulatedUser]:
    """
    Generate diverse simulated users.

    Args:
        n_profiles: Number of users to generate
        seed: Random seed for reproducibility

    Returns:
        List of SimulatedUser objects
    """
    if seed is not None:
        np.random.seed(seed)

    users = []

    # First, fill the default count of each archetype
    for creator, default_count in ARCHETYPE_CREATORS:
        for i in range(default_count):
            if len(users) >= n_profiles:
                break
            users.append(creator(i + 1))

    # If we need more, randomly select archetypes
    while len(users) < n_profiles:
        creator, _ = ARCHETYPE_CREATORS[np.random.randint(len(ARCHETYPE_CREATORS))]
        users.append(creator(len(users) + 1))

    return users[:n_profiles]


# ═══════════════════════════════════════════════════════════════════════════════
# PROGRESS DATA GENERATION
# ═══════════════════════════════════════════════════════════════════════════════

def generate_progress_entry(
    user: SimulatedUser,
    true_weight_kg: float,
    date: datetime,
    planned_sessions: int,
    target_calories: float = 0.0,
    target_water_liters: float = 0.0
) -> ProgressEntry:
    """
    Generate a single weigh-in.

    Args:
        user: Simulated user
        true_weight_kg: Underlying weight before measurement noise
        date: Entry date
        planned_sessions: Sessions planned for the week
        target_calories: Planned daily calories (0 = unknown)
        target_water_liters: Planned daily water (0 = unknown)

    Returns:
        ProgressEntry
    """
    measured = true_weight_kg + np.random.normal(0, user.weight_noise_kg)
    sessions = int(np.random.binomial(planned_sessions, user.session_rate))
    calories = target_calories * np.random.uniform(0.9, 1.1) if target_calories else 0.0
    water = target_water_liters * np.random.uniform(0.7, 1.05) if target_water_liters else 0.0

    return ProgressEntry(
        date=date,
        weight_kg=round(float(measured), 1),
        calories_consumed=round(float(calories)),
        exercise_sessions=sessions,
        water_liters=round(float(water), 1),
    )


def generate_progress_history(
    user: SimulatedUser,
    weeks: int,
    start: datetime,
    planned_sessions: int = 3,
    seed: Optional[int] = None
) -> List[ProgressEntry]:
    """
    Generate a weekly progress log independent of any plan.

    The first week is always logged so the history has a baseline.

    Args:
        user: Simulated user
        weeks: Number of weeks after the baseline
        start: Date of the baseline entry
        planned_sessions: Sessions planned per week
        seed: Random seed

    Returns:
        Chronological list of ProgressEntry
    """
    if seed is not None:
        np.random.seed(seed)

    weight = user.profile.weight_kg
    history = [ProgressEntry(date=start, weight_kg=weight)]

    for week in range(1, weeks + 1):
        weight += user.weekly_weight_change_kg
        if np.random.random() > user.logging_rate:
            continue
        date = start + timedelta(weeks=week)
        history.append(generate_progress_entry(user, weight, date, planned_sessions))

    return history
