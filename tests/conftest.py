"""Shared fixtures for the plan engine tests."""

import random
from datetime import datetime

import pytest

from plan_engine.profile import ActivityLevel, Goal, Sex, UserProfile


START = datetime(2025, 3, 3, 9, 0)


class FakeClock:
    """Mutable clock for the engine facade."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def start():
    return START


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def loser_profile():
    """Male, 28 y, 75.5 kg, 175 cm, moderately active, losing weight."""
    return UserProfile(
        age=28,
        weight_kg=75.5,
        height_cm=175,
        sex=Sex.MALE,
        activity_level=ActivityLevel.MODERATE,
        goal=Goal.LOSE_WEIGHT,
        user_id='user-1',
        name='Test user',
    )


@pytest.fixture
def gainer_profile():
    return UserProfile(
        age=24,
        weight_kg=70,
        height_cm=180,
        sex=Sex.MALE,
        activity_level=ActivityLevel.MODERATE,
        goal=Goal.GAIN_MASS,
    )
