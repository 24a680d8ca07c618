"""Synthetic data generation utilities."""

from .synthetic import (
    SimulatedUser,
    generate_user_profiles,
    generate_progress_entry,
    generate_progress_history,
)

__all__ = [
    'SimulatedUser',
    'generate_user_profiles',
    'generate_progress_entry',
    'generate_progress_history',
]
