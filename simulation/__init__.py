"""Simulation engine for plan lifecycle runs."""

from .engine import SimulationEngine, SimulationResult, WeeklySnapshot, aggregate_results

__all__ = [
    'SimulationEngine',
    'SimulationResult',
    'WeeklySnapshot',
    'aggregate_results',
]
