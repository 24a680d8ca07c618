"""Report utilities."""

from .reports import format_plan, format_adjustment_result, generate_simulation_report

__all__ = [
    'format_plan',
    'format_adjustment_result',
    'generate_simulation_report',
]
