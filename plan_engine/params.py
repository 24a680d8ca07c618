"""
Engine Parameters: Tunable thresholds for plan generation and adjustment.

Every threshold the adjuster and the progress analyzer compare against lives
here, so a deployment can tighten or relax the adaptive behavior without
touching the decision code.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Tuple


@dataclass
class EngineParams:
    """
    Tunable parameters for plan generation and adjustment.

    Percentages are expressed as decimals (e.g., 0.05 = 5%).
    Consistency and adherence thresholds are on the 0-100 scale.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PLAN LIFETIME
    # ═══════════════════════════════════════════════════════════════════════════

    validity_days: int = 30          # generated_at -> expires_at
    review_interval_days: int = 7    # generated_at -> next_review
    max_recommendations: int = 8     # Cap on the recommendation list

    # ═══════════════════════════════════════════════════════════════════════════
    # PROGRESS ANALYSIS
    # ═══════════════════════════════════════════════════════════════════════════

    trend_threshold_kg: float = 0.5  # |change| below this reads as stable
    low_consistency: float = 70.0    # Below this: log more often
    low_adherence: float = 60.0      # Below this: revisit the schedule
    fast_loss_kg: float = 2.0        # Losing more than this is too fast
    slow_change_kg: float = 0.5      # Changing less than this is too slow

    # ═══════════════════════════════════════════════════════════════════════════
    # REGENERATION TRIGGERS (any one discards the current plan)
    # ═══════════════════════════════════════════════════════════════════════════

    regen_weight_change_kg: float = 5.0
    regen_min_consistency: float = 30.0
    regen_min_adherence: float = 20.0
    regen_max_age_days: float = 60.0

    # ═══════════════════════════════════════════════════════════════════════════
    # DIET TUNING
    # ═══════════════════════════════════════════════════════════════════════════

    diet_loss_trigger_kg: float = 2.0    # Losing faster -> cut calories
    diet_gain_trigger_kg: float = 1.0    # Gaining slower -> add calories
    calorie_step: float = 0.05
    hydration_consistency: float = 70.0  # Below this: raise water target
    hydration_step: float = 0.10

    # ═══════════════════════════════════════════════════════════════════════════
    # TRAINING TUNING
    # ═══════════════════════════════════════════════════════════════════════════

    frequency_decrease_consistency: float = 60.0
    frequency_increase_consistency: float = 90.0
    frequency_increase_adherence: float = 80.0
    min_frequency: int = 2
    max_frequency: int = 6
    difficulty_consistency: float = 80.0
    difficulty_loss_kg: float = 2.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'EngineParams':
        """Create parameters from dictionary."""
        return cls(**d)

    def validate(self) -> Tuple[bool, str]:
        """Validate parameter constraints."""
        issues = []

        if not (0 < self.review_interval_days <= self.validity_days):
            issues.append("Review interval must be positive and within validity")

        if self.max_recommendations < 1:
            issues.append("At least one recommendation must be kept")

        if not (1 <= self.min_frequency <= self.max_frequency <= 7):
            issues.append("Frequency bounds: 1 <= min <= max <= 7")

        if not (0 <= self.regen_min_consistency < self.frequency_decrease_consistency
                < self.frequency_increase_consistency <= 100):
            issues.append("Consistency thresholds must be ascending within [0, 100]")

        if not (0 < self.calorie_step < 0.5):
            issues.append("Calorie step must be in (0, 0.5)")

        if not (0 < self.hydration_step < 1.0):
            issues.append("Hydration step must be in (0, 1)")

        if self.trend_threshold_kg <= 0:
            issues.append("Trend threshold must be positive")

        if issues:
            return False, "; ".join(issues)
        return True, "Valid"


DEFAULT_PARAMS = EngineParams()
