"""
Label enums for hand reclassification of ICA components.

Three small vocabularies shared across the merge, validation and
writing stages:
- FinalLabel: the outcome for one component (signal kept, noise removed)
- MergeRule: which precedence rule produced a FinalLabel
- FailureKind: the consistency checks run over the four input sets

They live in their own module so the merger and validator can both
import them without importing each other.
"""

from enum import Enum


# =============================================================================
# Merge outcome
# =============================================================================

class FinalLabel(str, Enum):
    """Final classification of a single component."""
    SIGNAL = "SIGNAL"      # Retained by cleanup
    NOISE = "NOISE"        # Candidate for removal


class MergeRule(str, Enum):
    """Precedence rule that decided a component's FinalLabel (first match wins)."""
    RECLASSIFIED_SIGNAL = "RECLASSIFIED_SIGNAL"  # Listed in ReclassifyAsSignal
    AUTOMATIC_SIGNAL = "AUTOMATIC_SIGNAL"        # FIX signal, not demoted by hand
    DEFAULT_NOISE = "DEFAULT_NOISE"              # No surviving signal vote


# =============================================================================
# Consistency failures
# =============================================================================

class FailureKind(str, Enum):
    """Named consistency failures, checked in this order for every component."""
    DUPLICATE_MANUAL = "DUPLICATE_MANUAL"        # In both manual lists
    MISSING_AUTOMATIC = "MISSING_AUTOMATIC"      # In neither FIX list
    DUPLICATE_AUTOMATIC = "DUPLICATE_AUTOMATIC"  # In both FIX lists

    @property
    def message_template(self) -> str:
        return _FAILURE_MESSAGES[self]

    def describe(self, index: int) -> str:
        """Operator-facing message for this failure on component `index`."""
        return self.message_template.format(index=index)


_FAILURE_MESSAGES = {
    FailureKind.DUPLICATE_MANUAL: "Duplicate Component Error with Manual Classification on ICA: {index}",
    FailureKind.MISSING_AUTOMATIC: "Missing Component Error with Automatic Classification on ICA: {index}",
    FailureKind.DUPLICATE_AUTOMATIC: "Duplicate Component Error with Automatic Classification on ICA: {index}",
}
