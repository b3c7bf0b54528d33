"""
Consistency checks over the four classification sets.

Every component is checked against every rule; the scan never stops
early so the operator sees the full list of problems in one run.
"""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List

import numpy as np

from .errors import ClassificationConsistencyError
from .labels import FailureKind
from .masks import membership_mask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """A single failed check on a single component."""
    index: int
    kind: FailureKind

    @property
    def message(self) -> str:
        return self.kind.describe(self.index)


@dataclass
class ValidationReport:
    """All failures found for one run, ordered by component then check."""
    n_components: int
    failures: List[ValidationFailure] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.failures

    def counts(self) -> Dict[str, int]:
        counts = {kind.value: 0 for kind in FailureKind}
        for failure in self.failures:
            counts[failure.kind.value] += 1
        return counts

    def messages(self) -> List[str]:
        return [failure.message for failure in self.failures]

    def raise_if_failed(self):
        """Raise ClassificationConsistencyError carrying every failure, if any."""
        if self.failures:
            raise ClassificationConsistencyError(self.failures)


def validate_classifications(
    n_components: int,
    orig_signal: AbstractSet[int],
    orig_noise: AbstractSet[int],
    reclass_signal: AbstractSet[int],
    reclass_noise: AbstractSet[int],
) -> ValidationReport:
    """
    Check that FIX labelled every component exactly once and that no
    component was reclassified by hand in both directions.

    Args:
        n_components: Total number of ICA components (N >= 0)
        orig_signal: FIX signal components
        orig_noise: FIX noise components
        reclass_signal: Components manually reclassified as signal
        reclass_noise: Components manually reclassified as noise

    Returns:
        ValidationReport (empty when all checks pass)
    """
    is_orig_signal = membership_mask(orig_signal, n_components)
    is_orig_noise = membership_mask(orig_noise, n_components)
    is_reclass_signal = membership_mask(reclass_signal, n_components)
    is_reclass_noise = membership_mask(reclass_noise, n_components)

    # Column order matches FailureKind declaration order
    checks = np.column_stack([
        is_reclass_signal & is_reclass_noise,
        ~(is_orig_signal | is_orig_noise),
        is_orig_signal & is_orig_noise,
    ])
    kinds = list(FailureKind)

    report = ValidationReport(n_components=n_components)
    for i in range(1, n_components + 1):
        for column in np.flatnonzero(checks[i]):
            failure = ValidationFailure(index=i, kind=kinds[int(column)])
            report.failures.append(failure)
            logger.debug(failure.message)

    return report
