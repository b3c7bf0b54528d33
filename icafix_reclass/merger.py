"""
Merge of automatic FIX labels with manual reclassifications.

Precedence for each component i in 1..N (first match wins):

1. i in ReclassifyAsSignal                          -> SIGNAL
2. i in FIX Signal and i not in ReclassifyAsNoise   -> SIGNAL
3. otherwise                                        -> NOISE

The FIX noise list is not consulted: anything without a surviving signal
vote is noise. Contradictory inputs still produce a label here; rejecting
them is the validator's job.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List

import numpy as np

from .labels import FinalLabel, MergeRule
from .masks import membership_mask


@dataclass(frozen=True)
class ComponentDecision:
    """Label assigned to one component and the rule that assigned it."""
    index: int
    label: FinalLabel
    rule: MergeRule


@dataclass
class MergeResult:
    """
    Final partition of components 1..N.

    Attributes
    ----------
    n_components : int
        Number of components merged
    signal : list of int
        Components labelled SIGNAL, ascending
    noise : list of int
        Components labelled NOISE, ascending
    decisions : list of ComponentDecision
        One entry per component, ascending by index
    """
    n_components: int
    signal: List[int] = field(default_factory=list)
    noise: List[int] = field(default_factory=list)
    decisions: List[ComponentDecision] = field(default_factory=list)

    def label_of(self, index: int) -> FinalLabel:
        if not 1 <= index <= self.n_components:
            raise IndexError(f"Component {index} outside 1..{self.n_components}")
        return self.decisions[index - 1].label

    def rule_counts(self) -> Dict[str, int]:
        """Number of components decided by each rule."""
        counts = {rule.value: 0 for rule in MergeRule}
        for decision in self.decisions:
            counts[decision.rule.value] += 1
        return counts


def merge_classifications(
    n_components: int,
    orig_signal: AbstractSet[int],
    reclass_signal: AbstractSet[int],
    reclass_noise: AbstractSet[int],
) -> MergeResult:
    """
    Apply the precedence rules to every component in a single pass.

    Args:
        n_components: Total number of ICA components (N >= 0)
        orig_signal: FIX signal components
        reclass_signal: Components manually reclassified as signal
        reclass_noise: Components manually reclassified as noise

    Returns:
        MergeResult with ordered signal/noise lists and the decision log
    """
    is_orig_signal = membership_mask(orig_signal, n_components)
    is_reclass_signal = membership_mask(reclass_signal, n_components)
    is_reclass_noise = membership_mask(reclass_noise, n_components)

    # Rule column per component: 0 = rule 1, 1 = rule 2, 2 = fallback
    rules = np.select(
        [is_reclass_signal, is_orig_signal & ~is_reclass_noise],
        [0, 1],
        default=2,
    )

    rule_order = (MergeRule.RECLASSIFIED_SIGNAL, MergeRule.AUTOMATIC_SIGNAL, MergeRule.DEFAULT_NOISE)
    result = MergeResult(n_components=n_components)

    for i in range(1, n_components + 1):
        rule = rule_order[int(rules[i])]
        if rule is MergeRule.DEFAULT_NOISE:
            label = FinalLabel.NOISE
            result.noise.append(i)
        else:
            label = FinalLabel.SIGNAL
            result.signal.append(i)
        result.decisions.append(ComponentDecision(index=i, label=label, rule=rule))

    return result
