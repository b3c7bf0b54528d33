"""
Membership masks for component index sets.

Component indices are 1-based, so a mask for N components has N + 1
slots and slot 0 is always False. Indices above N are dropped.
"""

from typing import AbstractSet

import numpy as np


def membership_mask(indices: AbstractSet[int], n_components: int) -> np.ndarray:
    """Boolean array where ``mask[i]`` is True iff component i is in `indices`."""
    if n_components < 0:
        raise ValueError(f"n_components cannot be negative, got {n_components}")

    mask = np.zeros(n_components + 1, dtype=bool)
    in_range = [i for i in indices if 1 <= i <= n_components]
    if in_range:
        mask[np.asarray(in_range, dtype=np.intp)] = True
    return mask


def out_of_range(indices: AbstractSet[int], n_components: int) -> list:
    """Sorted indices that do not name a component in ``1..n_components``."""
    return sorted(i for i in indices if i < 1 or i > n_components)
