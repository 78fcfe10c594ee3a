# file: src/module7_consensus/reconciliation.py

"""
Cross-channel reconciliation.

Rules, given optional messages (visual, audio, metadata):
    1. VERIFIED: all three present, equal, and non-empty
    2. PARTIAL:  any two present values are equal
    3. NONE:     otherwise (including no values at all)

An empty string counts as a present value for PARTIAL but can never be
VERIFIED. Two-channel agreement is often a false positive, since a
single stray collision is not rare with the visual/audio heuristics.
"""

from enum import Enum
from itertools import combinations
from typing import Optional


class Verdict(str, Enum):
    """Classification of cross-channel agreement."""

    VERIFIED = "verified"
    PARTIAL = "partial"
    NONE = "none"


def reconcile(
    visual: Optional[str],
    audio: Optional[str],
    metadata: Optional[str]
) -> Verdict:
    """
    Compute the verdict for one decode run.

    Args:
        visual: Visual channel message (None = no result)
        audio: Audio channel message (None = no result)
        metadata: Metadata channel message (None = no result)

    Returns:
        Verdict
    """
    if visual is not None and visual == audio == metadata and visual:
        return Verdict.VERIFIED

    present = [value for value in (visual, audio, metadata) if value is not None]
    for first, second in combinations(present, 2):
        if first == second:
            return Verdict.PARTIAL

    return Verdict.NONE
