"""Seed handling: explicit seeds pass through, missing ones are randomised."""

from __future__ import annotations

import random
from typing import Optional

MAX_SEED = 2**31 - 1


def resolve_seed(seed: Optional[int]) -> int:
    """Return ``seed`` when positive, otherwise a random seed in ``[1, 2**31 - 1)``."""

    if seed is not None and seed > 0:
        return int(seed)
    return random.randrange(1, MAX_SEED)


__all__ = ["MAX_SEED", "resolve_seed"]
