"""Dimension snapping for vendor size constraints."""

from __future__ import annotations

import math
from types import ModuleType
from typing import Tuple

from core.providers.types import GenerateParams


def snap_dimension(value: int, multiple: int, minimum: int, maximum: int) -> int:
    """Round ``value`` to the nearest ``multiple`` and clamp to ``[minimum, maximum]``.

    Never raises: out-of-range or non-positive sizes are clamped silently.
    """

    snapped = int(math.floor(max(value, 0) / multiple + 0.5)) * multiple
    return max(minimum, min(maximum, snapped))


def snap_size(params: GenerateParams, settings: ModuleType) -> Tuple[int, int]:
    """Snap ``params`` width/height using a vendor config module's limits."""

    return (
        snap_dimension(params.width, settings.SIZE_MULTIPLE, settings.MIN_DIMENSION, settings.MAX_DIMENSION),
        snap_dimension(params.height, settings.SIZE_MULTIPLE, settings.MIN_DIMENSION, settings.MAX_DIMENSION),
    )


__all__ = ["snap_dimension", "snap_size"]
