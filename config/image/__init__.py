"""Image configuration exports."""

from . import defaults, providers, routing, styles
from .defaults import *  # noqa: F401,F403
from .routing import *  # noqa: F401,F403
from .styles import *  # noqa: F401,F403

__all__ = [
    *defaults.__all__,
    *routing.__all__,
    *styles.__all__,
    "providers",
]
