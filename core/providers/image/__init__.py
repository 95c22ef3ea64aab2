"""Image provider implementations."""

from .comfyui import ComfyUIImageProvider
from .fal import FalImageProvider
from .huggingface import HuggingFaceImageProvider
from .pollinations import PollinationsImageProvider
from .prodia import ProdiaImageProvider
from .replicate import ReplicateImageProvider
from .stablehorde import StableHordeImageProvider
from .together import TogetherImageProvider

__all__ = [
    "ComfyUIImageProvider",
    "FalImageProvider",
    "HuggingFaceImageProvider",
    "PollinationsImageProvider",
    "ProdiaImageProvider",
    "ReplicateImageProvider",
    "StableHordeImageProvider",
    "TogetherImageProvider",
]
