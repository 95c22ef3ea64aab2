"""Shared value types for image provider resolution and dispatch.

``GenerateParams`` is the caller's intent and is handed unchanged to every
adapter. Tool-specific inputs live in a typed ``extra`` variant whose class must
match ``tool``; the pairing is checked once at construction so adapters can read
fields without presence checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from config.image.defaults import DEFAULT_HEIGHT, DEFAULT_TIMEOUT_MS, DEFAULT_WIDTH
from core.exceptions import ValidationError


class ProviderName(str, Enum):
    """Every image backend the dispatcher knows about."""

    REPLICATE = "replicate"
    FAL = "fal"
    TOGETHER = "together"
    HUGGINGFACE = "huggingface"
    POLLINATIONS = "pollinations"
    STABLEHORDE = "stablehorde"
    PRODIA = "prodia"
    COMFYUI = "comfyui"

    def __str__(self) -> str:
        return self.value


class Tool(str, Enum):
    """Studio tool that produced the request."""

    GENERATE = "generate"
    ANIMATE = "animate"
    ROTATE = "rotate"
    INPAINT = "inpaint"
    SCENE = "scene"

    def __str__(self) -> str:
        return self.value


class StylePreset(str, Enum):
    """Curated style identifiers expanded into prompt tokens."""

    RPG_ICON = "rpg_icon"
    EMOJI = "emoji"
    TILESET = "tileset"
    SPRITE_SHEET = "sprite_sheet"
    RAW = "raw"
    GAME_UI = "game_ui"
    CHARACTER_IDLE = "character_idle"
    CHARACTER_SIDE = "character_side"
    TOP_DOWN_CHAR = "top_down_char"
    ISOMETRIC = "isometric"
    CHIBI = "chibi"
    HORROR = "horror"
    SCI_FI = "sci_fi"
    NATURE_TILE = "nature_tile"
    ANIMATED_EFFECT = "animated_effect"
    PORTRAIT = "portrait"
    BADGE_ICON = "badge_icon"
    WEAPON_ICON = "weapon_icon"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class AnimateExtra:
    source_image_url: Optional[str] = None
    frames: int = 16
    fps: int = 8
    loop: bool = True

    def __post_init__(self) -> None:
        if self.frames <= 0:
            raise ValidationError("frames must be positive", field="extra.frames")
        if self.fps <= 0:
            raise ValidationError("fps must be positive", field="extra.fps")


@dataclass(frozen=True, slots=True)
class RotateExtra:
    reference_image_url: Optional[str] = None
    directions: int = 4

    def __post_init__(self) -> None:
        if self.directions not in (4, 8):
            raise ValidationError("directions must be 4 or 8", field="extra.directions")


@dataclass(frozen=True, slots=True)
class InpaintExtra:
    image_url: str
    mask_url: str

    def __post_init__(self) -> None:
        if not self.image_url:
            raise ValidationError("Inpainting requires a source image", field="extra.image_url")
        if not self.mask_url:
            raise ValidationError("Inpainting requires a mask image", field="extra.mask_url")


@dataclass(frozen=True, slots=True)
class SceneExtra:
    grid_size: int = 1
    tileable: bool = False

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValidationError("grid_size must be positive", field="extra.grid_size")


ToolExtra = Union[AnimateExtra, RotateExtra, InpaintExtra, SceneExtra]

_EXTRA_FOR_TOOL = {
    Tool.ANIMATE: AnimateExtra,
    Tool.ROTATE: RotateExtra,
    Tool.INPAINT: InpaintExtra,
    Tool.SCENE: SceneExtra,
}


@dataclass(frozen=True, slots=True)
class GenerateParams:
    """Immutable generation request handed to every adapter."""

    tool: Tool
    prompt: str
    negative_prompt: Optional[str] = None
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    steps: Optional[int] = None
    guidance: Optional[float] = None
    seed: Optional[int] = None
    style_preset: Optional[StylePreset] = None
    asset_category: Optional[str] = None
    pixel_era: Optional[str] = None
    background_mode: Optional[str] = None
    outline_style: Optional[str] = None
    palette_size: Optional[int] = None
    extra: Optional[ToolExtra] = None
    model_override: Optional[str] = None

    def __post_init__(self) -> None:
        try:
            tool = Tool(self.tool)
        except ValueError as exc:
            raise ValidationError(f"Unknown tool: {self.tool}", field="tool") from exc
        object.__setattr__(self, "tool", tool)

        if self.style_preset is not None:
            try:
                preset = StylePreset(self.style_preset)
            except ValueError as exc:
                raise ValidationError(
                    f"Unknown style preset: {self.style_preset}", field="style_preset"
                ) from exc
            object.__setattr__(self, "style_preset", preset)

        if not self.prompt or not self.prompt.strip():
            raise ValidationError("Prompt cannot be empty", field="prompt")

        if self.extra is not None:
            expected = _EXTRA_FOR_TOOL.get(tool)
            if expected is None or not isinstance(self.extra, expected):
                raise ValidationError(
                    f"{type(self.extra).__name__} does not apply to tool '{tool.value}'",
                    field="extra",
                )

    @property
    def animate(self) -> Optional[AnimateExtra]:
        return self.extra if isinstance(self.extra, AnimateExtra) else None

    @property
    def rotate(self) -> Optional[RotateExtra]:
        return self.extra if isinstance(self.extra, RotateExtra) else None

    @property
    def inpaint(self) -> Optional[InpaintExtra]:
        return self.extra if isinstance(self.extra, InpaintExtra) else None

    @property
    def scene(self) -> Optional[SceneExtra]:
        return self.extra if isinstance(self.extra, SceneExtra) else None


@dataclass(frozen=True, slots=True)
class GenerateResult:
    """Normalised adapter output. Failures raise instead of returning."""

    provider: ProviderName
    result_url: str
    provider_job_id: Optional[str] = None
    result_urls: Tuple[str, ...] = ()
    duration_ms: int = 0
    resolved_seed: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Credentials and endpoints for one adapter invocation.

    Built per request; never cached, so one tenant's key cannot leak into
    another tenant's call.
    """

    api_key: str = field(default="", repr=False)
    comfyui_host: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def has_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


@dataclass(frozen=True, slots=True)
class ProviderEntry:
    """Ranked voice/text provider; lower ``priority`` wins."""

    provider: str
    model: str
    priority: int
    requires: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ProviderStatus:
    """Settings-UI view of one image provider."""

    provider: ProviderName
    label: str
    description: str
    docs_url: str
    key_env_var: Optional[str]
    requires_key: bool
    free: bool
    free_credits_note: str
    configured: bool
    tools: Tuple[Tool, ...]
    max_width: int
    max_height: int
    supports_seed: bool
    supports_negative_prompt: bool


__all__ = [
    "AnimateExtra",
    "GenerateParams",
    "GenerateResult",
    "InpaintExtra",
    "ProviderConfig",
    "ProviderEntry",
    "ProviderName",
    "ProviderStatus",
    "RotateExtra",
    "SceneExtra",
    "StylePreset",
    "Tool",
    "ToolExtra",
]
