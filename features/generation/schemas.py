"""Pydantic schemas for the generation feature."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import ValidationError
from core.providers.types import (
    AnimateExtra,
    GenerateParams,
    InpaintExtra,
    ProviderName,
    RotateExtra,
    SceneExtra,
    StylePreset,
    Tool,
    ToolExtra,
)

MAX_BATCH_ITEMS = 16

_EXTRA_MODELS = {
    Tool.ANIMATE: AnimateExtra,
    Tool.ROTATE: RotateExtra,
    Tool.INPAINT: InpaintExtra,
    Tool.SCENE: SceneExtra,
}


def build_extra(tool: Tool, extra: Optional[Dict[str, Any]]) -> Optional[ToolExtra]:
    """Convert the request's ``extra`` object into the tool's typed variant."""

    if not extra:
        return None
    extra_class = _EXTRA_MODELS.get(tool)
    if extra_class is None:
        raise ValidationError(f"Tool '{tool.value}' does not take extra fields", field="extra")
    try:
        return extra_class(**extra)
    except TypeError as exc:
        raise ValidationError(f"Invalid extra fields for '{tool.value}': {exc}", field="extra") from exc


class GenerationRequest(BaseModel):
    """One asset generation request."""

    model_config = ConfigDict(protected_namespaces=())

    prompt: str = Field(..., min_length=1, description="Free-text description of the asset")
    mode: str = Field("pixel", description="Studio mode: pixel, business, vector or emoji")
    tool: Tool = Tool.GENERATE
    use_hd: bool = False
    style: Optional[str] = Field(None, description="Routing style hint, e.g. 'dithered' or 'logo'")
    provider: Optional[ProviderName] = Field(None, description="Pin a provider instead of routing")
    failover: bool = True

    negative_prompt: Optional[str] = None
    width: int = Field(512, ge=1, description="Snapped and clamped to each provider's limits")
    height: int = Field(512, ge=1, description="Snapped and clamped to each provider's limits")
    steps: Optional[int] = Field(None, ge=1, le=150)
    guidance: Optional[float] = Field(None, ge=0.0, le=30.0)
    seed: Optional[int] = Field(None, ge=0, description="0 or omitted picks a random seed")
    style_preset: Optional[StylePreset] = None
    asset_category: Optional[str] = None
    pixel_era: Optional[str] = None
    background_mode: Optional[str] = None
    outline_style: Optional[str] = None
    palette_size: Optional[int] = None
    extra: Optional[Dict[str, Any]] = None
    model_override: Optional[str] = None

    api_key: Optional[str] = Field(None, repr=False, description="Bring-your-own provider key")
    comfyui_host: Optional[str] = Field(None, description="Bring-your-own ComfyUI host")

    def to_params(self) -> GenerateParams:
        return GenerateParams(
            tool=self.tool,
            prompt=self.prompt,
            negative_prompt=self.negative_prompt,
            width=self.width,
            height=self.height,
            steps=self.steps,
            guidance=self.guidance,
            seed=self.seed,
            style_preset=self.style_preset,
            asset_category=self.asset_category,
            pixel_era=self.pixel_era,
            background_mode=self.background_mode,
            outline_style=self.outline_style,
            palette_size=self.palette_size,
            extra=build_extra(self.tool, self.extra),
            model_override=self.model_override,
        )


class GenerationResponse(BaseModel):
    """Result of one successful generation."""

    provider: ProviderName
    result_url: str
    result_urls: List[str] = Field(default_factory=list)
    provider_job_id: Optional[str] = None
    seed: Optional[int] = None
    duration_ms: int = 0
    attempted: List[ProviderName] = Field(default_factory=list)


class BatchGenerationRequest(BaseModel):
    """Several independent generation requests run concurrently."""

    items: List[GenerationRequest] = Field(..., min_length=1, max_length=MAX_BATCH_ITEMS)


class BatchItemResult(BaseModel):
    index: int
    success: bool
    result: Optional[GenerationResponse] = None
    error: Optional[Dict[str, Any]] = None


class BatchGenerationResponse(BaseModel):
    results: List[BatchItemResult]
    succeeded: int
    failed: int
    total: int


class ProviderStatusResponse(BaseModel):
    """Settings-UI description of one image provider."""

    provider: ProviderName
    label: str
    description: str
    docs_url: str
    key_env_var: Optional[str] = None
    requires_key: bool
    free: bool
    free_credits_note: str
    configured: bool
    tools: List[Tool]
    max_width: int
    max_height: int
    supports_seed: bool
    supports_negative_prompt: bool


class ModalityProviderResponse(BaseModel):
    """First configured voice or text provider."""

    provider: str
    model: str
    priority: int


__all__ = [
    "BatchGenerationRequest",
    "BatchGenerationResponse",
    "BatchItemResult",
    "GenerationRequest",
    "GenerationResponse",
    "MAX_BATCH_ITEMS",
    "ModalityProviderResponse",
    "ProviderStatusResponse",
    "build_extra",
]
