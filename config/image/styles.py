"""Prompt vocabulary shared by every image provider.

Tool prefixes steer the base model toward game-asset output, preset tokens
expand curated style identifiers, and the hint tables translate the semantic
fields of a generation request (asset category, era, background, outline,
palette) into prompt fragments. Negative banks are merged into a default
negative prompt for vendors that accept one.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

TOOL_PREFIXES: Mapping[str, str] = MappingProxyType(
    {
        "generate": "pixel art icon, crisp hard edges, limited palette, game asset",
        "animate": "pixel art sprite animation frame, crisp hard edges, limited palette, consistent character",
        "rotate": "pixel art character turnaround, crisp hard edges, limited palette, consistent design across views",
        "inpaint": "pixel art, crisp hard edges, limited palette, seamless edit matching surrounding pixels",
        "scene": "pixel art environment, crisp hard edges, limited palette, cohesive tileset",
    }
)

# Shorter prefixes for URL-embedded prompts (Pollinations has a URL length limit)
COMPACT_TOOL_PREFIXES: Mapping[str, str] = MappingProxyType(
    {
        "generate": "pixel art, crisp edges",
        "animate": "pixel art sprite frame",
        "rotate": "pixel art turnaround",
        "inpaint": "pixel art edit",
        "scene": "pixel art scene",
    }
)

STYLE_PRESET_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "rpg_icon": "game inventory icon, RPG item, dark background, bold readable silhouette, crisp outlines, centered on canvas, single object",
        "emoji": "emoji icon, bright saturated colors, simple bold shape, no background, very small scale readability, clean linework",
        "tileset": "seamless tile, flat top-down perspective, repeating texture, no visible seams, game tileset, consistent color palette across tiles",
        "sprite_sheet": "sprite sheet layout, multiple animation poses in grid, consistent scale throughout, uniform spacing between frames",
        "raw": "",
        "game_ui": "game HUD element, UI widget, flat design, dark theme, readable at small size, clean geometric shapes, minimal decoration",
        "character_idle": "standing character pose, front-facing, centered on canvas, full body visible, consistent proportions, game sprite, idle stance",
        "character_side": "side-scrolling character, lateral side view, profile facing right, full body, platformer game sprite, grounded stance",
        "top_down_char": "top-down view character, bird eye perspective, overhead angle, RPG character, all limbs visible from above",
        "isometric": "isometric perspective, 2:1 dimetric projection, 45-degree angle, 3/4 view, isometric game asset, consistent isometric grid",
        "chibi": "chibi style, super-deformed proportions, oversized head, small body, 2:1 head to body ratio, cute and expressive, round features",
        "horror": "dark horror style, desaturated muted palette, high contrast shadows, creepy atmosphere, gritty texture, visible grain, ominous",
        "sci_fi": "sci-fi futuristic style, technological aesthetic, metallic surfaces, neon accent colors, clean geometric shapes, holographic glow",
        "nature_tile": "organic natural tile, earthy color palette, varied organic texture, seamlessly tileable, forest or nature theme",
        "animated_effect": "particle effect sprite, bright vivid colors, high contrast, magic or elemental visual, designed for loop animation, transparent-ready",
        "portrait": "character portrait, bust shot, face and upper body, expressive features, detailed for size, centered composition",
        "badge_icon": "badge or achievement icon, flat design, bold centered symbol, rounded silhouette, clear at small size, high contrast",
        "weapon_icon": "weapon close-up, single weapon, game inventory icon, centered and upright, detailed texture, iconic silhouette, no hands",
    }
)

ASSET_CATEGORY_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "character": "single character, centered composition, full body view",
        "enemy": "enemy character sprite, menacing pose, centered",
        "item": "single item, centered, small object, game item icon",
        "weapon": "single weapon, centered, game item icon",
        "tile": "tile grid layout, all tiles same size, seamless edges",
        "ui": "game HUD element, flat pixel art, icon",
        "npc": "non-player character sprite, friendly appearance, centered",
        "boss": "boss enemy sprite, large imposing figure",
        "effect": "particle or magic effect, bright colors, looping-ready",
    }
)

PIXEL_ERA_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "nes": "NES palette",
        "gameboy": "4-shade monochrome Game Boy palette",
        "snes": "16-bit SNES palette",
        "gba": "32-bit GBA palette",
        "modern": "modern 32-bit game palette",
    }
)

BACKGROUND_MODE_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "transparent": "transparent background",
        "dark": "dark atmospheric background",
        "scene": "full environmental background",
    }
)

OUTLINE_STYLE_TOKENS: Mapping[str, str] = MappingProxyType(
    {
        "bold": "bold black outline",
        "soft": "soft colored outline",
        "none": "no outline",
        "selective": "selective outlining",
    }
)

SUPPORTED_PALETTE_SIZES: Tuple[int, ...] = (4, 8, 16, 32, 64, 256)

GLOBAL_NEGATIVES: Tuple[str, ...] = (
    "blurry",
    "anti-aliased",
    "soft edges",
    "gradient shading",
    "smooth shading",
    "3D render",
    "photorealistic",
    "text",
    "watermark",
    "signature",
    "low quality",
    "jpeg artifacts",
)

TOOL_NEGATIVES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "generate": ("motion blur", "multiple poses", "busy background"),
        "animate": ("static image", "single frame", "no motion"),
        "rotate": ("inconsistent character", "different character", "merged figures"),
        "inpaint": ("obvious seam", "visible mask edge", "mismatched style"),
        "scene": ("foreground characters", "floating objects", "visible seams"),
    }
)

__all__ = [
    "ASSET_CATEGORY_TOKENS",
    "BACKGROUND_MODE_TOKENS",
    "COMPACT_TOOL_PREFIXES",
    "GLOBAL_NEGATIVES",
    "OUTLINE_STYLE_TOKENS",
    "PIXEL_ERA_TOKENS",
    "STYLE_PRESET_TOKENS",
    "SUPPORTED_PALETTE_SIZES",
    "TOOL_NEGATIVES",
    "TOOL_PREFIXES",
]
