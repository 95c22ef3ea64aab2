"""Provider Registry - Import-Time Registration of All Image Adapters
This module is the central registration point for the image backends. Every
adapter is registered when this package is imported, and the registry is then
checked for completeness so that adding a ProviderName without wiring its
adapter fails at import (and in the test suite), not on the first request.
Registration Flow:
    1. main.py imports FastAPI routes
    2. Routes import the generation service
    3. The service imports from core.providers
    4. This __init__.py runs, registering all adapters
    5. verify_registry() confirms every ProviderName is covered
Usage Example:
    from core.providers import generate, resolve_optimal_provider, resolve_provider_config
    provider = resolve_optimal_provider("pixel", "generate", use_hd=False)
    config = resolve_provider_config(provider)
    result = await generate(provider, params, config)
See Also:
    - core/providers/factory.py: Dispatch
    - core/providers/routing.py: Provider selection
    - config/image/: Routing tables and per-vendor settings
"""

import logging

from core.providers import factory  # re-export for convenience
from core.providers.factory import generate, verify_registry
from core.providers.image import (
    ComfyUIImageProvider,
    FalImageProvider,
    HuggingFaceImageProvider,
    PollinationsImageProvider,
    ProdiaImageProvider,
    ReplicateImageProvider,
    StableHordeImageProvider,
    TogetherImageProvider,
)
from core.providers.registries import register_image_provider, registered_image_providers
from core.providers.resolvers import (
    assert_key_present,
    get_image_provider,
    list_provider_status,
    resolve_provider_config,
)
from core.providers.routing import (
    rank_providers,
    resolve_optimal_provider,
    resolve_style_provider,
    resolve_text_provider,
    resolve_voice_provider,
)
from core.providers.types import (
    GenerateParams,
    GenerateResult,
    ProviderConfig,
    ProviderName,
    ProviderStatus,
    Tool,
)

register_image_provider(ProviderName.REPLICATE, ReplicateImageProvider)
register_image_provider(ProviderName.FAL, FalImageProvider)
register_image_provider(ProviderName.TOGETHER, TogetherImageProvider)
register_image_provider(ProviderName.HUGGINGFACE, HuggingFaceImageProvider)
register_image_provider(ProviderName.POLLINATIONS, PollinationsImageProvider)
register_image_provider(ProviderName.STABLEHORDE, StableHordeImageProvider)
register_image_provider(ProviderName.PRODIA, ProdiaImageProvider)
register_image_provider(ProviderName.COMFYUI, ComfyUIImageProvider)

verify_registry()

logger = logging.getLogger(__name__)
logger.info(
    "Provider registry initialised",
    extra={"image_providers": sorted(name.value for name in registered_image_providers())},
)

__all__ = [
    "ComfyUIImageProvider",
    "FalImageProvider",
    "GenerateParams",
    "GenerateResult",
    "HuggingFaceImageProvider",
    "PollinationsImageProvider",
    "ProdiaImageProvider",
    "ProviderConfig",
    "ProviderName",
    "ProviderStatus",
    "ReplicateImageProvider",
    "StableHordeImageProvider",
    "TogetherImageProvider",
    "Tool",
    "assert_key_present",
    "factory",
    "generate",
    "get_image_provider",
    "list_provider_status",
    "rank_providers",
    "resolve_optimal_provider",
    "resolve_provider_config",
    "resolve_style_provider",
    "resolve_text_provider",
    "resolve_voice_provider",
    "verify_registry",
]
