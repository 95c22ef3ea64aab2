"""Dependency helpers for the generation feature."""

from __future__ import annotations

from functools import lru_cache

from features.generation.service import GenerationService


@lru_cache(maxsize=1)
def _generation_service_singleton() -> GenerationService:
    return GenerationService()


def get_generation_service() -> GenerationService:
    """Return a cached instance of :class:`GenerationService`."""

    return _generation_service_singleton()


__all__ = ["get_generation_service"]
