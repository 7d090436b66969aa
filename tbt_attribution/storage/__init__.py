"""Storage module for computed artifacts."""

from .computed_cache import ComputedArtifactCache, CacheStats

__all__ = ['ComputedArtifactCache', 'CacheStats']
