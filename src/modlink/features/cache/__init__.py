"""Public surface for the cache location feature."""

from .domain.models import CacheLocation
from .usecases.locate import cache_key, default_cache_root, locate

__all__ = ["CacheLocation", "cache_key", "default_cache_root", "locate"]
