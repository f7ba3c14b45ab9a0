from .cached import CachedRepo
from .cache import CacheConfig, RepoCache
from .store import FileStore

__all__ = ["CachedRepo", "CacheConfig", "RepoCache", "FileStore"]
