from headup.engine.cache import CacheEntry, ManualEditCache
from headup.engine.matcher import Match, find_in_buffer, find_match
from headup.engine.service import UpdateEngine

__all__ = [
    "CacheEntry",
    "ManualEditCache",
    "Match",
    "UpdateEngine",
    "find_in_buffer",
    "find_match",
]
