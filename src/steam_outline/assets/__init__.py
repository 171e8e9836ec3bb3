"""Local cache of game logo images."""

from steam_outline.assets.cache import AssetCache

__all__ = ["AssetCache"]
