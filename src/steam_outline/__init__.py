"""
steam-outline.

Keeps an org-style outline of a Steam profile's games in sync
with the profile, caches game logos locally and launches games
through the Steam client.
"""

__version__ = "0.1.0"
