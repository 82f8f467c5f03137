"""
spotideck - terminal remote control for Spotify Connect playback
"""

__version__ = "0.1.0"
