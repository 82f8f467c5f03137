"""Playback domain - state models, device policy and player launching.

This domain handles:
- PlaybackState / SearchTrack / Device models parsed from Web API JSON
- Choosing and activating a controllable Spotify Connect device
- Launching the Spotify desktop client when no device exists
"""
