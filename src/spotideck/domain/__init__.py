"""Domain layer: Spotify Web API access and playback models."""
