"""Screen components: layout, frame, and per-mode renderers."""
