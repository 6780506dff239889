"""Core — configuration, models, services and use cases (no UI code)."""
