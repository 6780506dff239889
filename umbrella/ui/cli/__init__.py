"""CLI sub-command groups registered by ``umbrella.main``."""
