"""Install a curated VS Code extension set and user settings per environment."""

__version__ = "0.1.0"
