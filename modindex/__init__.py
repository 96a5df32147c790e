"""Core logic for a mod hosting backend: search, version listing and editing checks, modpack dependencies and release webhooks."""

__version__ = "0.1.0"