"""Configuration models, settings loader, and logging setup."""
