"""Domain layer — plan metadata, frontmatter codec, lifecycle states.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
