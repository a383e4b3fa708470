"""Domain layer — field types, pod schemas, coercion, definitions, images.

This layer depends only on stdlib, pydantic and markupsafe.
It must never import from services, infrastructure, commands, or config.
"""
