"""Infrastructure layer — registry loading, templates, site wiring.

This layer depends on stdlib, third-party libs (ruamel.yaml, Jinja2)
and the domain layer.  It must never import from services, commands,
or output.
"""
