"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about the filesystem layout or the CLI, only about
  deployments, networks and their classification.
"""
