"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Kandilli live feed and bulletin client (HTTP)
- Configuration loading (environment/files)
- HTTP request handling

Keep this layer thin and simple. All business logic should be in core.
"""

from afetnet.shell.kandilli_client import KandilliClient
from afetnet.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "KandilliClient",
    "load_config",
    "load_config_from_env",
]
