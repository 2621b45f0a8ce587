"""Provider registry for parley.

Keeps the list of configured API endpoints and the active selection.
"""

from .models import ProviderConfig
from .registry import ProviderRegistry

__all__ = [
    "ProviderConfig",
    "ProviderRegistry",
]
