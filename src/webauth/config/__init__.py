"""Configurações centralizadas do webauth.

Uso típico:
    from webauth.config import get_settings
"""

from webauth.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
