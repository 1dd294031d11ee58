"""Configurações centralizadas do internpath_assistant.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única

Uso típico:
    from internpath_assistant.config import get_settings
"""

from internpath_assistant.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
