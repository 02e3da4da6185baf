"""Configuration module for vatsim_sso.

Provides settings loading and type-safe enums.

Usage:
    from vatsim_sso.core.config import SsoSettings, WireFormat

    settings = SsoSettings()  # reads VATSIM_SSO_* environment variables
    if settings.response_format == WireFormat.XML:
        ...
"""

from vatsim_sso.core.config.enums import SignatureAlgorithm, WireFormat
from vatsim_sso.core.config.settings import SsoSettings

__all__ = [
    "SignatureAlgorithm",
    "SsoSettings",
    "WireFormat",
]
