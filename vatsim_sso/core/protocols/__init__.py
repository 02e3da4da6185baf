"""Core protocols.

Structural interfaces for infrastructure the handshake session depends on.
"""

from vatsim_sso.core.protocols.transport import Transport

__all__ = [
    "Transport",
]
