from .gate import (
    AUTH_ENVIRON_KEY, AuthorizationGate, ContextualGate, DeniedResponse, PairedGate,
    for_contextual_handler, for_paired_handler,
)
from .session import AuthContext, AuthSession, ISessionResolver, TokenHeaderSessionResolver

__all__ = [
    "AUTH_ENVIRON_KEY", "AuthorizationGate", "ContextualGate", "DeniedResponse", "PairedGate",
    "for_contextual_handler", "for_paired_handler",
    "AuthContext", "AuthSession", "ISessionResolver", "TokenHeaderSessionResolver",
]
