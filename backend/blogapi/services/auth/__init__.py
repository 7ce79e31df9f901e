from .dto import AuthTokenConfig, LoginIn, LoginOut, LogoutIn, RefreshIn, TokenPairOut
from .service import AuthService

__all__ = [
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LoginOut",
    "LogoutIn",
    "RefreshIn",
    "TokenPairOut",
]
