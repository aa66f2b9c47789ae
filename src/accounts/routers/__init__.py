from .auth import router as auth_router
from .piggybank import router as piggybank_router
from .users import router as users_router

_routers = [auth_router, users_router, piggybank_router]

__all__ = ["get_routers"]


def get_routers():
    return _routers
