from .accounts import AccountService, PiggyService, UserService
from .authentication import AuthenticationService

__all__ = ["AccountService", "AuthenticationService", "PiggyService", "UserService"]
