from .auth import LoginRequest, LoginResponse
from .page import PageResponse
from .piggybank import (
    CreatePiggyRequest,
    KtpLookupRequest,
    KtpResponse,
    PiggyResponse,
    UpdatePiggyRequest,
)
from .serde_base import SerdeBase
from .users import (
    ChangePasswordRequest,
    CreatedResponse,
    CreateUserRequest,
    IdResponse,
    UpdateUserRequest,
    UserResponse,
)

__all__ = [
    "ChangePasswordRequest",
    "CreatePiggyRequest",
    "CreateUserRequest",
    "CreatedResponse",
    "IdResponse",
    "KtpLookupRequest",
    "KtpResponse",
    "LoginRequest",
    "LoginResponse",
    "PageResponse",
    "PiggyResponse",
    "SerdeBase",
    "UpdatePiggyRequest",
    "UpdateUserRequest",
    "UserResponse",
]
