from .serde_base import SerdeBase


class LoginRequest(SerdeBase):
    email: str
    password: str


class LoginResponse(SerdeBase):
    email: str
    name: str
    user_id: str
