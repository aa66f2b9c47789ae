from .serde_base import SerdeBase


class CreateUserRequest(SerdeBase):
    name: str
    email: str
    password: str
    password_confirm: str


class UpdateUserRequest(SerdeBase):
    name: str
    email: str


class ChangePasswordRequest(SerdeBase):
    password_old: str
    password_new: str
    password_confirm: str


class UserResponse(SerdeBase):
    id: str
    name: str
    email: str


class CreatedResponse(SerdeBase):
    name: str
    email: str


class IdResponse(SerdeBase):
    id: str
