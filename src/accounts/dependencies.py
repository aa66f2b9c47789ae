from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import Engine

from accounts.core import LoginThrottle, PasswordHasher
from accounts.models.schema import PiggyAccount, User
from accounts.services import AuthenticationService, PiggyService, UserService
from accounts.shared import Config
from accounts.shared.store import RecordStore

# Everything below is owned by the application instance (see main.create_app);
# tests replace them through app.dependency_overrides or by building their own app.


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_engine(request: Request) -> Engine:
    return request.app.state.engine


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_throttle(request: Request) -> LoginThrottle:
    return request.app.state.throttle


ConfigDep = Annotated[Config, Depends(get_config)]
EngineDep = Annotated[Engine, Depends(get_engine)]
HasherDep = Annotated[PasswordHasher, Depends(get_hasher)]
ThrottleDep = Annotated[LoginThrottle, Depends(get_throttle)]


def get_user_service(engine: EngineDep, hasher: HasherDep) -> UserService:
    return UserService(RecordStore(engine, User), hasher)


def get_piggy_service(engine: EngineDep, hasher: HasherDep) -> PiggyService:
    return PiggyService(RecordStore(engine, PiggyAccount), hasher)


def get_authentication_service(
    engine: EngineDep, hasher: HasherDep, throttle: ThrottleDep
) -> AuthenticationService:
    return AuthenticationService(RecordStore(engine, User), hasher, throttle)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
PiggyServiceDep = Annotated[PiggyService, Depends(get_piggy_service)]
AuthenticationServiceDep = Annotated[
    AuthenticationService, Depends(get_authentication_service)
]
