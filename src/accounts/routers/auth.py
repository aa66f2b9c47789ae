from fastapi import APIRouter

from accounts.dependencies import AuthenticationServiceDep
from accounts.models.requests import LoginRequest, LoginResponse
from accounts.shared import Logger

logger = Logger(__name__).get_logger()

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, authentication: AuthenticationServiceDep):
    """
    Check email and password.
    ==========================
    locked out (5 failures) -> 403 FORBIDDEN
    wrong email or password -> 403 INVALID_CREDENTIALS, counts as a failure
    success -> resets the failure count
    """
    logger.debug("Login attempt for %s", data.email)
    return authentication.login(data.email, data.password)
