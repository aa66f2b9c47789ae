from accounts.core import LoginThrottle, PasswordHasher
from accounts.models.requests import LoginResponse
from accounts.models.schema import User
from accounts.shared.http import ErrorType, error_responder
from accounts.shared.logger import Logger
from accounts.shared.store import RecordStore

logger = Logger(__name__).get_logger()


class AuthenticationService:
    def __init__(
        self,
        store: RecordStore[User],
        hasher: PasswordHasher,
        throttle: LoginThrottle,
    ):
        self.store = store
        self.hasher = hasher
        self.throttle = throttle

    def check_login_credentials(self, email: str, password: str) -> LoginResponse | None:
        user = self.store.get_by_email(email)

        # Unknown emails are verified against a filler hash so both failures take as long
        password_hash = user.password if user else self.hasher.filler_hash
        password_checked = self.hasher.verify(password, password_hash)

        if user and password_checked:
            return LoginResponse(email=user.email, name=user.name, user_id=user.id)
        return None

    def login(self, email: str, password: str) -> LoginResponse:
        if not self.throttle.check_allowed(email):
            logger.warning("Rejected login for locked out %s", email)
            raise error_responder(
                ErrorType.FORBIDDEN, "Too many failed login attempts. Try again later."
            )

        login_success = self.check_login_credentials(email, password)
        if login_success is None:
            failures = self.throttle.record_failure(email)
            logger.info("Failed login for %s (%d so far)", email, failures)
            raise error_responder(ErrorType.INVALID_CREDENTIALS, "Wrong email or password")

        self.throttle.record_success(email)
        logger.info("Successful login for %s", email)
        return login_success
