import pytest
from fastapi.testclient import TestClient

from accounts.core import LoginThrottle, PasswordHasher
from accounts.main import create_app
from accounts.models.schema import PiggyAccount, User
from accounts.services import AuthenticationService, PiggyService, UserService
from accounts.shared import Config
from accounts.shared.db import create_db_engine, init_db
from accounts.shared.store import RecordStore


class FakeClock:
    """Monotonic stand-in that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def config():
    return Config(
        general={"title": "accounts under test"},
        database={"url": "sqlite://", "timeout": 1.0},
        network={"rate_limit": {"enabled": False}},
        security={"n": 2**4},
    )


@pytest.fixture
def engine(config):
    engine = create_db_engine(config)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="session")
def hasher():
    # Cheap work factor, the tests are about behaviour not strength
    return PasswordHasher(n=2**4, r=8, p=1)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def throttle(clock):
    return LoginThrottle(max_attempts=5, reset_window=30 * 60, sweep_interval=60, clock=clock)


@pytest.fixture
def user_store(engine):
    return RecordStore(engine, User)


@pytest.fixture
def piggy_store(engine):
    return RecordStore(engine, PiggyAccount)


@pytest.fixture
def users(user_store, hasher):
    return UserService(user_store, hasher)


@pytest.fixture
def piggybank(piggy_store, hasher):
    return PiggyService(piggy_store, hasher)


@pytest.fixture
def authentication(user_store, hasher, throttle):
    return AuthenticationService(user_store, hasher, throttle)


@pytest.fixture
def app(config, engine, throttle, hasher):
    return create_app(config, engine=engine, throttle=throttle, hasher=hasher)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register(client):
    """Create a user through the API and return its id."""

    def register(name="Bob", email="bob@example.com", password="secret"):
        response = client.post(
            "/users",
            json={
                "name": name,
                "email": email,
                "password": password,
                "password_confirm": password,
            },
        )
        assert response.status_code == 200, response.text
        listed = client.get("/users").json()
        return next(user["id"] for user in listed if user["email"] == email)

    return register
