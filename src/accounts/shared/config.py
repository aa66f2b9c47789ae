from logging import CRITICAL, DEBUG, ERROR, INFO, WARNING
from os import PathLike, environ
from pathlib import Path
from tomllib import load

from pydantic import BaseModel, field_validator

DEFAULT_CONFIG_PATH = Path(environ.get("ACCOUNTS_CONFIG", "config.toml"))


class General(BaseModel):
    title: str = "accounts"


class Database(BaseModel):
    url: str = "sqlite:///accounts.db"
    timeout: float = 5.0  # seconds to wait on a busy store before giving up


class Logging(BaseModel):
    level: int = INFO

    @field_validator("level", mode="before")
    @classmethod
    def convert_log_level(cls, value):
        if isinstance(value, int):
            return value
        log_levels = {
            "DEBUG": DEBUG,
            "INFO": INFO,
            "WARNING": WARNING,
            "ERROR": ERROR,
            "CRITICAL": CRITICAL,
        }
        return log_levels.get(value.upper(), INFO)


class Paths(BaseModel):
    logs: str = "logs"


class RateLimit(BaseModel):
    enabled: bool = True
    timeout_period: int = 10
    requests_per_second: int = 50


class Network(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    rate_limit: RateLimit = RateLimit()


class Throttle(BaseModel):
    max_attempts: int = 5
    reset_window: int = 30 * 60  # seconds
    sweep_interval: int = 60


class Pagination(BaseModel):
    default_page_size: int = 10
    default_sort: str = "email:asc"


class Security(BaseModel):
    # scrypt work factors
    n: int = 2**14
    r: int = 8
    p: int = 1
    salt_length: int = 16


class Config(BaseModel):
    general: General = General()
    database: Database = Database()
    paths: Paths = Paths()
    logging: Logging = Logging()
    network: Network = Network()
    throttle: Throttle = Throttle()
    pagination: Pagination = Pagination()
    security: Security = Security()


def load_config(
    shared_config_file: PathLike = DEFAULT_CONFIG_PATH,
    specific_config_file: PathLike | None = None,
) -> Config:
    """Load and merge configurations from TOML files.

    A missing shared file leaves every section at its defaults.
    """
    config_data = {}
    shared_path = Path(shared_config_file)
    if shared_path.is_file():
        with shared_path.open("rb") as f:
            config_data = load(f)

    # Load and merge specific config if provided
    if specific_config_file:
        with Path(specific_config_file).open("rb") as f:
            specific_data = load(f)
            config_data.update(specific_data)

    return Config(**config_data)
