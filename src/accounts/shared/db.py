import logging

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from accounts.models.schema import *  # noqa: F403 # SQLModel subclasses need to be in memory
from accounts.shared import Config, Logger

logger = Logger(__name__, level=logging.DEBUG).get_logger()


def create_db_engine(config: Config) -> Engine:
    url = config.database.url
    timeout = config.database.timeout

    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": timeout}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            return create_engine(
                url, connect_args=connect_args, poolclass=StaticPool
            )
        return create_engine(url, connect_args=connect_args)

    return create_engine(url, pool_timeout=timeout)


def init_db(engine: Engine):
    SQLModel.metadata.create_all(engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
