import logging
from contextlib import asynccontextmanager

from fastapi import (
    FastAPI,
)
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import Engine

from accounts.core import LoginThrottle, PasswordHasher
from accounts.middleware import RateLimit
from accounts.routers import get_routers
from accounts.shared import Config, Logger, load_config
from accounts.shared.db import create_db_engine, init_db
from accounts.shared.http import install_error_handlers

logger = Logger(__name__, level=logging.DEBUG).get_logger()


# ================================================================================
#       FastAPI Setup
# ================================================================================
def create_app(
    config: Config | None = None,
    engine: Engine | None = None,
    throttle: LoginThrottle | None = None,
    hasher: PasswordHasher | None = None,
) -> FastAPI:
    """Build an application instance that owns its engine, throttle and hasher.

    The engine is created and the tables are ensured on startup unless one
    is passed in.
    """
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.engine is None:
            app.state.engine = create_db_engine(config)
        init_db(app.state.engine)
        yield
        app.state.engine.dispose()

    app = FastAPI(title=config.general.title, lifespan=lifespan)

    app.state.config = config
    app.state.engine = engine
    app.state.throttle = throttle or LoginThrottle(
        max_attempts=config.throttle.max_attempts,
        reset_window=config.throttle.reset_window,
        sweep_interval=config.throttle.sweep_interval,
    )
    app.state.hasher = hasher or PasswordHasher(
        n=config.security.n,
        r=config.security.r,
        p=config.security.p,
        salt_length=config.security.salt_length,
    )

    for router in get_routers():
        app.include_router(router)

    install_error_handlers(app)

    origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    rate_limit = config.network.rate_limit
    if rate_limit.enabled:
        app.add_middleware(
            RateLimit,
            timeout_period_s=rate_limit.timeout_period,
            max_per_second=rate_limit.requests_per_second,
        )

    return app


app = create_app()


# ================================================================================
#       Command Line
# ================================================================================
def welcome(config: Config):
    # Log server banner
    for line in config.general.title.split("\n"):
        logger.info(line)

    # Log server startup information
    logger.info("Starting account server on %s:%s", config.network.host, config.network.port)


def main(argv=None):
    config = load_config()
    welcome(config)

    import uvicorn

    uvicorn.run(
        "accounts.main:app",
        host=config.network.host,
        port=config.network.port,
        reload=config.network.reload,
    )


if __name__ == "__main__":
    main()
