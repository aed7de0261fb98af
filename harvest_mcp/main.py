"""HTTP transport: the tool catalogue and dispatcher behind FastAPI."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__, config
from .dispatcher import Dispatcher
from .handlers import routers
from .harvest import HarvestClient

log = logging.getLogger(__name__)


def create_app(client: HarvestClient | None = None) -> FastAPI:
    """Build the app. A ``client`` passed in is used as-is and not closed."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        harvest, owned = client, None
        if harvest is None and config.ACCOUNT_ID and config.TOKEN:
            harvest = owned = HarvestClient(config.ACCOUNT_ID, config.TOKEN, config.USER_AGENT)
        if harvest is None:
            log.error("HARVEST_ACCOUNT_ID / HARVEST_ACCESS_TOKEN not set; only about/version will run")
        app.state.dispatcher = Dispatcher(harvest)
        try:
            yield
        finally:
            if owned is not None:
                await owned.aclose()

    app = FastAPI(title="Harvest MCP", version=__version__, lifespan=lifespan)
    for router in routers:
        app.include_router(router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    config.require_credentials()
    config.setup_logging()
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
