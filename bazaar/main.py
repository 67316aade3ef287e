# bazaar/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from bazaar.api import register_routers
from bazaar.data.database import Base, engine, init_db
from bazaar.domain.errors import PersistenceError
from bazaar.utils.logging import add_context, clear_context, configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

USER_ID_HEADER = "X-User-Id"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    init_db(engine)
    logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Bazaar",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def bind_log_context(request: Request, call_next):
        #kontekst logow (user_id) tylko na czas jednego requestu
        clear_context()
        user_id = request.headers.get(USER_ID_HEADER)
        if user_id:
            add_context(user_id=user_id)
        try:
            return await call_next(request)
        finally:
            clear_context()

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    register_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
