from contextlib import asynccontextmanager

from fastapi import FastAPI

from filmorate_api.core.config import settings
from filmorate_api.core.logger import setup_json_logging, shutdown_logging
from filmorate_api.core.middleware import RequestContextMiddleware
from filmorate_api.core.sentry import init_sentry
from filmorate_api.services.repositories.factory import build_repositories

from filmorate_api.api.v1.users import router as users_router
from filmorate_api.api.v1.films import router as films_router
from filmorate_api.api.v1.reference import router as reference_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) logs before anything else
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    # 2) storage picked by STORAGE_BACKEND, kept on app.state
    app.state.repositories = await build_repositories(settings)

    try:
        yield
    finally:
        await app.state.repositories.close()
        shutdown_logging()


app = FastAPI(title="Filmorate", lifespan=lifespan)

# trace_id + JSON access log
app.add_middleware(RequestContextMiddleware)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(users_router)
app.include_router(films_router)
app.include_router(reference_router)
