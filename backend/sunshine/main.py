import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sunshine.config import settings
from sunshine.routers import departments, search
from sunshine.services.dataset_service import load_departments
from sunshine.services.index_service import SearchIndex
from sunshine.services.search_service import SearchService

logger = logging.getLogger("sunshine")

VERSION = "0.1.0"


def reload_index(app: FastAPI, dataset_path: Path | None = None) -> SearchService:
    """Load the dataset, build a fresh index and swap it in.

    The new service replaces the old one in a single attribute assignment, so
    a request sees either the old index or the new one. The old index is not
    closed here: requests still holding it keep querying it, and it releases
    its database once the last reference is dropped. Errors propagate and
    leave the current service in place.
    """
    path = dataset_path or settings.dataset_path
    departments = load_departments(path)
    index = SearchIndex.build(departments.values(), pool_size=settings.index_pool_size)
    service = SearchService(index)
    app.state.search_service = service
    return service


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a dataset or index failure aborts before anything is served.
    reload_index(app)
    yield
    service = getattr(app.state, "search_service", None)
    if service is not None:
        service.index.close()
        app.state.search_service = None


app = FastAPI(
    title="Sunshine",
    description="Public records contact directory for government departments",
    version=VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    client = request.client.host if request.client else "-"
    logger.info(
        '%s "%s %s HTTP/%s" %d %.3f',
        client,
        request.method,
        request.url.path,
        request.scope.get("http_version", "1.1"),
        response.status_code,
        time.perf_counter() - start,
    )
    return response


@app.exception_handler(RequestValidationError)
async def bad_request_body(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": f"unable to decode body: {exc.errors()}"})


app.include_router(search.router, prefix=settings.api_prefix)
app.include_router(departments.router, prefix=settings.api_prefix)


@app.get("/health")
async def health(request: Request):
    service = getattr(request.app.state, "search_service", None)
    return {
        "status": "ok",
        "version": VERSION,
        "departments": len(service.index) if service is not None else 0,
    }


def run():
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
