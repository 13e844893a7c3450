import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from content import resources
from content.router import build_router
from core import db, settings
from core.log import configure_logging

# Real environment variables win over `.env`.
load_dotenv()
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Server is running on http://localhost:%s", settings.server_port())
    yield


app = FastAPI(lifespan=lifespan)

# Any origin may call the API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

for resource in resources.ALL:
    app.include_router(build_router(resource), tags=[resource.name])


@app.exception_handler(db.DatabaseUnavailableError)
async def database_unavailable(_: Request, exc: db.DatabaseUnavailableError) -> JSONResponse:
    # Raised before any handler ran, so nothing was written to the database.
    logger.error("db_connect_failed error=%s", exc)
    return JSONResponse({"error": "Database unavailable"}, status_code=503)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "posts api"}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.server_host(), port=settings.server_port())
