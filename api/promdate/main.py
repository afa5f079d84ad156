import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ALLOWED_ORIGINS
from .database import init_db, wait_for_db
from .errors import MatchEngineError, QuotaExceeded
from .routes import include_modular_routers

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Prom Match API")
include_modular_routers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MatchEngineError)
def handle_match_engine_error(request: Request, exc: MatchEngineError) -> JSONResponse:
    body = {"detail": exc.detail, "code": exc.code}
    if isinstance(exc, QuotaExceeded):
        body["remaining"] = exc.remaining
    if exc.status_code >= 500:
        logger.error(f"[api] {request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=body)


@app.on_event("startup")
def on_startup() -> None:
    wait_for_db()
    init_db()


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
