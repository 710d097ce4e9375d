import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.endpoints import questions, responses, surveys, tokens
from .core.config import ALLOWED_ORIGINS, LOG_LEVEL
from .database import create_db_and_tables, engine
from .exceptions import (
    Conflict,
    InvalidOrExpired,
    InvalidState,
    NotFound,
    SurveyEngineError,
    Unauthorized,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# --- Lifecycle Events ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Anwendung startet...")
    await create_db_and_tables()
    yield
    logger.info("Anwendung fährt herunter...")
    await engine.dispose()


# --- FastAPI App Instanz ---
app = FastAPI(title="Survey Publication & Response Engine", lifespan=lifespan)

# --- CORS Middleware (für Frontend-Zugriff) ---
logger.info("CORS: Erlaubte Origins: %s", ALLOWED_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Fehlerbehandlung: Kernfehler -> HTTP-Status ---
ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    InvalidState: status.HTTP_400_BAD_REQUEST,
    Conflict: status.HTTP_409_CONFLICT,
    InvalidOrExpired: status.HTTP_404_NOT_FOUND,
}


@app.exception_handler(SurveyEngineError)
async def survey_engine_error_handler(request: Request, exc: SurveyEngineError):
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info("%s %s -> %s: %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# --- Router ---
app.include_router(surveys.router, prefix="/api/surveys", tags=["surveys"])
app.include_router(questions.router, prefix="/api/questions", tags=["questions"])
app.include_router(responses.router, prefix="/api/responses", tags=["responses"])
app.include_router(tokens.router, prefix="/api", tags=["tokens"])
app.include_router(responses.public_router, prefix="/api/public", tags=["public"])


@app.get("/")
async def read_root():
    return {"message": "Survey Publication & Response Engine"}
