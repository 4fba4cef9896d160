from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
import logging
from contextlib import asynccontextmanager

from civics_backend.config import Config
from civics_backend.core.llm import GeminiLLMWrapper
from civics_backend.core.grading_agent import GradingAgent
from civics_backend.core.question_bank import load_question_pool
from civics_backend.api import grade
from civics_backend.models.schemas import ErrorResponse, HealthResponse

VERSION = "1.0.0"

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)


llm_wrapper = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize components on startup"""
    global llm_wrapper

    try:
        for warning in Config.validate_config():
            logger.warning(warning)

        llm_wrapper = GeminiLLMWrapper(Config.grading_settings())
        pool = load_question_pool(Config.QUESTION_POOL_PATH)

        grade.set_dependencies(GradingAgent(llm_wrapper), pool)

        logger.info("Application initialized successfully")

    except Exception as e:
        logger.error(f"Initialization failed: {e}")
        raise e

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="Civics Test Grading API",
    description="Samples civics questions and grades free-text answers with a language model",
    version=VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(grade.router, prefix="/api", tags=["grading"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = "; ".join(error.get("msg", "invalid value") for error in exc.errors())
    logger.debug(f"Rejected request to {request.url.path}: {messages}")
    body = ErrorResponse(error=messages, kind="validation")
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get("/")
async def root():
    return {"message": "Civics Test Grading API is running"}


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        version=VERSION,
        classifier_configured=bool(llm_wrapper and llm_wrapper.is_configured),
        pool_size=len(grade.question_pool),
    )


def run(reload: bool = False):
    uvicorn.run(
        "civics_backend.main:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=reload
    )


if __name__ == "__main__":
    run(reload=True)
