import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.exceptions import ProjectionInputError

from app.api.api import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(), "body": exc.body},
    )


@app.exception_handler(ProjectionInputError)
async def projection_input_exception_handler(request: Request, exc: ProjectionInputError):
    logger.error(f"Projection input error: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": [exc.to_error_detail()]},
    )


# Set all CORS enabled origins
if settings.CORS_ORIGIN_URLS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGIN_URLS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/health")
def health_check():
    return {"status": "ok"}

@app.get("/")
def root():
    return {"message": "Welcome to Retirement Projector API (FastAPI)"}
