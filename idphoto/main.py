import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from idphoto.config import Settings, configure_logging
from idphoto.gemini import generate_content, interpret_response
from idphoto.prompts import build_prompt
from idphoto.schemas import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

MISSING_PARAMETERS_MESSAGE = "Missing required parameters in request body."
MISSING_API_KEY_MESSAGE = (
    "The server API key is not configured. Set the GOOGLE_API_KEY environment variable "
    "for this deployment and redeploy."
)
INVALID_CONFIGURATION_MESSAGE = (
    "The server configuration is invalid. Check the GEMINI_* environment variables "
    "for this deployment and redeploy."
)
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

router = APIRouter()


def get_settings(request: Request) -> Settings:
    """Injected settings win; otherwise the environment is read per request."""
    settings = request.app.state.settings
    if settings is not None:
        return settings
    try:
        return Settings.from_env()
    except ValueError as e:
        # pydantic.ValidationError is a ValueError as well
        logger.error(f"Invalid server configuration: {e}")
        raise HTTPException(status_code=500, detail=INVALID_CONFIGURATION_MESSAGE)


@router.post("/api/generate", response_model=GenerateResponse)
async def generate_id_photo(
    payload: GenerateRequest,
    settings: Settings = Depends(get_settings),
) -> GenerateResponse:
    missing = payload.missing_fields()
    if missing:
        logger.info(f"Rejected request missing fields: {', '.join(missing)}")
        raise HTTPException(status_code=400, detail=MISSING_PARAMETERS_MESSAGE)

    if not settings.api_key:
        logger.error("GOOGLE_API_KEY environment variable is missing or empty.")
        raise HTTPException(status_code=500, detail=MISSING_API_KEY_MESSAGE)

    prompt = build_prompt(
        outfit=payload.outfit,
        background_color=payload.background_color,
        enable_beautification=bool(payload.enable_beautification),
    )

    try:
        response = await generate_content(
            settings,
            base64_image=payload.base64_image,
            mime_type=payload.mime_type,
            prompt=prompt,
        )
        result = interpret_response(response)
    except Exception as e:
        logger.error(f"Error generating ID photo: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e) or UNKNOWN_ERROR_MESSAGE)

    if result.image is None:
        raise HTTPException(status_code=result.status_code, detail=result.error)

    logger.info("ID photo generated")
    return GenerateResponse(base64_image=result.image)


@asynccontextmanager
async def lifespan(_: FastAPI):
    load_dotenv()
    configure_logging()
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title="ID Photo Studio", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        locations = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        logger.info(f"Rejected malformed request body at: {locations}")
        return JSONResponse(status_code=400, content={"error": MISSING_PARAMETERS_MESSAGE})

    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "idphoto.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
