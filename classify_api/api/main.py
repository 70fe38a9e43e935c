import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from classify_api.adapters.factory import build_provider
from classify_api.api.schemas import ClassificationRequest, ClassificationResponse, HealthResponse
from classify_api.core.config import configure_logging, get_extraction_settings, load_config
from classify_api.core.resolver import ExtractionResolver

# Load environment variables (.env) before anything reads them
load_dotenv()

# Configure logger (no-op when the entry point already did)
configure_logging()
logger = logging.getLogger("API")

app_state = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting Classification API...")

    # Fail fast if config is bad
    try:
        settings = get_extraction_settings(load_config(os.getenv("CONFIG_PATH", "config.yaml")))
        provider = build_provider(settings, api_key=os.getenv("GEMINI_API_KEY"))
    except Exception as e:
        logger.critical(f"Failed to load configuration: {e}")
        raise

    app_state["resolver"] = ExtractionResolver(
        provider=provider,
        max_attempts=settings.max_attempts,
        backoff_ms=settings.backoff_ms,
    )
    logger.info(f"🧠 Extraction resolver ready in '{app_state['resolver'].mode}' mode.")

    yield
    app_state.clear()
    logger.info("🛑 Shutting down Classification API...")


app = FastAPI(title="Text Classification API", lifespan=lifespan)


def get_resolver() -> ExtractionResolver:
    return app_state["resolver"]


@app.post("/classify", response_model=ClassificationResponse)
async def classify(request: ClassificationRequest) -> ClassificationResponse:
    """
    Extracts zip, brand, category and time_pref from the submitted text.
    Always answers 200 with all four fields; empty means not found.
    """
    result = await get_resolver().resolve(request.text)
    return ClassificationResponse(**result.model_dump())


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    resolver = get_resolver()
    return HealthResponse(mode=resolver.mode, provider=resolver.provider_name)
