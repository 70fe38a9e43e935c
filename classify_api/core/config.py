import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

# Initialize logger
logger = logging.getLogger(__name__)


class GeminiSettings(BaseModel):
    model: str = "gemini-flash-latest"
    timeout_ms: int = Field(30000, gt=0)


class OllamaSettings(BaseModel):
    host: str = "http://ollama:11434"
    model: str = "llama3"
    timeout: float = Field(60, gt=0)


class ExtractionSettings(BaseModel):
    """
    Typed view over the 'extraction' section of config.yaml.
    """

    provider: Literal["gemini", "ollama", "none"] = "gemini"
    max_attempts: int = Field(3, ge=1)
    backoff_ms: int = Field(500, ge=0)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """
    Loads the YAML configuration file from the project root.

    Args:
        config_path (str): Relative path to the config file.

    Returns:
        Dict[str, Any]: The configuration dictionary.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    # Look in the current working directory first (Docker / root run)
    path = Path(config_path)

    if not path.exists():
        # Fallback: relative to the project root (useful during dev/testing)
        base_dir = Path(__file__).resolve().parent.parent.parent
        path = base_dir / config_path

    if not path.exists():
        logger.critical(f"Configuration file not found at: {path.absolute()}")
        raise FileNotFoundError(f"Config file '{config_path}' is missing.")

    try:
        with open(path, "r") as file:
            config = yaml.safe_load(file) or {}
    except yaml.YAMLError as e:
        logger.critical(f"Error parsing YAML configuration: {e}")
        raise

    logger.info(f"Configuration loaded successfully from {path}")
    return config


def get_extraction_settings(config: Dict[str, Any]) -> ExtractionSettings:
    """
    Helper to extract and validate the extraction settings.
    The LLM_PROVIDER environment variable overrides 'extraction.provider'.
    """
    section = dict(config.get("extraction") or {})

    provider_override = os.getenv("LLM_PROVIDER")
    if provider_override:
        section["provider"] = provider_override.strip().lower()

    try:
        return ExtractionSettings(**section)
    except ValidationError as e:
        logger.critical(f"Invalid Config: 'extraction' section rejected: {e}")
        raise


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging() -> None:
    """
    Configures the root logger from LOG_LEVEL (default INFO).
    Call after load_dotenv() so values from .env are honoured.
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        logger.warning(f"Unknown LOG_LEVEL '{level_name}', defaulting to INFO")
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
