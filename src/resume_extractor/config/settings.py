"""Pydantic settings models for résumé text extraction.

Each settings class reads its own YAML file under ``config/`` and can be
overridden per field from the environment.  Source priority (highest first):

    1. Constructor arguments (tests, embedding services)
    2. Environment variables (with prefix, e.g., EXTRACTION_OCR_THRESHOLD)
    3. .env file (OCR_API_KEY lives here)
    4. YAML config file (e.g., config/extraction.yaml)
    5. Field defaults

Config paths are resolved from the repository root, not the working directory.
"""

from pathlib import Path

from pydantic import ValidationInfo, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# settings.py -> config/ -> resume_extractor/ -> src/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parents[3]

_CONFIG_DIR = PROJECT_ROOT / "config"
_ENV_FILE = PROJECT_ROOT / ".env"

OCR_PROVIDERS = frozenset({"auto", "ocr_space", "tesseract", "none"})


class _YamlBackedSettings(BaseSettings):
    """Inserts the class's ``yaml_file`` below env and .env in the source chain."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


class ExtractionSettings(_YamlBackedSettings):
    """Scoring thresholds, bucket cutoffs and scraper bounds.

    The numbers are empirically tuned defaults; they are exposed here so they
    can be tuned without code changes.
    """

    # Acceptance thresholds per strategy family
    structural_threshold: int = 40
    ocr_threshold: int = 30
    manual_threshold: int = 25

    # Quality buckets
    high_bucket_cutoff: int = 70
    medium_bucket_cutoff: int = 40
    min_text_length: int = 20

    # Selection: OCR combined score multiplier
    ocr_weight: float = 1.2

    # Manual pattern scraper bounds
    manual_max_chars: int = 15_000
    manual_max_streams: int = 50
    manual_max_text_objects: int = 500

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "extraction.yaml"),
        env_prefix="EXTRACTION_",
    )

    @field_validator("medium_bucket_cutoff")
    @classmethod
    def _medium_below_high(cls, value: int, info: ValidationInfo) -> int:
        high = info.data.get("high_bucket_cutoff")
        if high is not None and value >= high:
            raise ValueError(
                f"medium_bucket_cutoff ({value}) must be below "
                f"high_bucket_cutoff ({high})"
            )
        return value


class OcrSettings(_YamlBackedSettings):
    """OCR backend selection and credentials.

    Non-secret settings (endpoint, language, timeout) come from config/ocr.yaml.
    The API key comes from .env or environment variables only -- it must
    NEVER appear in YAML files.

    ``provider`` is one of "auto", "ocr_space", "tesseract" or "none".  With
    "auto", OCR.space is used when an API key is configured and OCR is
    skipped otherwise.
    """

    provider: str = "auto"
    api_key: str = ""
    endpoint: str = "https://api.ocr.space/parse/image"
    language: str = "eng"
    engine: int = 2
    detect_orientation: bool = True
    scale: bool = True
    timeout_seconds: float = 8.0

    # Local Tesseract backend
    tesseract_cmd: str = "tesseract"
    tesseract_dpi: int = 300
    tesseract_max_pages: int = 5

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "ocr.yaml"),
        env_file=str(_ENV_FILE),
        env_prefix="OCR_",
        extra="ignore",
    )

    @field_validator("provider")
    @classmethod
    def _known_provider(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in OCR_PROVIDERS:
            raise ValueError(f"unknown OCR provider: {value!r}")
        return value


class PipelineSettings(_YamlBackedSettings):
    """Operations: logging and sidecar output."""

    log_dir: str = "logs"
    log_level: str = "INFO"
    log_max_bytes: int = 10_485_760  # 10MB
    log_backup_count: int = 5
    output_suffix: str = ".txt"

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "pipeline.yaml"),
        env_prefix="PIPELINE_",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()
