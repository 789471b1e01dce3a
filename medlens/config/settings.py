from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiConfig(BaseSettings):
    """Google Gemini configuration."""

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    analysis_model: str = Field(
        default="gemini-2.5-pro",
        validation_alias="GEMINI_ANALYSIS_MODEL",
    )
    fast_model: str = Field(
        default="gemini-2.5-flash",
        validation_alias="GEMINI_FAST_MODEL",
    )
    chat_model: str = Field(
        default="gemini-2.5-flash",
        validation_alias="GEMINI_CHAT_MODEL",
    )
    tts_model: str = Field(
        default="gemini-2.5-flash-preview-tts",
        validation_alias="GEMINI_TTS_MODEL",
    )
    transcription_model: str = Field(
        default="gemini-2.5-flash",
        validation_alias="GEMINI_TRANSCRIPTION_MODEL",
    )
    image_model: str = Field(
        default="gemini-3-pro-image-preview",
        validation_alias="GEMINI_IMAGE_MODEL",
    )
    thinking_budget: int = Field(
        default=8192,
        validation_alias="GEMINI_THINKING_BUDGET",
        ge=1,
        le=32768,
    )
    voice_name: str = Field(default="Kore", validation_alias="GEMINI_VOICE_NAME")
    image_aspect_ratio: str = Field(
        default="16:9",
        validation_alias="GEMINI_IMAGE_ASPECT_RATIO",
    )
    image_size: str = Field(default="1K", validation_alias="GEMINI_IMAGE_SIZE")

    model_config = SettingsConfigDict(
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class UploadConfig(BaseSettings):
    """Limits applied to user supplied documents and recordings."""

    max_file_bytes: int = Field(default=20 * 1024 * 1024, ge=1)
    recording_media_type: str = "audio/webm"

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "MedLens Analysis Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_file: str = "logs/app.log"
    pipeline_log_file: str = "logs/analysis_pipeline.log"
    chat_log_file: str = "logs/chat.log"

    # Gemini
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)

    # Uploads
    uploads: UploadConfig = Field(default_factory=UploadConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
