from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    analysis_provider: str = "http"
    analysis_api_base_url: str = "https://builder.empromptu.ai/api_tools"
    analysis_api_token: str = ""
    analysis_timeout_seconds: float | None = None

    pdf_engine: str = "pdfplumber"
    file_read_workers: int = 4

    web_host: str = "127.0.0.1"
    web_port: int = 5000
    secret_key: str = "dev-secret-key"
    max_upload_mb: int = 16
    max_sessions: int = 1000
