from pydantic import AnyHttpUrl, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BACKEND_URL = "http://localhost:8000"

_http_url = TypeAdapter(AnyHttpUrl)


class Settings(BaseSettings):
    """Storefront settings sourced from environment variables and `.env`."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    backend_url: str = DEFAULT_BACKEND_URL
    debounce_ms: int = 300
    request_timeout: float = 10.0
    log_level: str = "INFO"
    log_timezone: str = "UTC"

    @field_validator("backend_url")
    @classmethod
    def valid_backend_url(cls, value: str) -> str:
        # An empty variable means "unset"
        value = value.strip().rstrip("/") or DEFAULT_BACKEND_URL
        try:
            _http_url.validate_python(value)
        except ValidationError as e:
            raise ValueError(f"backend_url must be an http(s) URL: {value!r}") from e
        return value

    @field_validator("debounce_ms")
    @classmethod
    def non_negative_debounce(cls, value: int) -> int:
        if value < 0:
            raise ValueError("debounce_ms must be >= 0")
        return value


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
