import warnings
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="JAILBOX_",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "jailbox"
    API_V1_STR: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SENTRY_DSN: HttpUrl | None = None
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Data directory scripts may read from (root boundary).
    CONTEXT_DIR: Path = Path("./context")
    # Script to host; defaults to CONTEXT_DIR / MAIN_SCRIPT_NAME.
    SCRIPT_PATH: Path | None = None
    MAIN_SCRIPT_NAME: str = "configure.py"
    # Parent directory for per-invocation scratch directories (system temp if unset).
    SCRATCH_BASE_DIR: Path | None = None
    # Web UI served at / when the directory exists.
    STATIC_DIR: Path | None = Path("./static")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def script_path(self) -> Path:
        if self.SCRIPT_PATH is not None:
            return self.SCRIPT_PATH
        return self.CONTEXT_DIR / self.MAIN_SCRIPT_NAME

    @model_validator(mode="after")
    def _check_log_level(self) -> Self:
        if self.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            message = f'Unknown LOG_LEVEL "{self.LOG_LEVEL}", falling back to INFO.'
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
                self.LOG_LEVEL = "INFO"
            else:
                raise ValueError(message)
        else:
            self.LOG_LEVEL = self.LOG_LEVEL.upper()
        return self


settings = Settings()  # type: ignore
