from typing import Literal, Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator

from app.v1_0.helper.query import FUNCTIONS, QUERY_OPTIONS

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "Students Query API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["local", "dev", "staging", "prod"] = "local"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "*"      # CSV o '*'
    LOG_LEVEL: str = "INFO"

    # Query options
    QUERY_ALLOWED_OPTIONS: str = ",".join(QUERY_OPTIONS)   # CSV
    QUERY_ALLOWED_FUNCTIONS: str = "*"                     # CSV o '*'
    QUERY_MAX_TOP: Optional[int] = None

    # -------- validators (presencia, formato) --------
    @field_validator("API_PREFIX")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = (v or "").strip().strip("/")
        return f"/{v}" if v else ""

    @field_validator("QUERY_ALLOWED_OPTIONS")
    @classmethod
    def _known_options(cls, v: str, info):
        names = _split_csv(v)
        unknown = [n for n in names if n not in QUERY_OPTIONS]
        if unknown:
            raise ValueError(f"{info.field_name} has unknown options: {', '.join(unknown)}")
        return ",".join(names)

    @field_validator("QUERY_ALLOWED_FUNCTIONS")
    @classmethod
    def _known_functions(cls, v: str, info):
        if v.strip() == "*":
            return "*"
        names = _split_csv(v)
        unknown = [n for n in names if n not in FUNCTIONS]
        if unknown:
            raise ValueError(f"{info.field_name} has unknown functions: {', '.join(unknown)}")
        return ",".join(names)

    @field_validator("QUERY_MAX_TOP")
    @classmethod
    def _max_top_positive(cls, v: Optional[int], info):
        if v is not None and v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    # -------- cross-field checks --------
    @model_validator(mode="after")
    def _cross_checks(self):
        if self.QUERY_MAX_TOP is not None and "top" not in self.QUERY_ALLOWED_OPTIONS_LIST:
            raise ValueError("QUERY_MAX_TOP requires 'top' in QUERY_ALLOWED_OPTIONS")
        return self

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        return ["*"] if self.CORS_ORIGINS.strip() == "*" else _split_csv(self.CORS_ORIGINS)

    @property
    def QUERY_ALLOWED_OPTIONS_LIST(self) -> List[str]:
        return _split_csv(self.QUERY_ALLOWED_OPTIONS)

    @property
    def QUERY_ALLOWED_FUNCTIONS_LIST(self) -> List[str]:
        if self.QUERY_ALLOWED_FUNCTIONS == "*":
            return list(FUNCTIONS)
        return _split_csv(self.QUERY_ALLOWED_FUNCTIONS)


def _split_csv(v: str) -> List[str]:
    return [o.strip() for o in (v or "").split(",") if o.strip()]

settings = Settings()
