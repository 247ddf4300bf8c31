from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    env: Literal["local", "prod", "test"] = Field(default="local", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    api_key: str = Field(default="", alias="API_KEY")
    api_key_header: str = Field(default="X-API-Key", alias="API_KEY_HEADER")

    cdn_base_url: str = Field(default="", alias="CDN_BASE_URL")
    allowed_origins_raw: str = Field(default="", alias="ALLOWED_ORIGINS")
    ip_whitelist_raw: str = Field(default="", alias="IP_WHITELIST")
    trust_forwarded_headers: bool = Field(default=False, alias="TRUST_FORWARDED_HEADERS")

    storage_backend: Literal["s3", "local"] = Field(default="s3", alias="STORAGE_BACKEND")
    local_storage_dir: str = Field(default="./storage", alias="LOCAL_STORAGE_DIR")

    s3_bucket: str = Field(default="uploads", alias="S3_BUCKET")
    s3_access_key: str = Field(default="change-me", alias="S3_KEY")
    s3_secret_key: str = Field(default="change-me", alias="S3_SECRET")
    s3_endpoint: HttpUrl | None = Field(default=None, alias="S3_ENDPOINT")
    s3_region: str | None = Field(default=None, alias="S3_REGION")

    max_upload_bytes: int = Field(default=25 * 1024 * 1024, gt=0, alias="MAX_UPLOAD_BYTES")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    @property
    def allowed_origins(self) -> list[str]:
        return _split_csv(self.allowed_origins_raw)

    @property
    def ip_allowlist(self) -> frozenset[str]:
        # Blank entries are dropped so an unset client address can never match.
        return frozenset(_split_csv(self.ip_whitelist_raw))


@lru_cache
def get_settings() -> Settings:
    return Settings()
