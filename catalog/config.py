# catalog/config.py
import json
from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import Field, AliasChoices, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):

    # Chave estática exigida em POST/DELETE (header x-admin-key)
    admin_api_key: str = Field(
        "",
        validation_alias=AliasChoices("ADMIN_API_KEY", "admin_api_key"),
    )

    # AWS (LocalStack em dev)
    aws_region: str = "us-east-1"
    aws_endpoint_url: Optional[str] = None
    s3_bucket: str = "video-catalog-thumbnails"
    ddb_table: str = "videos"

    # URL pública de onde as thumbnails são servidas; se vazio, usa endpoint/bucket
    thumbnail_public_base_url: Optional[str] = None
    max_thumbnail_mb: int = 5

    # Algumas implantações exigem duration no schema
    require_duration: bool = False

    cors_origins: Annotated[List[str], NoDecode] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",   # sem prefixo
        extra="ignore",
        frozen=True,
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, v):
        # aceita "a,b,c" ou JSON
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    def thumbnail_base_url(self) -> str:
        if self.thumbnail_public_base_url:
            return self.thumbnail_public_base_url.rstrip("/")
        endpoint = (self.aws_endpoint_url or f"https://s3.{self.aws_region}.amazonaws.com").rstrip("/")
        return f"{endpoint}/{self.s3_bucket}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
