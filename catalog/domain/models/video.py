from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VideoRecord(BaseModel):
    """Registro persistido; nomes camelCase no JSON e no DynamoDB."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., pattern=r"^v_[A-Za-z0-9]{8}$")
    title: str = Field(..., min_length=3)
    thumbnail_url: str = Field(..., alias="thumbnailUrl")
    iframe_embed: str = Field(..., alias="iframeEmbed")
    tags: List[str] = Field(default_factory=list, max_length=10)
    duration: Optional[float] = Field(default=None, ge=0)
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # linhas antigas gravadas sem offset (timestamp sem tz) são UTC
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)

    def to_item(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
