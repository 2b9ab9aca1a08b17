from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateVideoForm(BaseModel):
    """Corpo do POST /api/videos já extraído de multipart ou JSON.

    Os campos ficam frouxos (Any/Optional) porque a validação de negócio e as
    mensagens de erro ficam em catalog.utils.validators.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    iframe_embed: Optional[str] = Field(default=None, alias="iframeEmbed")
    tags: Any = None
    duration: Any = None
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")
