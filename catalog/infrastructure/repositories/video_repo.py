# catalog/infrastructure/repositories/video_repo.py
import logging
from decimal import Decimal
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

import catalog.aws as aws_mod   # <-- importe o módulo, não o símbolo
from catalog.core.errors import UpstreamError
from catalog.core.metrics import DDB_OPS
from catalog.domain.models.video import VideoRecord
from catalog.domain.repositories.video_repository_interface import IVideoRepository

logger = logging.getLogger("videos.repo")


def _to_dynamo(item: dict) -> dict:
    # DynamoDB não aceita float
    return {k: Decimal(str(v)) if isinstance(v, float) else v for k, v in item.items()}


def _from_dynamo(item: dict) -> dict:
    out = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            v = int(v) if v == v.to_integral_value() else float(v)
        out[k] = v
    return out


class VideoRepo(IVideoRepository):
    def list_all(self) -> List[dict]:
        """
        Scan paginado + ordenação em memória por createdAt desc.
        Observação: para catálogos grandes, troque por Query em GSI ordenado por createdAt.
        """
        items: List[dict] = []
        kwargs: dict = {}
        try:
            while True:
                resp = aws_mod.table_videos.scan(**kwargs)
                items.extend(resp.get("Items", []))
                last = resp.get("LastEvaluatedKey")
                if not last:
                    break
                kwargs["ExclusiveStartKey"] = last
            DDB_OPS.labels(op="scan", status="ok").inc()
        except (BotoCoreError, ClientError) as e:
            DDB_OPS.labels(op="scan", status="error").inc()
            raise UpstreamError("Failed to fetch videos") from e

        items = [_from_dynamo(i) for i in items]
        items.sort(key=lambda i: VideoRecord.model_validate(i).created_at, reverse=True)
        return items

    def get(self, video_id: str) -> Optional[dict]:
        try:
            resp = aws_mod.table_videos.get_item(Key={"id": video_id})
            DDB_OPS.labels(op="get", status="ok").inc()
        except (BotoCoreError, ClientError) as e:
            DDB_OPS.labels(op="get", status="error").inc()
            raise UpstreamError("Failed to fetch video") from e
        item = resp.get("Item")
        return _from_dynamo(item) if item else None

    def put(self, item: dict) -> None:
        try:
            aws_mod.table_videos.put_item(
                Item=_to_dynamo(item),
                ConditionExpression="attribute_not_exists(id)",
            )
            DDB_OPS.labels(op="put", status="ok").inc()
        except ClientError as e:
            DDB_OPS.labels(op="put", status="error").inc()
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                logger.error("Colisão de ID ao inserir vídeo", extra={"video_id": item.get("id")})
            raise UpstreamError("Failed to create video") from e
        except BotoCoreError as e:
            DDB_OPS.labels(op="put", status="error").inc()
            raise UpstreamError("Failed to create video") from e

    def delete(self, video_id: str) -> None:
        try:
            aws_mod.table_videos.delete_item(Key={"id": video_id})
            DDB_OPS.labels(op="delete", status="ok").inc()
        except (BotoCoreError, ClientError) as e:
            DDB_OPS.labels(op="delete", status="error").inc()
            raise UpstreamError("Failed to delete video") from e
