# catalog/domain/repositories/video_repository_interface.py
from abc import ABC, abstractmethod
from typing import List, Optional


class IVideoRepository(ABC):
    """Contrato para persistência de vídeos"""

    @abstractmethod
    def list_all(self) -> List[dict]:
        """Todos os vídeos, mais recentes primeiro (createdAt desc)"""
        pass

    @abstractmethod
    def get(self, video_id: str) -> Optional[dict]:
        """Busca um vídeo pelo ID; None se não existir"""
        pass

    @abstractmethod
    def put(self, item: dict) -> None:
        """Insere um novo vídeo; falha se o ID já existir"""
        pass

    @abstractmethod
    def delete(self, video_id: str) -> None:
        """Remove o registro do vídeo"""
        pass
