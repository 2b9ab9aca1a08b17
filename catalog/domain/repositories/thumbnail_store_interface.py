from abc import ABC, abstractmethod


class IThumbnailStore(ABC):
    """Contrato do armazenamento de thumbnails"""

    @abstractmethod
    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Grava o objeto e devolve a URL pública"""
        pass

    @abstractmethod
    def delete(self, url: str) -> None:
        """Best-effort: nunca propaga erro para quem chama"""
        pass
