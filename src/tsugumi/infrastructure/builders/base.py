# FILE: src/tsugumi/infrastructure/builders/base.py
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from ...models.book import Book
from ...shared.settings import Settings
from .epub.asset_resolver import AssetResolver


class BaseBuilder(ABC):
    """Builderの抽象基底クラス。"""

    def __init__(
        self,
        settings: Settings,
    ):
        """
        Args:
            settings (Settings): アプリケーション設定。
        """
        self.settings = settings

    @classmethod
    @abstractmethod
    def get_builder_name(cls) -> str:
        """このビルダーの一意な名前を返します。"""
        raise NotImplementedError

    @abstractmethod
    def build(
        self,
        book: Book,
        resolver: AssetResolver,
        output_path: Path,
        modified: datetime | None = None,
    ) -> Path:
        """ビルド処理を実行し、生成されたファイルのパスを返します。"""
        raise NotImplementedError
