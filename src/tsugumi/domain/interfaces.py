# FILE: src/tsugumi/domain/interfaces.py

from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ..infrastructure.builders.epub.asset_resolver import AssetResolver
from ..models.book import Book


class IBuilder(Protocol):
    """成果物をビルドするためのインターフェース。"""

    def build(
        self,
        book: Book,
        resolver: AssetResolver,
        output_path: Path,
        modified: datetime | None = None,
    ) -> Path:
        """
        書籍モデルから成果物をビルドし、そのパスを返します。

        Args:
            book (Book): ビルド対象の書籍。
            resolver (AssetResolver): アセットのパスを解決するリゾルバ。
            output_path (Path): 出力先のファイルパス。

        Returns:
            Path: 生成された成果物のパス。
        """
        ...


@runtime_checkable
class IProjectRepository(Protocol):
    """プロジェクトファイルの操作を抽象化するインターフェース。"""

    def find_project(self, start: Path) -> Path:
        """start から親方向に遡ってプロジェクトファイルを探します。"""
        ...

    def load(self, project_path: Path) -> Book: ...

    def save_document(self, directory: Path, document: dict[str, Any]) -> Path: ...
