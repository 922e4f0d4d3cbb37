# src/tsugumi/infrastructure/repositories/project.py

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from ...models.book import Book
from ...shared.exceptions import ProjectError
from ...shared.settings import ProjectSettings


def load_book(path: Path) -> Book:
    """
    YAMLのプロジェクトファイルを読み込み、書籍モデルを返します。

    Raises:
        ProjectError: ファイルが読めない、YAMLとして不正、またはモデルの検証に失敗した場合。
    """
    try:
        with path.open(encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ProjectError(f"'{path}' を開けません: {e}") from e
    except yaml.YAMLError as e:
        raise ProjectError(f"'{path}' の解析に失敗しました: {e}") from e

    if not isinstance(data, dict):
        raise ProjectError(f"'{path}' のルートはマッピングである必要があります。")

    try:
        return Book.model_validate(data)
    except ValidationError as e:
        raise ProjectError(f"'{path}' の内容が不正です:\n{e}") from e


class FileSystemProjectRepository:
    """ファイルシステム上の tsugumi.yaml を扱うリポジトリ。"""

    def __init__(self, settings: ProjectSettings):
        self.file_name = settings.file_name

    def find_project(self, start: Path) -> Path:
        """
        start から親ディレクトリへ遡り、最初に見つかったプロジェクトファイルのパスを返します。

        Raises:
            ProjectError: ルートまで遡っても見つからない場合。
        """
        start = start.resolve()
        for directory in (start, *start.parents):
            candidate = directory / self.file_name
            if candidate.is_file():
                logger.bind(project_path=str(candidate)).debug(
                    'プロジェクトファイルを検出しました。'
                )
                return candidate
        raise ProjectError(
            f"'{self.file_name}' が '{start}' またはその親ディレクトリに見つかりません。"
        )

    def load(self, project_path: Path) -> Book:
        return load_book(project_path)

    def save_document(self, directory: Path, document: dict[str, Any]) -> Path:
        """
        書籍の記述をプロジェクトファイルとして保存します。既存のファイルは上書きしません。
        """
        project_path = directory / self.file_name
        try:
            with project_path.open('x', encoding='utf-8') as f:
                yaml.safe_dump(
                    document,
                    f,
                    allow_unicode=True,
                    sort_keys=False,
                    default_flow_style=False,
                )
        except FileExistsError as e:
            raise ProjectError(f"'{project_path}' は既に存在します。") from e
        except OSError as e:
            raise ProjectError(f"'{project_path}' の保存に失敗しました: {e}") from e

        logger.bind(project_path=str(project_path)).debug(
            'プロジェクトファイルを保存しました。'
        )
        return project_path
