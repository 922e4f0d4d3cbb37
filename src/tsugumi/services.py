# FILE: src/tsugumi/services.py
import os
import uuid
from pathlib import Path
from typing import Any

from loguru import logger

from .domain.interfaces import IBuilder, IProjectRepository
from .infrastructure.builders.epub.asset_resolver import AssetResolver
from .models.book import Book
from .shared.constants import PROJECT_PATHS
from .shared.settings import Settings
from .utils.filesystem_sanitizer import generate_sanitized_filename


def detect_language(lang_env: str | None, default: str) -> str:
    """
    環境変数LANG (例: 'ja_JP.UTF-8') から言語コードを取り出します。
    判定できない場合は default を返します。
    """
    if not lang_env:
        return default
    language = lang_env.split('_')[0].split('.')[0].strip().lower()
    if not language or language in ('c', 'posix'):
        return default
    return language


def create_chapters(
    title: str | None, files: list[Path], cover_name: str
) -> list[dict[str, Any]]:
    """
    ファイル一覧から章の記述を作ります。
    最初のファイルは表紙の章に、残りは title を名前とする本文の章に入ります。
    表紙の章がある場合、ページのない本文の章は作りません。
    """
    pages = [file.as_posix() for file in files]
    chapters: list[dict[str, Any]] = []
    if pages:
        chapters.append({'name': cover_name, 'page': pages[:1], 'cover': True})

    content: dict[str, Any] = {}
    if title:
        content['name'] = title
    content['page'] = pages[1:]
    if content['page'] or not chapters:
        chapters.append(content)
    return chapters


class ApplicationService:
    """
    アプリケーションの全ユースケースを統括するサービスレイヤー。
    依存関係の構築はコンポジションルート(cli.py)で行われる。
    """

    def __init__(
        self,
        settings: Settings,
        builder: IBuilder,
        repository: IProjectRepository,
    ):
        self.settings = settings
        self.builder = builder
        self.repository = repository
        logger.debug('ApplicationService が初期化されました。')

    def build_project(self, start_dir: Path, output: Path | None = None) -> Path:
        """
        start_dir から親方向にプロジェクトを探してビルドし、生成したEPUBのパスを返します。

        Args:
            start_dir (Path): 探索を開始するディレクトリ。
            output (Path | None): 出力先。'.epub' で終わる場合はファイルパス、
                それ以外はディレクトリとして扱います。省略時はプロジェクトのディレクトリ。
        """
        project_path = self.repository.find_project(start_dir)
        book = self.repository.load(project_path)
        project_dir = project_path.parent

        output_path = self.resolve_output_path(output or project_dir, book)
        with logger.contextualize(project=str(project_path)):
            return self.builder.build(book, AssetResolver(project_dir), output_path)

    def resolve_output_path(self, output: Path, book: Book) -> Path:
        if output.suffix.lower() == PROJECT_PATHS.EPUB_SUFFIX:
            output_path = output
        else:
            filename = generate_sanitized_filename(
                self.settings.builder.filename_template,
                {'title': book.metadata.primary_title or 'untitled'},
                max_length=self.settings.builder.max_filename_length,
            )
            output_path = output / filename

        output_path = output_path.resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        return output_path

    def new_project(
        self,
        directory: Path,
        title: str | None = None,
        author: str | None = None,
        identifier: str | None = None,
        files: list[Path] | None = None,
    ) -> Path:
        """ディレクトリに新しいプロジェクトファイルを作成し、そのパスを返します。"""
        document = self.scaffold_document(directory, title, author, identifier, files)
        project_path = self.repository.save_document(directory, document)
        logger.bind(project_path=str(project_path)).success(
            'プロジェクトファイルを作成しました。'
        )
        return project_path

    def scaffold_document(
        self,
        directory: Path,
        title: str | None,
        author: str | None,
        identifier: str | None,
        files: list[Path] | None,
    ) -> dict[str, Any]:
        new_settings = self.settings.new
        main_title = title or directory.resolve().name

        metadata: dict[str, Any] = {'title': [main_title]}
        if author:
            metadata['creator'] = [{'name': author, 'role': 'aut'}]
        metadata['language'] = detect_language(
            os.environ.get('LANG'), new_settings.default_language
        )
        metadata['identifier'] = identifier or f'urn:uuid:{uuid.uuid4()}'

        return {
            'metadata': metadata,
            'rendition': {'orientation': new_settings.orientation.value},
            'chapter': create_chapters(
                title, list(files or []), new_settings.cover_chapter_name
            ),
        }
