# FILE: src/tsugumi/infrastructure/builders/epub/builder.py
import os
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import TemplateError
from loguru import logger

from ....models.book import Book
from ....shared.exceptions import BuildError, InvalidBookError, TemplateRenderError
from ....shared.settings import Settings
from ..base import BaseBuilder
from .asset_resolver import AssetResolver
from .component_generator import EpubComponentGenerator, create_template_env
from .package_assembler import EpubPackageAssembler
from .package_context import PackageContext


def validate_book(book: Book) -> None:
    """
    アーカイブを書き始める前に、必須の書誌情報を検証します。

    Raises:
        InvalidBookError: 必須項目が空の場合、または表紙の章が複数ある場合。
    """
    metadata = book.metadata
    if not isinstance(metadata.language, str) or not metadata.language.strip():
        raise InvalidBookError('metadata.language', '言語が指定されていません。')
    if not isinstance(metadata.identifier, str) or not metadata.identifier.strip():
        raise InvalidBookError('metadata.identifier', '識別子が指定されていません。')
    if not metadata.titles:
        raise InvalidBookError('metadata.title', 'タイトルが指定されていません。')
    for seq, title in enumerate(metadata.titles, 1):
        if not title.name.strip():
            raise InvalidBookError(f'metadata.title[{seq}]', 'タイトルが空です。')

    cover_chapters = [chapter for chapter in book.chapters if chapter.cover]
    if len(cover_chapters) > 1:
        raise InvalidBookError(
            'chapter.cover', '表紙の章は1つまでしか指定できません。'
        )


class EpubBuilder(BaseBuilder):
    """EPUB生成プロセスを統括するクラス。"""

    def __init__(
        self,
        settings: Settings,
    ):
        super().__init__(settings)
        self.archiver = EpubPackageAssembler()

    @classmethod
    def get_builder_name(cls) -> str:
        return 'epub'

    def build(
        self,
        book: Book,
        resolver: AssetResolver,
        output_path: Path,
        modified: datetime | None = None,
    ) -> Path:
        """
        書籍モデルからEPUBファイルを生成するメインの実行メソッド。

        Args:
            book (Book): ビルド対象の書籍。
            resolver (AssetResolver): ページ画像やスタイルのパスを解決するリゾルバ。
            output_path (Path): 出力するEPUBファイルのパス。
            modified (datetime | None): dcterms:modified に記録する日時。省略時は現在時刻。
        """
        validate_book(book)

        log = logger.bind(output_path=str(output_path))
        log.info('EPUB作成処理を開始')

        if output_path.exists():
            log.warning('出力ファイルは既に存在するため上書きします。')

        modified = modified or datetime.now(timezone.utc)
        try:
            generator = EpubComponentGenerator(
                create_template_env(),
                language=book.metadata.language,
                title=book.metadata.primary_title,
            )
            with PackageContext(book, resolver, generator) as cx:
                cx.assemble()
                components = cx.components(modified)
                self.archiver.archive(components, output_path)
            log.success('EPUBファイルの作成成功')
            return output_path
        except TemplateError as e:
            template_name = getattr(e, 'name', 'N/A')
            logger.bind(template_name=template_name).error(
                f"テンプレート '{template_name}' のレンダリングに失敗しました。"
            )
            self._cleanup_failed_build(output_path)
            raise TemplateRenderError(f'テンプレートエラー: {e}') from e
        except BuildError:
            self._cleanup_failed_build(output_path)
            raise
        except Exception as e:
            logger.exception('EPUBファイルの作成中に予期せぬエラーが発生しました。')
            self._cleanup_failed_build(output_path)
            raise BuildError(f'EPUBのビルドに失敗しました: {e}') from e

    def _cleanup_failed_build(self, path: Path) -> None:
        """ビルド失敗時に、不完全な出力ファイルを削除します。"""
        try:
            if path.exists():
                os.remove(path)
                logger.bind(file_path=str(path)).info(
                    '不完全な出力ファイルを削除しました。'
                )
        except OSError as e:
            logger.bind(file_path=str(path), error=str(e)).error(
                '出力ファイルの削除に失敗しました。'
            )
