# FILE: src/tsugumi/infrastructure/builders/epub/package_assembler.py
import zipfile
from pathlib import Path

from loguru import logger

from ....models.package import EpubComponents, ManifestItem
from ....shared.constants import EPUB_PATHS, MIME_TYPES, TEMPLATE_NAMES
from ....shared.exceptions import ArchiveError, ManifestConsistencyError
from .component_generator import ASSETS_ROOT

CONTAINER_XML_RESOURCE_PATH = ASSETS_ROOT / TEMPLATE_NAMES.CONTAINER_XML
MIMETYPE_CONTENT = MIME_TYPES.EPUB.encode('ascii')


class EpubPackageAssembler:
    """
    EPUBコンポーネントをZIPファイルに梱包するクラス。

    書き込み順序は mimetype (無圧縮・先頭)、META-INF/container.xml、
    item/standard.opf、item/navigation-documents.xhtml、その後にマニフェストの登録順で各アイテム。
    """

    def archive(self, components: EpubComponents, output_path: Path) -> None:
        """準備されたコンポーネントをZIPファイルに書き込み、EPUBを生成します。"""
        try:
            container_content = CONTAINER_XML_RESOURCE_PATH.read_bytes()
        except OSError as e:
            logger.error(
                f'コンテナリソースの読み込みに失敗: {CONTAINER_XML_RESOURCE_PATH}. {e}'
            )
            raise ArchiveError(EPUB_PATHS.CONTAINER_XML_PATH, str(e)) from e

        try:
            zip_file = zipfile.ZipFile(
                output_path,
                'w',
                compression=zipfile.ZIP_DEFLATED,
                strict_timestamps=False,
            )
        except OSError as e:
            raise ArchiveError(str(output_path), str(e)) from e

        with zip_file:
            logger.info('mimetype を書き込みます。')
            self._write_bytes(
                zip_file,
                EPUB_PATHS.MIMETYPE_FILE_NAME,
                MIMETYPE_CONTENT,
                compress_type=zipfile.ZIP_STORED,
            )
            logger.info('コンテナを書き込みます。')
            self._write_bytes(
                zip_file, EPUB_PATHS.CONTAINER_XML_PATH, container_content
            )
            logger.info('パッケージ文書を書き込みます。')
            self._write_bytes(
                zip_file, EPUB_PATHS.PACKAGE_DOCUMENT_PATH, components.package_document
            )
            logger.info('ナビゲーション文書を書き込みます。')
            self._write_bytes(
                zip_file, EPUB_PATHS.NAV_PATH, components.navigation_document
            )

            logger.info(f'{len(components.items)}件のアイテムを書き込みます。')
            for item in components.items:
                self._write_item(zip_file, item)

        logger.debug(f'EPUB を生成しました: {output_path}')

    def _write_bytes(
        self,
        zip_file: zipfile.ZipFile,
        entry: str,
        content: bytes,
        compress_type: int | None = None,
    ) -> None:
        try:
            zip_file.writestr(entry, content, compress_type=compress_type)
        except OSError as e:
            raise ArchiveError(entry, str(e)) from e

    def _write_item(self, zip_file: zipfile.ZipFile, item: ManifestItem) -> None:
        """単一のアイテムを item/<href> に書き込みます。生成文書は書き込み後に削除します。"""
        entry = f'{EPUB_PATHS.ITEM_DIR}/{item.href}'
        if item.source is None:
            raise ManifestConsistencyError(f"アイテム '{item.id}' に読み込み元がありません。")
        try:
            zip_file.write(item.source, entry)
        except OSError as e:
            logger.error(f'アイテムの読み込み/書き込み失敗: {item.source}, {e}')
            raise ArchiveError(entry, str(e)) from e

        if item.staged:
            item.source.unlink(missing_ok=True)
