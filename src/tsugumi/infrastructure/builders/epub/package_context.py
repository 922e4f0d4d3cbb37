# FILE: src/tsugumi/infrastructure/builders/epub/package_context.py
import tempfile
from datetime import datetime
from pathlib import Path
from types import TracebackType

from loguru import logger

from ....models.book import Book, Chapter, Page, Style
from ....models.package import (
    EpubComponents,
    ManifestItem,
    PackageDocument,
    SpineEntry,
    TocEntry,
)
from ....shared.constants import MIME_TYPES, PACKAGE, TEMPLATE_NAMES
from ....shared.enums import PageSpread
from ....shared.exceptions import BuildError, ManifestConsistencyError
from ....utils.ordered_registry import OrderedRegistry
from .asset_resolver import AssetResolver
from .component_generator import ASSETS_ROOT, EpubComponentGenerator, check_orientation
from .id_policy import IdAllocator, Slot
from .package_metadata import PackageMetadataBuilder


class PackageContext:
    """
    1回のビルドで組み立てるマニフェスト・spine・目次を保持するクラス。

    各章・ページ・スタイルを順に取り込み、項目は追記のみで置換や削除は行いません。
    生成した文書は一時ディレクトリに置かれ、with ブロックを抜ける際に必ず削除されます。
    """

    def __init__(
        self,
        book: Book,
        resolver: AssetResolver,
        generator: EpubComponentGenerator,
    ):
        self.book = book
        self.resolver = resolver
        self.generator = generator

        self.manifest: OrderedRegistry[str, ManifestItem] = OrderedRegistry('manifest')
        self.spine: list[SpineEntry] = []
        self.toc: OrderedRegistry[str, str] = OrderedRegistry('toc')
        self.linked_styles: list[str] = []

        self._ids = IdAllocator()
        self._hrefs: set[str] = set()
        self._staging: tempfile.TemporaryDirectory[str] | None = None

    def __enter__(self) -> 'PackageContext':
        self._staging = tempfile.TemporaryDirectory(prefix='tsugumi_')
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._staging is not None:
            self._staging.cleanup()
            self._staging = None

    @property
    def staging_dir(self) -> Path:
        if self._staging is None:
            raise BuildError('PackageContext は with ブロックの中で使用してください。')
        return Path(self._staging.name)

    # --- 取り込み ---

    def assemble(self) -> None:
        """スタイルと全ての章を取り込みます。"""
        if self.book.rendition.styles:
            self.add_styles(self.book.rendition.styles)
        else:
            self.add_default_style()

        for chapter in self.book.chapters:
            self.add_chapter(chapter)

    def add_default_style(self) -> None:
        logger.info('デフォルトスタイルを追加します。')
        source = self.stage(
            (ASSETS_ROOT / TEMPLATE_NAMES.DEFAULT_STYLE).read_bytes(), '.css'
        )
        slot = self._ids.default_style()
        self._add_item(slot, MIME_TYPES.CSS, source, staged=True)
        self.linked_styles.append(slot.id)

    def add_styles(self, styles: list[Style]) -> None:
        logger.info('スタイルを追加します。')
        for style in styles:
            source = self.stage(self.resolver.read_style(style).encode('utf-8'), '.css')
            slot = self._ids.style(style.href)
            self._add_item(slot, MIME_TYPES.CSS, source, staged=True)
            if style.link:
                self.linked_styles.append(slot.id)

    def add_chapter(self, chapter: Chapter) -> None:
        logger.info(f'章を追加します: {chapter.title or "(無題)"}')
        for index, page in enumerate(chapter.pages):
            page_id = self.add_page(chapter, page, index)
            # 名前のない章は目次に載らない
            if index == 0 and chapter.title:
                self.toc.add(page_id, chapter.title)

    def add_page(self, chapter: Chapter, page: Page, index: int) -> str:
        """1ページ分の画像とXHTMLをマニフェストに追加し、spineに並べます。ページのIDを返します。"""
        logger.debug(f'ページを追加します: {page.src}')
        cover = chapter.cover and index == 0

        image = self.resolver.inspect_image(page.src)
        check_orientation(image, self.book.rendition.orientation, page.src)

        image_slot = self._ids.image(image.path, cover)
        self._add_item(image_slot, image.media_type, image.path)

        content = self.generator.render_content_page(
            image,
            image_slot.href,
            [self.manifest.get(style_id) for style_id in self.linked_styles],
            cover,
        )
        page_slot = self._ids.page(cover)
        self._add_item(
            page_slot, MIME_TYPES.XHTML, self.stage(content, '.xhtml'), staged=True
        )

        spread = PageSpread.CENTER if cover else PageSpread.for_index(index)
        self.spine.append(SpineEntry(idref=page_slot.id, properties=spread.value))
        return page_slot.id

    def _add_item(
        self, slot: Slot, media_type: str, source: Path, staged: bool = False
    ) -> None:
        if slot.href in self._hrefs:
            raise ManifestConsistencyError(
                f"href '{slot.href}' が重複して登録されました。"
            )
        self.manifest.add(
            slot.id,
            ManifestItem(
                id=slot.id,
                media_type=media_type,
                href=slot.href,
                properties=slot.properties,
                source=source,
                staged=staged,
            ),
        )
        self._hrefs.add(slot.href)

    def stage(self, content: bytes, suffix: str) -> Path:
        """生成した文書を一時ディレクトリに書き出し、そのパスを返します。"""
        with tempfile.NamedTemporaryFile(
            dir=self.staging_dir, suffix=suffix, delete=False
        ) as f:
            f.write(content)
        return Path(f.name)

    # --- 出力 ---

    def toc_entries(self) -> list[TocEntry]:
        """目次項目を登録順に返します。hrefはナビゲーション文書からの相対パスです。"""
        return [
            TocEntry(href=self.manifest.get(page_id).href, caption=caption)
            for page_id, caption in self.toc.items()
        ]

    def package_document(self, modified: datetime) -> PackageDocument:
        nav = IdAllocator.navigation()
        nav_item = ManifestItem(
            id=nav.id,
            media_type=MIME_TYPES.XHTML,
            href=nav.href,
            properties=nav.properties,
        )
        metadata = PackageMetadataBuilder(
            self.book.metadata, self.book.rendition
        ).build(modified)
        return PackageDocument(
            language=self.book.metadata.language,
            unique_identifier=PACKAGE.UNIQUE_IDENTIFIER_ID,
            prefix=PACKAGE.EBPAJ_PREFIX,
            metadata=metadata,
            manifest=[nav_item, *self.manifest.values()],
            spine=list(self.spine),
            direction=self.book.rendition.direction,
        )

    def components(self, modified: datetime) -> EpubComponents:
        """アーカイブに書き込む全ての構成要素を返します。"""
        return EpubComponents(
            package_document=self.generator.render_package_document(
                self.package_document(modified)
            ),
            navigation_document=self.generator.render_navigation(self.toc_entries()),
            items=list(self.manifest.values()),
        )
