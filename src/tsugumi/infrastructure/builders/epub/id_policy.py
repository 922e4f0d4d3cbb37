# FILE: src/tsugumi/infrastructure/builders/epub/id_policy.py
"""
マニフェストIDとアーカイブ内hrefの割り当て規則。

- スタイル: s-0001, s-0002, ... -> style/<名前>
- 画像: 表紙は cover -> image/cover<拡張子>、それ以外は i-0001, ... -> image/<ID><拡張子>
- ページ: 表紙は p-cover、それ以外は p-0001, ... -> xhtml/<ID>.xhtml
連番はビルド全体で共有され、章ごとにリセットされることはありません。
"""

from dataclasses import dataclass
from pathlib import Path

from ....shared.constants import EPUB_PATHS, MANIFEST_IDS


@dataclass(frozen=True)
class Slot:
    """割り当て済みのIDとhref、およびマニフェストのproperties。"""

    id: str
    href: str
    properties: str | None = None


def sequential_id(prefix: str, seq: int) -> str:
    return f'{prefix}-{seq:04}'


def style_href(name: str) -> str:
    return f'{EPUB_PATHS.STYLE_DIR}/{name}'


def image_href(image_id: str, source: Path) -> str:
    return f'{EPUB_PATHS.IMAGE_DIR}/{image_id}{source.suffix}'


def page_href(page_id: str) -> str:
    return f'{EPUB_PATHS.XHTML_DIR}/{page_id}.xhtml'


class IdAllocator:
    """ビルド単位の連番を保持し、IDを一度だけ割り当てるクラス。"""

    def __init__(self) -> None:
        self._style_index = 0
        self._image_index = 0
        self._page_index = 0

    def default_style(self) -> Slot:
        return Slot(
            id=MANIFEST_IDS.DEFAULT_STYLE_ID,
            href=style_href(MANIFEST_IDS.DEFAULT_STYLE_NAME),
        )

    def style(self, name: str) -> Slot:
        self._style_index += 1
        return Slot(
            id=sequential_id(MANIFEST_IDS.STYLE_PREFIX, self._style_index),
            href=style_href(name),
        )

    def image(self, source: Path, cover: bool) -> Slot:
        if cover:
            image_id = MANIFEST_IDS.COVER_IMAGE_ID
            return Slot(
                id=image_id,
                href=image_href(image_id, source),
                properties=MANIFEST_IDS.COVER_IMAGE_PROPERTY,
            )
        self._image_index += 1
        image_id = sequential_id(MANIFEST_IDS.IMAGE_PREFIX, self._image_index)
        return Slot(id=image_id, href=image_href(image_id, source))

    def page(self, cover: bool) -> Slot:
        if cover:
            page_id = MANIFEST_IDS.COVER_PAGE_ID
        else:
            self._page_index += 1
            page_id = sequential_id(MANIFEST_IDS.PAGE_PREFIX, self._page_index)
        return Slot(
            id=page_id,
            href=page_href(page_id),
            properties=MANIFEST_IDS.SVG_PROPERTY,
        )

    @staticmethod
    def navigation() -> Slot:
        return Slot(
            id=MANIFEST_IDS.NAV_ID,
            href=EPUB_PATHS.NAV_HREF,
            properties=MANIFEST_IDS.NAV_PROPERTY,
        )
