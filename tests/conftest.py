import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from loguru import logger
from PIL import Image

from tsugumi.infrastructure.builders.epub.asset_resolver import AssetResolver
from tsugumi.infrastructure.builders.epub.builder import EpubBuilder
from tsugumi.models.book import Book
from tsugumi.shared.settings import Settings

OPF_NS = {
    'opf': 'http://www.idpf.org/2007/opf',
    'dc': 'http://purl.org/dc/elements/1.1/',
}
XHTML_NS = {
    'x': 'http://www.w3.org/1999/xhtml',
    'svg': 'http://www.w3.org/2000/svg',
}
XLINK_HREF = '{http://www.w3.org/1999/xlink}href'
EPUB_TYPE = '{http://www.idpf.org/2007/ops}type'
XML_LANG = '{http://www.w3.org/XML/1998/namespace}lang'


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """tmp_path 以下に単色の画像を作成する関数を返します。"""

    def _make(name: str, size: tuple[int, int] = (600, 800)) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        fmt = 'JPEG' if path.suffix.lower() in ('.jpg', '.jpeg') else 'PNG'
        Image.new('RGB', size, color=(200, 200, 200)).save(path, format=fmt)
        return path

    return _make


@pytest.fixture
def book_data() -> Callable[..., dict[str, Any]]:
    """tsugumi.yaml と同じ形の辞書を作る関数を返します。"""

    def _data(chapters: list[dict[str, Any]], **rendition: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            'metadata': {
                'title': ['テストブック'],
                'creator': [{'name': '著者', 'role': 'aut'}],
                'language': 'ja',
                'identifier': 'urn:uuid:12345678-1234-5678-1234-567812345678',
            },
            'chapter': chapters,
        }
        if rendition:
            data['rendition'] = rendition
        return data

    return _data


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Settings:
    # pyproject.toml や .env を読み込まないよう、空のディレクトリで初期化する
    monkeypatch.chdir(tmp_path)
    return Settings()


@pytest.fixture
def build_epub(
    tmp_path: Path, settings: Settings
) -> Iterator[Callable[[dict[str, Any]], zipfile.ZipFile]]:
    """辞書から書籍をビルドし、開いたZipFileを返す関数。"""
    opened: list[zipfile.ZipFile] = []

    def _build(data: dict[str, Any]) -> zipfile.ZipFile:
        book = Book.model_validate(data)
        output = tmp_path / 'out.epub'
        EpubBuilder(settings).build(book, AssetResolver(tmp_path), output)
        zf = zipfile.ZipFile(output)
        opened.append(zf)
        return zf

    yield _build
    for zf in opened:
        zf.close()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """loguru のメッセージを収集します。"""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(str(message)), level='DEBUG', format='{message}'
    )
    yield messages
    logger.remove(handler_id)
