# FILE: src/tsugumi/infrastructure/builders/epub/asset_resolver.py
from pathlib import Path

from loguru import logger
from PIL import Image

from ....models.book import Style
from ....models.package import ImageInfo
from ....shared.exceptions import AssetError
from ....utils.media_types import (
    get_media_type_from_filename,
    get_media_type_from_image_format,
)

_INLINE_CSS_MARKERS = ('{', ';', '@', '\n')


def is_inline_css(src: str) -> bool:
    """スタイルの src がファイルパスではなくCSSそのものかどうかを判定します。"""
    return any(marker in src for marker in _INLINE_CSS_MARKERS)


class AssetResolver:
    """プロジェクトからの相対パスを解決し、画像やスタイルシートを読み込むクラス。"""

    def __init__(self, root: Path):
        self.root = root

    def resolve(self, src: str | Path) -> Path:
        """プロジェクトのルートを基準にパスを解決します。絶対パスはそのまま返します。"""
        path = Path(src)
        return path if path.is_absolute() else self.root / path

    def inspect_image(self, src: str | Path) -> ImageInfo:
        """画像を開き、ピクセル寸法とMIMEタイプを取得します。"""
        path = self.resolve(src)
        try:
            with Image.open(path) as img:
                width, height = img.size
                image_format = img.format
        except OSError as e:
            # PIL.UnidentifiedImageError も OSError のサブクラス
            raise AssetError(path, f'画像を読み込めません ({e})') from e

        media_type = get_media_type_from_image_format(
            image_format
        ) or get_media_type_from_filename(path)
        logger.bind(path=str(path), width=width, height=height).trace(
            '画像を読み込みました。'
        )
        return ImageInfo(path=path, width=width, height=height, media_type=media_type)

    def read_style(self, style: Style) -> str:
        """
        スタイルシートの内容を返します。
        src がCSSの記述 ('{', ';', '@' または改行を含む) であればそのまま返し、
        それ以外はプロジェクトからの相対パスとしてファイルを読み込みます。

        Raises:
            AssetError: パスとして扱った src のファイルが存在しない、または読み込めない場合。
        """
        if is_inline_css(style.src):
            return style.src

        path = self.resolve(style.src.strip())
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise AssetError(path, f'スタイルシートを読み込めません ({e})') from e
