# FILE: src/tsugumi/infrastructure/builders/epub/component_generator.py
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader
from loguru import logger

from ....models.package import ImageInfo, ManifestItem, PackageDocument, TocEntry
from ....shared.constants import PACKAGE, TEMPLATE_NAMES
from ....shared.enums import Orientation
from ....shared.exceptions import BuildError

ASSETS_ROOT = Path(__file__).parents[3] / 'assets' / 'epub'


def create_template_env(template_dir: Path = ASSETS_ROOT) -> Environment:
    """EPUBの各文書をレンダリングするJinja2環境を生成します。"""
    if not template_dir.is_dir():
        raise BuildError(f'テンプレートディレクトリが見つかりません: {template_dir}')
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def check_orientation(image: ImageInfo, orientation: Orientation, src: Path) -> None:
    """画像の縦横がrendition:orientationと一致しない場合に警告します。ビルドは継続されます。"""
    if orientation is Orientation.LANDSCAPE and image.is_portrait:
        logger.bind(width=image.width, height=image.height).warning(
            f"'{src}' は縦長のページです。"
        )
    elif orientation is Orientation.PORTRAIT and image.is_landscape:
        logger.bind(width=image.width, height=image.height).warning(
            f"'{src}' は横長のページです。"
        )


class EpubComponentGenerator:
    """EPUBの構成文書 (ページ、ナビゲーション文書、パッケージ文書) を生成するクラス。"""

    def __init__(self, template_env: Environment, language: str, title: str):
        self.template_env = template_env
        self.language = language
        self.title = title

    def _render_template(self, template_name: str, context: dict[str, Any]) -> bytes:
        template = self.template_env.get_template(template_name)
        rendered_str = template.render(context)
        return rendered_str.encode('utf-8')

    def render_content_page(
        self,
        image: ImageInfo,
        image_href: str,
        styles: list[ManifestItem],
        cover: bool,
    ) -> bytes:
        """
        1枚の画像をSVGで全面表示するXHTMLページを生成します。

        Args:
            image (ImageInfo): ページに表示する画像とその寸法。
            image_href (str): 画像アイテムのhref (item/ からの相対パス)。
            styles (list[ManifestItem]): ページから参照するスタイル (記述順)。
            cover (bool): 表紙ページかどうか。真の場合 body に epub:type="cover" を付与します。
        """
        context = {
            'language': self.language,
            'title': self.title,
            'styles': styles,
            'width': image.width,
            'height': image.height,
            'image_href': image_href,
            'cover': cover,
        }
        return self._render_template(TEMPLATE_NAMES.CONTENT_PAGE, context)

    def render_navigation(self, toc: list[TocEntry]) -> bytes:
        """navigation-documents.xhtml (目次) の内容を生成します。"""
        context = {
            'language': self.language,
            'heading': PACKAGE.NAVIGATION_TITLE,
            'toc': toc,
        }
        return self._render_template(TEMPLATE_NAMES.NAVIGATION, context)

    def render_package_document(self, package: PackageDocument) -> bytes:
        """standard.opf の内容を生成します。"""
        return self._render_template(
            TEMPLATE_NAMES.PACKAGE_DOCUMENT, {'package': package}
        )
