# src/tsugumi/shared/constants.py
from dataclasses import dataclass
from typing import Final


# --- 1. Project Structure ---
@dataclass(frozen=True)
class ProjectPaths:
    """
    プロジェクトのファイル構造を定義する。
    repositories/project.py がこれを参照する。
    """

    PROJECT_FILE_NAME: str = 'tsugumi.yaml'
    EPUB_SUFFIX: str = '.epub'


PROJECT_PATHS: Final = ProjectPaths()


# --- 2. Mime Types ---
@dataclass(frozen=True)
class MimeTypes:
    """
    MIMEタイプの中央定義
    """

    JPEG: str = 'image/jpeg'
    PNG: str = 'image/png'
    GIF: str = 'image/gif'
    SVG: str = 'image/svg+xml'
    WEBP: str = 'image/webp'
    XHTML: str = 'application/xhtml+xml'
    CSS: str = 'text/css'
    EPUB: str = 'application/epub+zip'
    OCTET_STREAM: str = 'application/octet-stream'


MIME_TYPES: Final = MimeTypes()


# --- 3. EPUB Container Layout ---
@dataclass(frozen=True)
class EpubPaths:
    """
    EPUBコンテナ内のパス。
    アイテムのhrefはすべて ITEM_DIR からの相対パスとなる。
    """

    MIMETYPE_FILE_NAME: str = 'mimetype'
    CONTAINER_XML_PATH: str = 'META-INF/container.xml'
    ITEM_DIR: str = 'item'
    PACKAGE_DOCUMENT_PATH: str = 'item/standard.opf'
    NAV_HREF: str = 'navigation-documents.xhtml'
    NAV_PATH: str = 'item/navigation-documents.xhtml'

    STYLE_DIR: str = 'style'
    IMAGE_DIR: str = 'image'
    XHTML_DIR: str = 'xhtml'


EPUB_PATHS: Final = EpubPaths()


# --- 4. Manifest IDs and Properties ---
@dataclass(frozen=True)
class ManifestIds:
    NAV_ID: str = 'toc'
    COVER_IMAGE_ID: str = 'cover'
    COVER_PAGE_ID: str = 'p-cover'
    DEFAULT_STYLE_ID: str = 's-default'
    DEFAULT_STYLE_NAME: str = 'default.css'

    STYLE_PREFIX: str = 's'
    IMAGE_PREFIX: str = 'i'
    PAGE_PREFIX: str = 'p'

    NAV_PROPERTY: str = 'nav'
    SVG_PROPERTY: str = 'svg'
    COVER_IMAGE_PROPERTY: str = 'cover-image'


MANIFEST_IDS: Final = ManifestIds()


# --- 5. Package Document ---
@dataclass(frozen=True)
class PackageConstants:
    """OPFパッケージ文書とebpajガイドに関する固定値。"""

    UNIQUE_IDENTIFIER_ID: str = 'unique-id'
    EBPAJ_PREFIX: str = 'ebpaj: http://www.ebpaj.jp/'
    EBPAJ_GUIDE_VERSION: str = '1.1.3'
    MARC_RELATORS_SCHEME: str = 'marc:relators'
    NAVIGATION_TITLE: str = 'Navigation'


PACKAGE: Final = PackageConstants()


# --- 6. Templates ---
@dataclass(frozen=True)
class TemplateNames:
    """
    ビルダーが参照するテンプレート・リソースファイル名の定義。
    component_generator.py と package_assembler.py がこれを参照する。
    """

    CONTENT_PAGE: str = 'content_page.xhtml.j2'
    NAVIGATION: str = 'navigation_documents.xhtml.j2'
    PACKAGE_DOCUMENT: str = 'standard.opf.j2'
    CONTAINER_XML: str = 'container.xml'
    DEFAULT_STYLE: str = 'default-style.css'


TEMPLATE_NAMES: Final = TemplateNames()
