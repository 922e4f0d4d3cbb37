"""
tsugumi: 画像とYAMLの記述から、電書協 (ebpaj) ガイドに準拠した固定レイアウトEPUBを作成します。
"""

from .infrastructure.builders.epub.asset_resolver import AssetResolver
from .infrastructure.builders.epub.builder import EpubBuilder
from .infrastructure.repositories.project import load_book
from .models.book import Book

__version__ = '0.3.0'

__all__ = ['AssetResolver', 'Book', 'EpubBuilder', 'load_book', '__version__']
