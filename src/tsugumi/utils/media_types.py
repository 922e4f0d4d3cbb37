# src/tsugumi/utils/media_types.py
"""
ファイル拡張子とMIMEタイプに関連する共有ユーティリティ。
"""

from pathlib import Path
from typing import cast

from ..shared.constants import MIME_TYPES

_EXT_TO_ATTR_MAP = {
    'jpg': 'JPEG',
    'jpeg': 'JPEG',
    'png': 'PNG',
    'gif': 'GIF',
    'svg': 'SVG',
    'webp': 'WEBP',
    'xhtml': 'XHTML',
    'css': 'CSS',
}

# Pillow が判定した画像フォーマット名 (Image.format) との対応
_IMAGE_FORMAT_TO_ATTR_MAP = {
    'JPEG': 'JPEG',
    'MPO': 'JPEG',
    'PNG': 'PNG',
    'GIF': 'GIF',
    'WEBP': 'WEBP',
}


def get_media_type_from_filename(filename: str | Path) -> str:
    """ファイル名の拡張子からMIMEタイプを返します。"""
    suffix = Path(filename).suffix
    attr_name = _EXT_TO_ATTR_MAP.get(suffix.lower().lstrip('.'))

    if attr_name:
        return cast(str, getattr(MIME_TYPES, attr_name))

    # 不明な拡張子はデフォルト値を返す
    return MIME_TYPES.OCTET_STREAM


def get_media_type_from_image_format(image_format: str | None) -> str | None:
    """Pillowが判定した画像フォーマット名からMIMEタイプを返します。不明な場合はNone。"""
    if not image_format:
        return None
    attr_name = _IMAGE_FORMAT_TO_ATTR_MAP.get(image_format.upper())
    return cast(str, getattr(MIME_TYPES, attr_name)) if attr_name else None
