# FILE: src/tsugumi/utils/filesystem_sanitizer.py

import re
from pathlib import Path
from typing import Any

INVALID_PATH_CHARS_REGEX = r'[\\/:*?"<>|]'


def sanitize_path_part(part: str, max_length: int) -> str:
    """ファイル名として安全でない文字を'_'に置換し、長さを制限します。"""
    sanitized_part = re.sub(INVALID_PATH_CHARS_REGEX, '_', part).strip()

    if len(sanitized_part) <= max_length:
        return sanitized_part

    p = Path(sanitized_part)
    stem = p.stem
    extension = p.suffix  # ".epub" のようにドットを含む

    if extension:
        max_stem_length = max_length - len(extension)
        if len(stem) > max_stem_length:
            stem = stem[:max_stem_length]
        return f'{stem}{extension}'
    return sanitized_part[:max_length]


def generate_sanitized_filename(
    template: str, variables: dict[str, Any], max_length: int
) -> str:
    """
    テンプレートと変数から安全なファイル名を生成します。
    変数を先にサニタイズするため、タイトル内の'/'がパス区切りとして扱われることはありません。
    """
    safe_vars = {
        key: sanitize_path_part(str(value or ''), max_length=max_length)
        for key, value in variables.items()
    }
    return sanitize_path_part(template.format_map(safe_vars), max_length=max_length)
