# src/tsugumi/shared/enums.py
from enum import Enum


class UnknownVariantError(ValueError):
    """列挙型に存在しない文字列が指定された場合のエラー。"""

    def __init__(self, enum_name: str, value: object, expected: list[str]):
        self.enum_name = enum_name
        self.value = value
        self.expected = expected
        super().__init__(
            f"{enum_name} に '{value}' は指定できません。"
            f" 指定可能な値: {', '.join(expected)}"
        )


class CanonicalStrEnum(str, Enum):
    """
    正規の文字列表現と相互変換できる列挙型の基底クラス。
    値そのものがOPFやYAMLに書き出される文字列となる。
    """

    @classmethod
    def parse(cls, value: object) -> 'CanonicalStrEnum':
        """正規の文字列から列挙子を返します。未知の値はUnknownVariantErrorを送出します。"""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise UnknownVariantError(cls.__name__, value, cls.values())

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    def __str__(self) -> str:
        return str(self.value)


class TitleType(CanonicalStrEnum):
    """dc:title の種別 (title-type)。"""

    MAIN = 'main'
    SUBTITLE = 'subtitle'
    SHORT = 'short'
    COLLECTION = 'collection'
    EDITION = 'edition'
    EXPANDED = 'expanded'


class CollectionType(CanonicalStrEnum):
    """belongs-to-collection の種別 (collection-type)。"""

    SERIES = 'series'
    SET = 'set'


class Direction(CanonicalStrEnum):
    """ページ送りの方向。spine の page-progression-direction に出力する。"""

    RTL = 'rtl'
    LTR = 'ltr'


class Layout(CanonicalStrEnum):
    PRE_PAGINATED = 'pre-paginated'
    REFLOWABLE = 'reflowable'


class Orientation(CanonicalStrEnum):
    AUTO = 'auto'
    LANDSCAPE = 'landscape'
    PORTRAIT = 'portrait'


class Spread(CanonicalStrEnum):
    """rendition:spread の値。"""

    AUTO = 'auto'
    NONE = 'none'
    LANDSCAPE = 'landscape'
    BOTH = 'both'


class PageSpread(CanonicalStrEnum):
    """spine の itemref に付与する見開き位置のプロパティ。"""

    LEFT = 'rendition:page-spread-left'
    RIGHT = 'rendition:page-spread-right'
    CENTER = 'rendition:page-spread-center'

    @classmethod
    def for_index(cls, index: int) -> 'PageSpread':
        """章内のゼロ始まりのページ番号から見開き位置を決定します (偶数は左、奇数は右)。"""
        return cls.LEFT if index % 2 == 0 else cls.RIGHT
