# FILE: src/tsugumi/models/book.py
"""
プロジェクトファイル (tsugumi.yaml) が表す書籍のデータモデルを定義します。
ビルド中は読み取り専用として扱われ、変更されることはありません。
"""

from pathlib import Path
from typing import Any, cast

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from ..shared.enums import (
    CanonicalStrEnum,
    CollectionType,
    Direction,
    Layout,
    Orientation,
    Spread,
    TitleType,
)


def _ensure_list(value: Any) -> Any:
    """単一の値を1要素のリストとして受け付けます。"""
    if value is None or isinstance(value, list):
        return value
    return [value]


def _name_only(value: Any) -> Any:
    """文字列のみが指定された場合は {'name': 値} として解釈します。"""
    if isinstance(value, str):
        return {'name': value}
    return value


class BookBaseModel(BaseModel):
    # YAMLのキー名 (エイリアス) とフィールド名の両方で値を受け付ける
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='forbid')


class Title(BookBaseModel):
    """dc:title に対応するタイトル情報"""

    name: str = Field(min_length=1)
    title_type: TitleType = Field(default=TitleType.MAIN, alias='type')
    alternate_script: str | None = Field(default=None, alias='alternateScript')
    file_as: str | None = Field(default=None, alias='fileAs')

    @model_validator(mode='before')
    @classmethod
    def from_string(cls, value: Any) -> Any:
        return _name_only(value)

    @field_validator('title_type', mode='before')
    @classmethod
    def parse_title_type(cls, value: object) -> TitleType:
        return cast(TitleType, TitleType.parse(value))


class Creator(BookBaseModel):
    """dc:creator に対応する著者・寄稿者情報。roleはMARC relatorコード (例: 'aut')。"""

    name: str = Field(min_length=1)
    role: str | None = None
    alternate_script: str | None = Field(default=None, alias='alternateScript')
    file_as: str | None = Field(default=None, alias='fileAs')

    @model_validator(mode='before')
    @classmethod
    def from_string(cls, value: Any) -> Any:
        return _name_only(value)


class Collection(BookBaseModel):
    """シリーズなどの所属コレクション"""

    name: str = Field(min_length=1)
    collection_type: CollectionType = Field(alias='type')
    position: int | None = Field(default=None, ge=0)

    @field_validator('collection_type', mode='before')
    @classmethod
    def parse_collection_type(cls, value: object) -> CollectionType:
        return cast(CollectionType, CollectionType.parse(value))


class Metadata(BookBaseModel):
    titles: list[Title] = Field(alias='title', min_length=1)
    creators: list[Creator] = Field(default_factory=list, alias='creator')
    contributors: list[Creator] = Field(default_factory=list, alias='contributor')
    collections: list[Collection] = Field(default_factory=list, alias='collection')
    language: str = Field(min_length=1)
    identifier: str = Field(min_length=1)

    @field_validator('titles', 'creators', 'contributors', 'collections', mode='before')
    @classmethod
    def accept_single_value(cls, value: Any) -> Any:
        return _ensure_list(value)

    @property
    def primary_title(self) -> str:
        """種別が main の最初のタイトル。存在しない場合は最初のタイトルを返します。"""
        for title in self.titles:
            if title.title_type is TitleType.MAIN:
                return title.name
        return self.titles[0].name if self.titles else ''


class Style(BookBaseModel):
    """
    パッケージに含めるスタイルシート。
    link が偽のスタイル (@import の読み込み先など) もパッケージには含まれる。
    """

    link: bool = False
    href: str = Field(min_length=1)
    src: str = Field(min_length=1)


_RENDITION_ENUMS: dict[str, type[CanonicalStrEnum]] = {
    'direction': Direction,
    'layout': Layout,
    'orientation': Orientation,
    'spread': Spread,
}


class Rendition(BookBaseModel):
    direction: Direction = Direction.RTL
    layout: Layout = Layout.PRE_PAGINATED
    orientation: Orientation = Orientation.AUTO
    spread: Spread = Spread.AUTO
    styles: list[Style] = Field(default_factory=list, alias='style')

    @field_validator('direction', 'layout', 'orientation', 'spread', mode='before')
    @classmethod
    def parse_enum(cls, value: object, info: ValidationInfo) -> object:
        return _RENDITION_ENUMS[info.field_name].parse(value)

    @field_validator('styles', mode='before')
    @classmethod
    def accept_single_value(cls, value: Any) -> Any:
        return _ensure_list(value)


class Page(BookBaseModel):
    src: Path

    @model_validator(mode='before')
    @classmethod
    def from_string(cls, value: Any) -> Any:
        if isinstance(value, (str, Path)):
            return {'src': value}
        return value

    @field_validator('src')
    @classmethod
    def validate_not_empty(cls, value: Path) -> Path:
        if value == Path():
            raise ValueError('ページのパスが空です。')
        return value


class Chapter(BookBaseModel):
    """章。名前を持つ章の先頭ページのみが目次に掲載される。"""

    title: str | None = Field(default=None, alias='name')
    pages: list[Page] = Field(alias='page', min_length=1)
    cover: bool = False

    @field_validator('pages', mode='before')
    @classmethod
    def accept_single_value(cls, value: Any) -> Any:
        return _ensure_list(value)


class Book(BookBaseModel):
    """
    tsugumi.yaml のルート。
    """

    metadata: Metadata
    rendition: Rendition = Field(default_factory=Rendition)
    chapters: list[Chapter] = Field(alias='chapter', min_length=1)

    @field_validator('chapters', mode='before')
    @classmethod
    def accept_single_value(cls, value: Any) -> Any:
        return _ensure_list(value)
