# FILE: src/tsugumi/models/package.py
"""
EPUBパッケージの組み立て中に使用される内部データモデル。
ビルドごとに生成され、アーカイブの書き込み後に破棄されます。
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..shared.enums import Direction


class ManifestItem(BaseModel, frozen=True):
    """OPFマニフェストの1項目と、その中身を読み出すファイル。"""

    id: str
    media_type: str
    href: str  # item/ からの相対パス
    properties: str | None = None
    source: Path | None = None  # ナビゲーション文書のみ None
    staged: bool = False  # ビルドの一時領域に生成したファイルかどうか


class SpineEntry(BaseModel, frozen=True):
    """spine の itemref。"""

    idref: str
    linear: bool = True
    properties: str | None = None


class ImageInfo(BaseModel, frozen=True):
    """デコード済み画像のパスと寸法。"""

    path: Path
    width: int
    height: int
    media_type: str

    @property
    def is_portrait(self) -> bool:
        return self.width < self.height

    @property
    def is_landscape(self) -> bool:
        return self.height < self.width


class MetadataElement(BaseModel, frozen=True):
    """OPFのmetadata要素の子要素 (dc:title, meta など)。属性は記述順に出力されます。"""

    name: str
    value: str
    attributes: dict[str, str] = Field(default_factory=dict)


class PackageDocument(BaseModel):
    """standard.opf のレンダリングに必要な全ての情報をまとめます。"""

    model_config = ConfigDict(frozen=True)

    language: str
    unique_identifier: str
    prefix: str
    metadata: list[MetadataElement]
    manifest: list[ManifestItem]
    spine: list[SpineEntry]
    direction: Direction


class TocEntry(BaseModel, frozen=True):
    """ナビゲーション文書の目次項目。"""

    href: str
    caption: str


class EpubComponents(BaseModel):
    """EPUBファイルを生成するために必要な全ての構成要素をまとめます。"""

    model_config = ConfigDict(frozen=True)

    package_document: bytes
    navigation_document: bytes
    items: list[ManifestItem]
