# FILE: src/tsugumi/infrastructure/builders/epub/package_metadata.py
"""
OPFのmetadata要素を組み立てます。

タイトル・著者・コレクションはそれぞれ titleN / creatorN / collectionN のIDを持ち、
refines="#ID" の meta 要素で種別や表示順 (display-seq) などを補足します。
"""

from datetime import datetime, timezone
from itertools import chain

from ....models.book import Creator, Metadata, Rendition, Title
from ....models.book import Collection as BookCollection
from ....models.package import MetadataElement
from ....shared.constants import PACKAGE


def format_modified(modified: datetime) -> str:
    """dcterms:modified 用に、UTCの秒精度で末尾が 'Z' の日時文字列を返します。"""
    if modified.tzinfo is None:
        modified = modified.replace(tzinfo=timezone.utc)
    return modified.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


class PackageMetadataBuilder:
    """書籍モデルからOPFのmetadata子要素を記述順に生成するクラス。"""

    def __init__(self, metadata: Metadata, rendition: Rendition):
        self.metadata = metadata
        self.rendition = rendition
        self._elements: list[MetadataElement] = []

    def build(self, modified: datetime) -> list[MetadataElement]:
        self._elements = []

        for seq, title in enumerate(self.metadata.titles, 1):
            self._add_title(title, seq)

        # 著者と寄稿者は同じ creatorN の連番を共有する
        creators = chain(self.metadata.creators, self.metadata.contributors)
        for seq, creator in enumerate(creators, 1):
            self._add_creator(creator, seq)

        for seq, collection in enumerate(self.metadata.collections, 1):
            self._add_collection(collection, seq)

        self._element('dc:language', self.metadata.language)
        self._element(
            'dc:identifier',
            self.metadata.identifier,
            id=PACKAGE.UNIQUE_IDENTIFIER_ID,
        )
        self._property('dcterms:modified', format_modified(modified))
        self._property('rendition:layout', self.rendition.layout.value)
        self._property('rendition:orientation', self.rendition.orientation.value)
        self._property('rendition:spread', self.rendition.spread.value)
        self._property('ebpaj:guide-version', PACKAGE.EBPAJ_GUIDE_VERSION)

        return list(self._elements)

    def _add_title(self, title: Title, seq: int) -> None:
        element_id = f'title{seq}'
        self._element('dc:title', title.name, id=element_id)
        self._refine(element_id, 'title-type', title.title_type.value)
        if title.alternate_script is not None:
            self._refine(element_id, 'alternate-script', title.alternate_script)
        if title.file_as is not None:
            self._refine(element_id, 'file-as', title.file_as)
        self._refine(element_id, 'display-seq', str(seq))

    def _add_creator(self, creator: Creator, seq: int) -> None:
        element_id = f'creator{seq}'
        self._element('dc:creator', creator.name, id=element_id)
        if creator.role is not None:
            self._refine(
                element_id,
                'role',
                creator.role,
                scheme=PACKAGE.MARC_RELATORS_SCHEME,
            )
        if creator.alternate_script is not None:
            self._refine(element_id, 'alternate-script', creator.alternate_script)
        if creator.file_as is not None:
            self._refine(element_id, 'file-as', creator.file_as)
        self._refine(element_id, 'display-seq', str(seq))

    def _add_collection(self, collection: BookCollection, seq: int) -> None:
        element_id = f'collection{seq}'
        self._element(
            'meta',
            collection.name,
            property='belongs-to-collection',
            id=element_id,
        )
        self._refine(element_id, 'collection-type', collection.collection_type.value)
        if collection.position is not None:
            self._refine(element_id, 'group-position', str(collection.position))

    def _element(self, name: str, value: str, **attributes: str) -> None:
        self._elements.append(
            MetadataElement(name=name, value=value, attributes=attributes)
        )

    def _property(self, property_name: str, value: str) -> None:
        self._element('meta', value, property=property_name)

    def _refine(
        self, element_id: str, property_name: str, value: str, scheme: str | None = None
    ) -> None:
        attributes = {'refines': f'#{element_id}', 'property': property_name}
        if scheme is not None:
            attributes['scheme'] = scheme
        self._element('meta', value, **attributes)
