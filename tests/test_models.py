from pathlib import Path

import pytest
from pydantic import ValidationError

from tsugumi.models.book import Book, Chapter, Metadata, Title
from tsugumi.shared.enums import (
    CollectionType,
    Direction,
    Layout,
    Orientation,
    Spread,
    TitleType,
)


def test_book_from_project_document(book_data):
    data = book_data([{'name': '本文', 'page': ['001.png', '002.png']}])
    data['metadata']['title'] = [
        'メイン',
        {'name': 'サブ', 'type': 'subtitle', 'alternateScript': 'Sub', 'fileAs': 'サブ'},
    ]
    data['metadata']['collection'] = [{'name': 'シリーズ', 'type': 'series', 'position': 2}]

    book = Book.model_validate(data)

    assert [t.name for t in book.metadata.titles] == ['メイン', 'サブ']
    assert book.metadata.titles[0].title_type is TitleType.MAIN
    assert book.metadata.titles[1].title_type is TitleType.SUBTITLE
    assert book.metadata.titles[1].alternate_script == 'Sub'
    assert book.metadata.collections[0].collection_type is CollectionType.SERIES
    assert book.metadata.collections[0].position == 2
    assert book.chapters[0].title == '本文'
    assert [p.src for p in book.chapters[0].pages] == [Path('001.png'), Path('002.png')]
    assert book.chapters[0].cover is False


def test_rendition_defaults(book_data):
    book = Book.model_validate(book_data([{'page': ['001.png']}]))

    rendition = book.rendition
    assert rendition.direction is Direction.RTL
    assert rendition.layout is Layout.PRE_PAGINATED
    assert rendition.orientation is Orientation.AUTO
    assert rendition.spread is Spread.AUTO
    assert rendition.styles == []


def test_single_values_are_accepted_as_lists(book_data):
    data = book_data({'page': '001.png'})
    data['metadata']['title'] = 'タイトル'
    data['metadata']['creator'] = '著者'

    book = Book.model_validate(data)

    assert len(book.chapters) == 1
    assert book.metadata.titles[0].name == 'タイトル'
    assert book.metadata.creators[0].name == '著者'
    assert book.metadata.creators[0].role is None


def test_unknown_enum_value_is_rejected(book_data):
    data = book_data([{'page': ['001.png']}], direction='up')

    with pytest.raises(ValidationError, match='Direction'):
        Book.model_validate(data)


def test_unknown_key_is_rejected(book_data):
    data = book_data([{'page': ['001.png'], 'color': 'red'}])

    with pytest.raises(ValidationError):
        Book.model_validate(data)


@pytest.mark.parametrize('field', ['language', 'identifier'])
def test_empty_required_metadata_is_rejected(book_data, field):
    data = book_data([{'page': ['001.png']}])
    data['metadata'][field] = ''

    with pytest.raises(ValidationError):
        Book.model_validate(data)


def test_chapter_requires_pages():
    with pytest.raises(ValidationError):
        Chapter.model_validate({'name': '空', 'page': []})


def test_primary_title_prefers_main_type():
    metadata = Metadata(
        titles=[
            Title(name='サブ', title_type=TitleType.SUBTITLE),
            Title(name='メイン'),
        ],
        language='ja',
        identifier='id',
    )

    assert metadata.primary_title == 'メイン'


def test_primary_title_falls_back_to_first_title():
    metadata = Metadata(
        titles=[Title(name='短縮', title_type=TitleType.SHORT)],
        language='ja',
        identifier='id',
    )

    assert metadata.primary_title == '短縮'
