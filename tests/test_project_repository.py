import pytest
import yaml

from tsugumi.infrastructure.repositories.project import (
    FileSystemProjectRepository,
    load_book,
)
from tsugumi.shared.exceptions import ProjectError
from tsugumi.shared.settings import ProjectSettings

PROJECT_YAML = """\
metadata:
  title:
    - name: 星の記録
      fileAs: ほしのきろく
  creator: 著者
  language: ja
  identifier: urn:uuid:00000000-0000-0000-0000-000000000000
rendition:
  orientation: portrait
  style:
    - link: true
      href: main.css
      src: css/main.css
chapter:
  - name: 表紙
    page: [cover.png]
    cover: true
  - name: 本文
    page:
      - 001.png
      - src: 002.png
"""


@pytest.fixture
def repository() -> FileSystemProjectRepository:
    return FileSystemProjectRepository(ProjectSettings())


def test_find_project_walks_up(tmp_path, repository):
    project = tmp_path / 'tsugumi.yaml'
    project.write_text(PROJECT_YAML, encoding='utf-8')
    nested = tmp_path / 'a' / 'b'
    nested.mkdir(parents=True)

    assert repository.find_project(nested) == project.resolve()


def test_find_project_prefers_nearest(tmp_path, repository):
    (tmp_path / 'tsugumi.yaml').write_text(PROJECT_YAML, encoding='utf-8')
    inner = tmp_path / 'inner'
    inner.mkdir()
    (inner / 'tsugumi.yaml').write_text(PROJECT_YAML, encoding='utf-8')

    assert repository.find_project(inner) == (inner / 'tsugumi.yaml').resolve()


def test_find_project_uses_configured_name(tmp_path):
    (tmp_path / 'book.yaml').write_text(PROJECT_YAML, encoding='utf-8')
    repository = FileSystemProjectRepository(ProjectSettings(file_name='book.yaml'))

    assert repository.find_project(tmp_path).name == 'book.yaml'


def test_load_project(tmp_path, repository):
    project = tmp_path / 'tsugumi.yaml'
    project.write_text(PROJECT_YAML, encoding='utf-8')

    book = repository.load(project)

    assert book.metadata.primary_title == '星の記録'
    assert book.metadata.titles[0].file_as == 'ほしのきろく'
    assert book.metadata.creators[0].name == '著者'
    assert book.rendition.styles[0].link is True
    assert [c.title for c in book.chapters] == ['表紙', '本文']
    assert book.chapters[0].cover is True
    assert [p.src.name for p in book.chapters[1].pages] == ['001.png', '002.png']


@pytest.mark.parametrize(
    'content',
    [
        'metadata: [unclosed',
        '- just\n- a list\n',
        'metadata:\n  title: x\n  language: ja\n  identifier: id\n',
        PROJECT_YAML.replace('orientation: portrait', 'orientation: diagonal'),
    ],
)
def test_invalid_project_raises_project_error(tmp_path, content):
    project = tmp_path / 'tsugumi.yaml'
    project.write_text(content, encoding='utf-8')

    with pytest.raises(ProjectError):
        load_book(project)


def test_missing_file_raises_project_error(tmp_path):
    with pytest.raises(ProjectError):
        load_book(tmp_path / 'tsugumi.yaml')


def test_save_document_does_not_overwrite(tmp_path, repository):
    document = {'metadata': {'title': ['題名'], 'language': 'ja'}}

    path = repository.save_document(tmp_path, document)

    assert path == tmp_path / 'tsugumi.yaml'
    text = path.read_text(encoding='utf-8')
    assert '題名' in text
    assert yaml.safe_load(text) == document

    with pytest.raises(ProjectError):
        repository.save_document(tmp_path, {'metadata': {}})
    assert yaml.safe_load(path.read_text(encoding='utf-8')) == document
