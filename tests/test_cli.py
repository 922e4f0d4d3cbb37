import zipfile

import pytest
from typer.testing import CliRunner

from tsugumi.entrypoints.cli import app

runner = CliRunner()


@pytest.fixture
def workspace(monkeypatch, tmp_path, make_image):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('LANG', 'ja_JP.UTF-8')
    for name in ('cover.png', '001.png', '002.png'):
        make_image(name)
    return tmp_path


def test_new_then_build(workspace):
    result = runner.invoke(
        app,
        ['new', '-t', '短編集', '-a', '著者', '-i', 'urn:test', 'cover.png', '001.png', '002.png'],
    )
    assert result.exit_code == 0, result.output
    assert (workspace / 'tsugumi.yaml').is_file()

    result = runner.invoke(app, ['build', '-o', 'dist'])
    assert result.exit_code == 0, result.output

    output = workspace / 'dist' / '短編集.epub'
    with zipfile.ZipFile(output) as zf:
        names = zf.namelist()
        opf = zf.read('item/standard.opf').decode('utf-8')

    assert names[0] == 'mimetype'
    assert 'item/image/cover.png' in names
    assert 'item/xhtml/p-0002.xhtml' in names
    assert 'urn:test' in opf
    assert '<dc:language>ja</dc:language>' in opf


def test_build_to_explicit_file(workspace):
    runner.invoke(app, ['new', '-t', '本', 'cover.png', '001.png'])

    result = runner.invoke(app, ['build', '--output', 'out/book.epub'])

    assert result.exit_code == 0, result.output
    assert (workspace / 'out' / 'book.epub').is_file()


def test_new_refuses_to_overwrite(workspace):
    assert runner.invoke(app, ['new', 'cover.png', '001.png']).exit_code == 0

    result = runner.invoke(app, ['new', 'cover.png', '001.png'])

    assert result.exit_code != 0


def test_build_without_project_fails(workspace):
    result = runner.invoke(app, ['build'])

    assert result.exit_code != 0
