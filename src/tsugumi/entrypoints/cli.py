# FILE: src/tsugumi/entrypoints/cli.py
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from ..infrastructure.builders.epub.builder import EpubBuilder
from ..infrastructure.repositories.project import FileSystemProjectRepository
from ..services import ApplicationService
from ..shared.exceptions import SettingsError, TsugumiError
from ..shared.settings import Settings
from ..utils.logging import setup_logging

app = typer.Typer(
    help='画像ファイルと tsugumi.yaml から固定レイアウトのEPUBを作成するコマンドラインツールです。',
    rich_markup_mode='markdown',
    no_args_is_help=True,
)


def _initialize_settings(config_file: Path | None, log_level: str) -> Settings:
    """設定オブジェクトを初期化するヘルパー関数。"""
    try:
        return Settings(_config_file=config_file, log_level=log_level)
    except SettingsError as e:
        logger.bind(error=str(e)).error('❌ 設定エラーが発生しました。')
        raise typer.Exit(code=1) from e


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            '-v',
            '--verbose',
            help='詳細なデバッグログを有効にします。',
            show_default=False,
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            '-c',
            '--config',
            help='カスタム設定TOMLファイルへのパス。',
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    log_file: Annotated[
        bool,
        typer.Option(
            '--log-file',
            help='ログをJSON形式でファイルに出力します。',
            show_default=False,
        ),
    ] = False,
) -> None:
    """
    tsugumi: Simple EPUB builder
    """
    log_level = 'DEBUG' if verbose else 'INFO'
    setup_logging(log_level, serialize_to_file=log_file)

    settings = _initialize_settings(config, log_level)
    ctx.obj = ApplicationService(
        settings=settings,
        builder=EpubBuilder(settings=settings),
        repository=FileSystemProjectRepository(settings.project),
    )


@app.command()
def build(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            '-o',
            '--output',
            help='出力先。.epub で終わる場合はファイル、それ以外はディレクトリとして扱います。',
            metavar='PATH',
        ),
    ] = None,
) -> None:
    """カレントディレクトリ(またはその親)の tsugumi.yaml からEPUBをビルドします。"""
    app_service: ApplicationService = ctx.obj
    output_path = app_service.build_project(Path.cwd(), output)
    logger.bind(output_path=str(output_path)).success('✅ すべての処理が完了しました。')


@app.command()
def new(
    ctx: typer.Context,
    files: Annotated[
        list[Path] | None,
        typer.Argument(
            help='ページにする画像ファイル。最初のファイルが表紙になります。',
            show_default=False,
        ),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option('-t', '--title', help='書籍のメインタイトル。'),
    ] = None,
    author: Annotated[
        str | None,
        typer.Option('-a', '--author', help='書籍の著者。'),
    ] = None,
    identifier: Annotated[
        str | None,
        typer.Option(
            '-i', '--identifier', help='書籍の識別子 (省略時は urn:uuid を生成)。', metavar='URN'
        ),
    ] = None,
) -> None:
    """カレントディレクトリに新しい tsugumi.yaml を作成します。"""
    app_service: ApplicationService = ctx.obj
    app_service.new_project(
        Path.cwd(),
        title=title,
        author=author,
        identifier=identifier,
        files=files,
    )


@logger.catch(exclude=TsugumiError)
def run_app() -> None:
    """
    アプリケーション全体を@logger.catchでラップし、
    制御下の例外は個別処理、それ以外をLoguruに記録させるためのラッパー関数。
    """
    try:
        app()
    except TsugumiError as e:
        logger.bind(error=str(e)).error('❌ 処理中にエラーが発生しました。')
        raise SystemExit(1) from e
