# FILE: src/tsugumi/utils/logging.py
from loguru import logger
from rich.logging import RichHandler


def setup_logging(level: str = 'INFO', serialize_to_file: bool = False) -> None:
    """
    LoguruをRichHandlerとJSONファイル出力用に設定します。
    """
    logger.remove()  # デフォルトハンドラの削除

    logger.add(
        RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format='[%X]',
        ),
        level=level.upper(),
        format='{message}',
        backtrace=False,
        diagnose=False,
    )

    if serialize_to_file:
        logger.add(
            'logs/tsugumi_{time}.log',
            level='DEBUG',
            serialize=True,
            enqueue=True,
            rotation='10 MB',
            retention='7 days',
            backtrace=True,
            diagnose=True,
        )

    logger.debug(
        'ロガーが設定されました。レベル: {}, ファイル出力: {}',
        level.upper(),
        serialize_to_file,
    )
