# FILE: src/tsugumi/shared/settings.py

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import PROJECT_PATHS
from .enums import Orientation
from .exceptions import SettingsError

# settings_customise_sources はクラスメソッドのため、--config のパスはここ経由で渡す
_config_file_var: ContextVar[Path | None] = ContextVar('config_file', default=None)


# --- TOMLファイル読み込みロジック ---
def load_toml_config(toml_file: Path) -> dict[str, Any]:
    """指定されたTOMLファイルを読み込みます。"""
    if not toml_file.is_file():
        return {}
    try:
        with toml_file.open('rb') as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise SettingsError(
            f"設定ファイル '{toml_file}' の解析に失敗しました: {e}"
        ) from e


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """ユーザー指定のTOML設定ファイルを読み込むためのカスタムソース。"""

    def __init__(self, settings_cls: type[BaseSettings], config_file: Path | None):
        super().__init__(settings_cls)
        self.config_file = config_file
        self._toml_config: dict[str, Any] = (
            load_toml_config(self.config_file) if self.config_file else {}
        )

    def get_field_value(self, field: object, field_name: str) -> tuple[Any, str, bool]:
        """このカスタムソースはフィールドごとの値取得をサポートしないため、__call__に処理を委ねます。"""
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """設定ファイル全体を辞書として一度に返します。"""
        return self._toml_config


class PyProjectTomlSource(PydanticBaseSettingsSource):
    """pyproject.tomlから[tool.tsugumi]セクションを読み込むソース。"""

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        self._config = self._load_pyproject_toml()

    def _load_pyproject_toml(self) -> dict[str, Any]:
        pyproject_path = Path.cwd() / 'pyproject.toml'
        config = load_toml_config(pyproject_path)
        return cast(dict[str, Any], config.get('tool', {}).get('tsugumi', {}))

    def get_field_value(self, field: object, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config


# --- 設定モデル定義 ---


class ProjectSettings(BaseModel):
    """プロジェクトファイルの検出に関する設定。"""

    file_name: str = Field(
        default=PROJECT_PATHS.PROJECT_FILE_NAME,
        description='カレントディレクトリから親方向に探索するプロジェクトファイル名。',
    )


class BuilderSettings(BaseModel):
    """EPUB生成処理に関する設定。"""

    filename_template: str = Field(
        default='{title}.epub',
        description='出力先にディレクトリが指定された場合のファイル名テンプレート。',
    )
    max_filename_length: int = Field(
        default=100,
        description='ファイル名の最大長。長すぎる場合は自動的に切り詰められます。',
    )

    @field_validator('max_filename_length')
    @classmethod
    def validate_max_filename_length(cls, value: int) -> int:
        if value < 10:
            raise ValueError('max_filename_length は10以上を指定してください。')
        return value


class NewProjectSettings(BaseModel):
    """'new' コマンドで生成するプロジェクトの既定値。"""

    default_language: str = Field(
        default='ja',
        description='環境変数LANGから言語を判定できない場合の言語コード。',
    )
    cover_chapter_name: str = Field(
        default='表紙',
        description='表紙の章に付ける名前。',
    )
    orientation: Orientation = Field(
        default=Orientation.PORTRAIT,
        description='生成するプロジェクトの rendition:orientation。',
    )

    @field_validator('orientation', mode='before')
    @classmethod
    def parse_orientation(cls, value: object) -> Orientation:
        return cast(Orientation, Orientation.parse(value))


class Settings(BaseSettings):
    """
    アプリケーションの階層的設定管理クラス。
    以下の優先順位で設定を読み込みます:
    1. Pythonコードからの直接初期化
    2. --config で指定されたカスタムTOMLファイル
    3. 環境変数 (例: TSUGUMI_NEW__DEFAULT_LANGUAGE=en)
    4. .env ファイル
    5. pyproject.toml内の [tool.tsugumi] セクション
    6. モデルで定義されたデフォルト値
    """

    project: ProjectSettings = Field(default_factory=ProjectSettings)
    builder: BuilderSettings = Field(default_factory=BuilderSettings)
    new: NewProjectSettings = Field(default_factory=NewProjectSettings)
    log_level: str = 'INFO'

    def __init__(self, **values: object):
        config_file_path = values.pop('_config_file', None)
        token = _config_file_var.set(
            Path(cast(Path | str, config_file_path)) if config_file_path else None
        )
        try:
            super().__init__(**values)  # type: ignore [arg-type]
        except (ValidationError, ValueError) as e:
            raise SettingsError(f'設定の検証に失敗しました:\n{e}') from e
        finally:
            _config_file_var.reset(token)

    model_config = SettingsConfigDict(
        env_nested_delimiter='__',
        env_prefix='TSUGUMI_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        config_file_path = _config_file_var.get()
        return (
            init_settings,
            TomlConfigSettingsSource(settings_cls, config_file_path),
            env_settings,
            dotenv_settings,
            PyProjectTomlSource(settings_cls),
        )
