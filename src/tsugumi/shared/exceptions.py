# FILE: src/tsugumi/shared/exceptions.py


class TsugumiError(Exception):
    """アプリケーションの基底例外クラス。"""

    pass


class SettingsError(TsugumiError):
    """設定関連のエラー。"""

    pass


class ProjectError(TsugumiError):
    """プロジェクトファイルの検出・読み込み・書き込みに関するエラー。"""

    pass


class BuildError(TsugumiError):
    """ビルド処理中のエラーの基底クラス。"""

    pass


class InvalidBookError(BuildError):
    """ビルドに必要な書誌情報が欠けている、または不正なエラー。"""

    def __init__(self, field: str, message: str):
        super().__init__(f"'{field}': {message}")
        self.field = field


class AssetError(BuildError):
    """画像やスタイルシートなどのアセットが読み込めないエラー。"""

    def __init__(self, path: object, message: str):
        super().__init__(f'{message}: {path}')
        self.path = path


class ManifestConsistencyError(BuildError):
    """
    マニフェストの内部整合性エラー (IDの重複、未登録IDの参照など)。
    ID割り当ての不具合を示すため、利用者側で回復することはできない。
    """

    pass


class ArchiveError(BuildError):
    """EPUBアーカイブへの書き込み中に発生したエラー。"""

    def __init__(self, entry: str, message: str):
        super().__init__(f"'{entry}' の書き込みに失敗しました: {message}")
        self.entry = entry


class TemplateRenderError(BuildError):
    """テンプレートのレンダリング中に発生したエラー。"""

    pass
