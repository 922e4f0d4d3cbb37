# src/tsugumi/utils/ordered_registry.py
from collections.abc import Iterator
from typing import Generic, TypeVar

from ..shared.exceptions import ManifestConsistencyError

K = TypeVar('K')
V = TypeVar('V')


class OrderedRegistry(Generic[K, V]):
    """
    挿入順を保持する追記専用のマッピング。
    既存キーの上書きと未登録キーの参照はどちらも ManifestConsistencyError となる。
    """

    def __init__(self, name: str):
        self.name = name
        self._entries: dict[K, V] = {}

    def add(self, key: K, value: V) -> None:
        if key in self._entries:
            raise ManifestConsistencyError(
                f"{self.name} に '{key}' が重複して登録されました。"
            )
        self._entries[key] = value

    def get(self, key: K) -> V:
        try:
            return self._entries[key]
        except KeyError:
            raise ManifestConsistencyError(
                f"{self.name} に '{key}' は登録されていません。"
            ) from None

    def items(self) -> Iterator[tuple[K, V]]:
        return iter(self._entries.items())

    def values(self) -> Iterator[V]:
        return iter(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
