"""
データモデルモジュール (Data Models Module)

通話記録 (CDR) と基地局カタログのデータモデルを定義します。
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator, Optional, Tuple


@dataclass(frozen=True)
class CellTower:
    """
    基地局データモデル

    Attributes:
        tower_id: 基地局ID (例: CT-1001)
        name: 基地局名
    """
    tower_id: str
    name: str


class TowerCatalog:
    """
    基地局カタログ

    (ID, 名前) の組を保持する不変のルックアップテーブルです。
    ジェネレーターにはこのカタログを明示的に渡します。
    """

    def __init__(self, towers: Iterable[CellTower]):
        self._towers: Tuple[CellTower, ...] = tuple(towers)
        if not self._towers:
            raise ValueError("TowerCatalog には少なくとも1つの基地局が必要です")

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> 'TowerCatalog':
        """(ID, 名前) のタプル列からカタログを作成"""
        return cls(CellTower(tower_id, name) for tower_id, name in pairs)

    def __len__(self) -> int:
        return len(self._towers)

    def __getitem__(self, index: int) -> CellTower:
        return self._towers[index]

    def __iter__(self) -> Iterator[CellTower]:
        return iter(self._towers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TowerCatalog):
            return NotImplemented
        return self._towers == other._towers

    def __hash__(self) -> int:
        return hash(self._towers)

    def __repr__(self) -> str:
        return f"TowerCatalog({list(self._towers)!r})"


DEFAULT_TOWER_CATALOG = TowerCatalog.from_pairs([
    ("CT-1001", "Utrecht CO Tower"),
    ("CT-1002", "Maastricht Maas Tower"),
    ("CT-1003", "Amsterdam Amstel Tower"),
    ("CT-1004", "Leiden Tower"),
    ("CT-1005", "Rotterdam Coolsingel Tower"),
    ("CT-1006", "Groningen Martini Tower"),
])


@dataclass(frozen=True)
class CallRecord:
    """
    通話記録データモデル

    基地局で発生した1件の通話のメタデータを格納します。

    Attributes:
        start: 通話開始日時 (UTC、タイムゾーン情報なし)
        end: 通話終了日時 (start + 通話時間)
        tower_id: 基地局ID
        tower_name: 基地局名
        from_number: 発信者電話番号
        to_number: 着信電話番号
    """
    start: datetime
    end: datetime
    tower_id: Optional[str]
    tower_name: Optional[str]
    from_number: Optional[str]
    to_number: Optional[str]

    @property
    def duration_seconds(self) -> int:
        """通話時間（秒）"""
        return int((self.end - self.start).total_seconds())
