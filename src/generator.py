"""
通話データ生成モジュール (Call Data Generator Module)

ランダムな通話記録 (CDR) を生成します。
乱数源は呼び出し側から明示的に渡すため、シードを固定すれば結果は再現可能です。
"""

import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import structlog

from .models import DEFAULT_TOWER_CATALOG, CallRecord, TowerCatalog


logger = structlog.get_logger(__name__)

MIN_CALL_DURATION_SECONDS = 5
MAX_CALL_DURATION_SECONDS = 5400

PHONE_NUMBER_PREFIX = "00316"
PHONE_NUMBER_DIGITS = 8

_EPOCH = datetime(1970, 1, 1)


class InvalidRangeError(ValueError):
    """
    生成範囲エラー

    開始境界が終了境界以上の場合に発生します。
    """
    pass


def epoch_seconds(value: datetime) -> int:
    """
    UTC の日時をエポック秒に変換

    タイムゾーン情報のない日時は UTC として扱います。
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return int((value - _EPOCH).total_seconds())


def from_epoch_seconds(seconds: int) -> datetime:
    """エポック秒を UTC の日時（タイムゾーン情報なし）に変換"""
    return _EPOCH + timedelta(seconds=seconds)


def generate_phone_number(rng: random.Random) -> str:
    """
    ランダムなオランダの携帯電話番号を生成

    Args:
        rng: 乱数源

    Returns:
        "00316" に続いて8桁の数字を持つ電話番号文字列
    """
    digits = "".join(str(rng.randrange(10)) for _ in range(PHONE_NUMBER_DIGITS))
    return PHONE_NUMBER_PREFIX + digits


class CallDataGenerator:
    """
    通話記録ジェネレーター

    基地局カタログと乱数源を保持し、指定範囲内の通話記録を生成します。
    """

    def __init__(
        self,
        tower_catalog: TowerCatalog = DEFAULT_TOWER_CATALOG,
        rng: Optional[random.Random] = None
    ):
        self.tower_catalog = tower_catalog
        self.rng = rng if rng is not None else random.Random()

    def generate(self, count: int, start_bound: int, end_bound: int) -> List[CallRecord]:
        """
        通話記録を生成

        開始時刻は [start_bound, end_bound) から一様に選ばれます。
        end_bound 自体は生成されません。通話時間は 5〜5400 秒（両端を含む）です。

        Args:
            count: 生成する件数（0以下の場合は空リスト）
            start_bound: 開始境界（UTC エポック秒）
            end_bound: 終了境界（UTC エポック秒）

        Returns:
            通話記録のリスト（時刻順ではありません）

        Raises:
            InvalidRangeError: start_bound >= end_bound の場合
        """
        if start_bound >= end_bound:
            raise InvalidRangeError(
                f"開始境界は終了境界より前である必要があります: "
                f"start_bound={start_bound}, end_bound={end_bound}"
            )

        records = [self._generate_record(start_bound, end_bound) for _ in range(max(count, 0))]

        logger.debug(
            "call_records_generated",
            record_count=len(records),
            start_bound=start_bound,
            end_bound=end_bound,
        )
        return records

    def _generate_record(self, start_bound: int, end_bound: int) -> CallRecord:
        rng = self.rng

        call_start = from_epoch_seconds(rng.randrange(start_bound, end_bound))
        duration = rng.randint(MIN_CALL_DURATION_SECONDS, MAX_CALL_DURATION_SECONDS)
        call_end = call_start + timedelta(seconds=duration)

        tower = self.tower_catalog[rng.randrange(len(self.tower_catalog))]

        return CallRecord(
            start=call_start,
            end=call_end,
            tower_id=tower.tower_id,
            tower_name=tower.name,
            from_number=generate_phone_number(rng),
            to_number=generate_phone_number(rng),
        )


def generate_call_records(
    count: int,
    start_bound: int,
    end_bound: int,
    tower_catalog: TowerCatalog,
    rng: random.Random
) -> List[CallRecord]:
    """
    通話記録を生成するショートカット関数

    CallDataGenerator(tower_catalog, rng).generate(...) と同等です。
    """
    return CallDataGenerator(tower_catalog, rng).generate(count, start_bound, end_bound)
