"""
アプリケーションモジュール (Application Module)

構造化ロギングを設定し、通話記録の生成から CSV 書き込みまでを実行します。
"""

import logging
import random
import sys
from typing import Optional

import structlog

from .config import Config
from .generator import CallDataGenerator, epoch_seconds
from .models import DEFAULT_TOWER_CATALOG, TowerCatalog
from .writer import write_call_data_csv


def configure_structlog(log_level: str = "INFO") -> None:
    """
    structlog を設定

    JSON フォーマットの構造化ロギングを設定します。
    すべてのログ出力は timestamp, level, event フィールドを含みます。

    Args:
        log_level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # 標準ライブラリの logging を設定
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    構造化ロガーを取得

    Args:
        name: ロガー名

    Returns:
        構造化ロガーインスタンス
    """
    return structlog.get_logger(name)


def run(
    config: Config,
    rng: Optional[random.Random] = None,
    tower_catalog: TowerCatalog = DEFAULT_TOWER_CATALOG
) -> bool:
    """
    通話記録を生成して CSV ファイルに書き込む

    全件をメモリ上に生成してから一括で書き込みます。

    Args:
        config: アプリケーション設定
        rng: 乱数源 (None の場合は config.seed から作成)
        tower_catalog: 基地局カタログ

    Returns:
        書き込みに成功した場合は True

    Raises:
        InvalidRangeError: 期間の開始が終了以降の場合
    """
    logger = get_logger(__name__)

    if rng is None:
        rng = random.Random(config.seed)

    start_bound = epoch_seconds(config.start_date)
    end_bound = epoch_seconds(config.end_date)

    logger.info(
        "call_data_generation_started",
        record_count=config.record_count,
        start_date=config.start_date.isoformat(),
        end_date=config.end_date.isoformat(),
        tower_count=len(tower_catalog),
    )

    generator = CallDataGenerator(tower_catalog, rng)
    records = generator.generate(config.record_count, start_bound, end_bound)

    return write_call_data_csv(config.output_path, records)
