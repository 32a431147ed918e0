#!/usr/bin/env python3
"""
通話データ生成アプリケーションエントリーポイント

基地局の通話記録 (CDR) をランダムに生成し、CSV ファイルに書き出します。
引数なしで実行すると固定のデフォルト設定を使用します。

Usage:
    python main.py [--count N] [--output PATH] [--seed N]
                   [--start ISO] [--end ISO] [--log-level LEVEL]

Defaults:
    - 件数: 10,000,000
    - 期間: 2025-12-01T00:00 〜 2026-01-08T23:59 (UTC)
    - 出力先: call_data.csv
"""

import sys
from typing import List, Optional

from src.app import configure_structlog, get_logger, run
from src.config import Config, ConfigurationError
from src.generator import InvalidRangeError


def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメインエントリーポイント

    Returns:
        int: 終了コード (0: 正常終了, 1: 設定エラーまたは書き込み失敗)
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = Config.from_args(argv)
    except ConfigurationError as e:
        print(f"[エラー] 設定エラーが発生しました: {e}", file=sys.stderr)
        return 1

    configure_structlog(config.log_level)
    logger = get_logger(__name__)

    try:
        if not run(config):
            return 1
    except InvalidRangeError as e:
        logger.error("invalid_range", error=str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("call_data_generation_interrupted")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
