"""
設定管理モジュール (Configuration Management Module)

通話データ生成の設定を保持し、検証を行います。
外部設定がない場合は固定のデフォルト値で動作します。
"""

import argparse
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List, Optional


class ConfigurationError(Exception):
    """設定エラー例外クラス"""
    pass


@dataclass
class Config:
    """
    アプリケーション設定

    デフォルト値はコマンドライン引数で上書きできます。環境変数は参照しません。
    """
    # 生成設定
    record_count: int
    start_date: datetime
    end_date: datetime
    seed: Optional[int]

    # 出力設定
    output_path: str

    # ロギング設定
    log_level: str

    # デフォルト値の定数
    DEFAULT_RECORD_COUNT: int = field(default=10_000_000, init=False, repr=False)
    DEFAULT_START_DATE: datetime = field(default=datetime(2025, 12, 1, 0, 0), init=False, repr=False)
    DEFAULT_END_DATE: datetime = field(default=datetime(2026, 1, 8, 23, 59), init=False, repr=False)
    DEFAULT_OUTPUT_PATH: str = field(default="call_data.csv", init=False, repr=False)
    DEFAULT_LOG_LEVEL: str = field(default="INFO", init=False, repr=False)

    @classmethod
    def default(cls) -> 'Config':
        """
        固定のデフォルト設定を作成

        - 件数: 10,000,000
        - 期間: 2025-12-01T00:00 〜 2026-01-08T23:59 (UTC)
        - 出力先: call_data.csv
        """
        config = cls(
            record_count=cls.DEFAULT_RECORD_COUNT,
            start_date=cls.DEFAULT_START_DATE,
            end_date=cls.DEFAULT_END_DATE,
            seed=None,
            output_path=cls.DEFAULT_OUTPUT_PATH,
            log_level=cls.DEFAULT_LOG_LEVEL,
        )
        config.validate()
        return config

    @classmethod
    def from_args(cls, argv: Optional[List[str]] = None) -> 'Config':
        """
        コマンドライン引数から設定を読み込む

        指定されなかった項目はデフォルト値のままです。

        Args:
            argv: 引数リスト (None の場合は空として扱う)

        Returns:
            Config: 設定オブジェクト

        Raises:
            ConfigurationError: 引数が不正な場合
        """
        parser = _build_parser()
        try:
            args = parser.parse_args(argv or [])
        except SystemExit as e:
            # --help は正常終了としてそのまま通す
            if e.code == 0:
                raise
            raise ConfigurationError("コマンドライン引数が不正です") from e

        config = cls.default()
        overrides = {}
        if args.count is not None:
            overrides["record_count"] = args.count
        if args.output is not None:
            overrides["output_path"] = args.output
        if args.seed is not None:
            overrides["seed"] = args.seed
        if args.start is not None:
            overrides["start_date"] = _parse_datetime("--start", args.start)
        if args.end is not None:
            overrides["end_date"] = _parse_datetime("--end", args.end)
        if args.log_level is not None:
            overrides["log_level"] = args.log_level

        config = replace(config, **overrides)
        config.validate()
        return config

    def validate(self) -> None:
        """
        設定の妥当性を検証

        Raises:
            ConfigurationError: 設定が無効な場合
        """
        if self.record_count < 0:
            raise ConfigurationError(
                f"record_count は0以上の整数である必要があります: {self.record_count}"
            )

        if self.start_date >= self.end_date:
            raise ConfigurationError(
                f"start_date は end_date より前である必要があります: "
                f"{self.start_date.isoformat()} >= {self.end_date.isoformat()}"
            )

        if not self.output_path:
            raise ConfigurationError("output_path を指定してください")

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ConfigurationError(
                f"LOG_LEVEL は {valid_log_levels} のいずれかである必要があります: {self.log_level}"
            )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calldata",
        description="基地局の通話記録 (CDR) を生成して CSV に書き出します",
    )
    parser.add_argument("--count", type=int, help="生成件数 (デフォルト: 10000000)")
    parser.add_argument("--output", help="出力ファイルパス (デフォルト: call_data.csv)")
    parser.add_argument("--seed", type=int, help="乱数シード")
    parser.add_argument("--start", help="開始日時 ISO-8601, UTC (デフォルト: 2025-12-01T00:00)")
    parser.add_argument("--end", help="終了日時 ISO-8601, UTC (デフォルト: 2026-01-08T23:59)")
    parser.add_argument("--log-level", dest="log_level", help="ログレベル (デフォルト: INFO)")
    return parser


def _parse_datetime(option: str, value: str) -> datetime:
    """ISO-8601 文字列を UTC の日時（タイムゾーン情報なし）に変換"""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ConfigurationError(f"{option} の日時形式が不正です: {value}") from e

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
