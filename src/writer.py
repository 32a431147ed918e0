"""
CSV 書き込みモジュール (CSV Writer Module)

通話記録をヘッダー付きのカンマ区切りテキストに変換し、ファイルへ書き込みます。
"""

import re
from typing import Iterable, Optional, Sequence

import structlog

from .models import CallRecord


logger = structlog.get_logger(__name__)

CSV_HEADER = "date-time-start,date-time-end,celltower-id,celltower-name,from-number,to-number"

# Unicode の改行シーケンス (\r\n を1つの改行として扱う)
_LINE_BREAK_PATTERN = re.compile("\r\n|[\n\x0b\x0c\r\x85\u2028\u2029]")

_QUOTE_TRIGGERS = (",", '"')


def escape_special_characters(data: Optional[str]) -> str:
    """
    CSV 用に特殊文字をエスケープ

    改行をスペースに置換し、カンマまたはダブルクォートを含む場合は
    ダブルクォートで囲みます。囲む際、ダブルクォートは "" に二重化します。
    シングルクォートだけでは囲みません。

    Args:
        data: エスケープする文字列 (None の場合は空文字列)

    Returns:
        エスケープ済みの文字列
    """
    if data is None:
        return ""

    escaped = _LINE_BREAK_PATTERN.sub(" ", data)
    if any(trigger in escaped for trigger in _QUOTE_TRIGGERS):
        escaped = '"' + escaped.replace('"', '""') + '"'
    return escaped


def format_record(record: CallRecord) -> str:
    """通話記録を1行の CSV テキストに変換（改行は含まない）"""
    fields: Sequence[str] = (
        record.start.isoformat(),
        record.end.isoformat(),
        escape_special_characters(record.tower_id),
        escape_special_characters(record.tower_name),
        escape_special_characters(record.from_number),
        escape_special_characters(record.to_number),
    )
    return ",".join(fields)


def write_call_data_csv(file_path: str, records: Iterable[CallRecord]) -> bool:
    """
    通話記録を CSV ファイルに書き込む

    既存のファイルは上書きされます。I/O エラーとエンコードエラーは例外として伝播させず、
    ログに出力したうえで False を返します。書き込み途中で失敗した場合、
    ファイルは不完全なまま残ります。

    Args:
        file_path: 出力先ファイルパス
        records: 書き込む通話記録

    Returns:
        書き込みに成功した場合は True、失敗した場合は False
    """
    record_count = 0
    try:
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(CSV_HEADER + "\n")
            for record in records:
                f.write(format_record(record) + "\n")
                record_count += 1
    except (OSError, UnicodeError) as e:
        logger.error(
            "csv_write_failed",
            file_path=str(file_path),
            error=str(e),
            error_type=type(e).__name__,
            records_written=record_count,
            exc_info=True,
        )
        return False

    logger.info(
        "csv_file_created",
        file_path=str(file_path),
        record_count=record_count,
    )
    return True
