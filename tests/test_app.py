"""
アプリケーションとエントリーポイントのテスト
"""

import csv
import json
import random
from datetime import datetime

import pytest
import structlog

from main import main
from src.app import configure_structlog, get_logger, run
from src.config import Config
from src.generator import InvalidRangeError
from src.models import CellTower, TowerCatalog
from src.writer import CSV_HEADER


@pytest.fixture
def small_config(tmp_path):
    """3件だけ生成するテスト用設定"""
    config = Config.default()
    config.record_count = 3
    config.seed = 2025
    config.output_path = str(tmp_path / "call_data.csv")
    return config


def read_rows(path):
    with open(path, encoding="utf-8", newline="") as f:
        return list(csv.reader(f))


class TestStructuredLogging:
    """構造化ロギングのテスト"""

    def test_get_logger_returns_bound_logger(self):
        configure_structlog("INFO")
        logger = get_logger("test")
        assert logger is not None
        assert hasattr(logger, "info")

    def test_output_is_json_with_standard_fields(self, capsys):
        configure_structlog("INFO")
        structlog.get_logger("test_json").info("test_event", tower_id="CT-1001")

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "test_event"
        assert entry["level"] == "info"
        assert entry["tower_id"] == "CT-1001"
        assert "timestamp" in entry

    def test_debug_filtered_at_info_level(self, capsys):
        configure_structlog("INFO")
        structlog.get_logger("test_debug").debug("hidden_event")

        assert "hidden_event" not in capsys.readouterr().out

    def test_debug_level_logging_available(self, capsys):
        configure_structlog("DEBUG")
        structlog.get_logger("test_debug").debug("visible_event")

        assert "visible_event" in capsys.readouterr().out


class TestRun:
    """run() のテスト"""

    def test_writes_requested_records(self, small_config):
        assert run(small_config) is True

        rows = read_rows(small_config.output_path)
        assert ",".join(rows[0]) == CSV_HEADER
        assert len(rows) == 4
        assert all(len(row) == 6 for row in rows)

    def test_seed_is_deterministic(self, small_config, tmp_path):
        run(small_config)
        first = read_rows(small_config.output_path)

        small_config.output_path = str(tmp_path / "second.csv")
        run(small_config)

        assert read_rows(small_config.output_path) == first

    def test_explicit_rng_and_catalog(self, small_config):
        catalog = TowerCatalog([CellTower("T-9", "Test, Tower")])

        assert run(small_config, rng=random.Random(1), tower_catalog=catalog) is True

        rows = read_rows(small_config.output_path)
        assert {(row[2], row[3]) for row in rows[1:]} == {("T-9", "Test, Tower")}

    def test_zero_records_writes_header_only(self, small_config):
        small_config.record_count = 0

        assert run(small_config) is True
        assert read_rows(small_config.output_path) == [CSV_HEADER.split(",")]

    def test_invalid_range_raises(self, small_config):
        small_config.start_date = datetime(2026, 1, 1)
        small_config.end_date = datetime(2025, 1, 1)

        with pytest.raises(InvalidRangeError):
            run(small_config)

    def test_write_failure_returns_false(self, small_config, tmp_path):
        small_config.output_path = str(tmp_path / "missing" / "out.csv")

        assert run(small_config) is False


class TestMain:
    """main() のテスト"""

    def test_success_exit_code(self, tmp_path):
        output = tmp_path / "call_data.csv"

        assert main(["--count", "5", "--seed", "1", "--output", str(output)]) == 0
        assert len(read_rows(output)) == 6

    def test_write_failure_exit_code(self, tmp_path, capsys):
        """異常系: 書き込み失敗はクラッシュせず終了コード 1"""
        output = tmp_path / "missing" / "call_data.csv"

        assert main(["--count", "1", "--output", str(output)]) == 1
        assert "csv_write_failed" in capsys.readouterr().out

    def test_offset_start_date_exit_code(self, tmp_path):
        """正常系: タイムゾーン付きの開始日時でもクラッシュしない"""
        output = tmp_path / "call_data.csv"

        assert main(["--count", "1", "--start", "2025-12-01T00:00+00:00", "--output", str(output)]) == 0
        assert len(read_rows(output)) == 2

    def test_configuration_error_exit_code(self, capsys):
        assert main(["--count", "-5"]) == 1
        assert "record_count" in capsys.readouterr().err
