"""
Cell Tower Call Data Generator

基地局の通話記録 (CDR) を生成して CSV に書き出すツール
"""

__version__ = "0.1.0"

from src.config import Config, ConfigurationError
from src.generator import InvalidRangeError, generate_call_records
from src.models import DEFAULT_TOWER_CATALOG, CallRecord, CellTower, TowerCatalog
from src.writer import write_call_data_csv

__all__ = [
    "Config",
    "ConfigurationError",
    "InvalidRangeError",
    "generate_call_records",
    "DEFAULT_TOWER_CATALOG",
    "CallRecord",
    "CellTower",
    "TowerCatalog",
    "write_call_data_csv",
]
