"""
Load configuration from config.yaml and .env. Environment variables override the YAML file.
"""

from __future__ import annotations
import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path.cwd()
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path.cwd()
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    series = data.get("series", {})
    trading = data.get("trading", {})
    costs = data.get("costs", {})
    logging_cfg = data.get("logging", {})

    return Config(
        # Series
        series_name=env("TA_SERIES_NAME", series.get("name", "")),
        bar_period_seconds=env_int("TA_BAR_PERIOD_SECONDS", series.get("bar_period_seconds", 86400)),
        maximum_bar_count=env_int("TA_MAXIMUM_BAR_COUNT", series.get("maximum_bar_count", 0)),
        num_type=env("TA_NUM_TYPE", series.get("num_type", "float")).lower(),
        # Trading
        starting_type=env("TA_STARTING_TYPE", trading.get("starting_type", "BUY")).upper(),
        trade_amount=env_float("TA_TRADE_AMOUNT", trading.get("amount", 1.0)),
        # Costs (0 = zero-cost model)
        transaction_fee=env_float("TA_TRANSACTION_FEE", costs.get("transaction_fee", 0.0)),
        borrowing_fee=env_float("TA_BORROWING_FEE", costs.get("borrowing_fee", 0.0)),
        # Logging
        log_level=env("TA_LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file"),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "series_name", "bar_period_seconds", "maximum_bar_count", "num_type",
        "starting_type", "trade_amount",
        "transaction_fee", "borrowing_fee",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        series_name: str = "",
        bar_period_seconds: int = 86400,
        maximum_bar_count: int = 0,
        num_type: str = "float",
        starting_type: str = "BUY",
        trade_amount: float = 1.0,
        transaction_fee: float = 0.0,
        borrowing_fee: float = 0.0,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: Optional[str] = None,
    ):
        if maximum_bar_count < 0:
            raise ValueError(f"maximum_bar_count must be >= 0, got {maximum_bar_count}")
        if starting_type not in ("BUY", "SELL"):
            raise ValueError(f"starting_type must be BUY or SELL, got {starting_type}")
        self.series_name = series_name
        self.bar_period_seconds = bar_period_seconds
        self.maximum_bar_count = maximum_bar_count
        self.num_type = num_type
        self.starting_type = starting_type
        self.trade_amount = trade_amount
        self.transaction_fee = transaction_fee
        self.borrowing_fee = borrowing_fee
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file

    @property
    def bar_period(self) -> timedelta:
        return timedelta(seconds=self.bar_period_seconds)
