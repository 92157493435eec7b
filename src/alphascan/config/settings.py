"""Settings for AlphaScan: layered TOML profiles and structlog setup."""

from __future__ import annotations

import logging
import sys
import tomllib
from functools import reduce
from pathlib import Path
from typing import Any

import structlog

# Checked in order when no config dir is given: ./config, then the repo's config/
_CONFIG_SEARCH_PATH = (
    Path.cwd() / "config",
    Path(__file__).resolve().parents[3] / "config",
)
DEFAULT_LAYER = "default"


def _read_layer(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Overlay wins on scalars; nested tables are merged key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        merged[key] = _deep_merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def _resolve_config_dir(config_dir: Path | None) -> Path:
    if config_dir is not None:
        return config_dir
    return next((p for p in _CONFIG_SEARCH_PATH if p.exists()), _CONFIG_SEARCH_PATH[-1])


def _layer_paths(config_dir: Path, profile: str | None) -> list[Path]:
    """default.toml, then <profile>.toml when present. No default means no layers."""
    default = config_dir / f"{DEFAULT_LAYER}.toml"
    if not default.exists():
        return []
    layers = [default]
    if profile and profile != DEFAULT_LAYER and (config_dir / f"{profile}.toml").exists():
        layers.append(config_dir / f"{profile}.toml")
    return layers


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Raw config dict: default.toml with the profile overlay deep-merged on top."""
    layers = _layer_paths(_resolve_config_dir(config_dir), profile)
    return reduce(_deep_merge, (_read_layer(p) for p in layers), {})


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    raw = load_config(profile, config_dir=config_dir)
    return Settings.from_dict(raw)


class Settings:
    """Application settings from TOML config."""

    def __init__(
        self,
        *,
        polymarket: dict[str, Any] | None = None,
        manifold: dict[str, Any] | None = None,
        dexscreener: dict[str, Any] | None = None,
        http: dict[str, Any] | None = None,
        arbitrage: dict[str, Any] | None = None,
        tickers: dict[str, Any] | None = None,
        logging: dict[str, Any] | None = None,
    ):
        self.polymarket = polymarket or {}
        self.manifold = manifold or {}
        self.dexscreener = dexscreener or {}
        self.http = http or {}
        self.arbitrage = arbitrage or {}
        self.tickers = tickers or {}
        self.logging = logging or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            polymarket=raw.get("polymarket"),
            manifold=raw.get("manifold"),
            dexscreener=raw.get("dexscreener"),
            http=raw.get("http"),
            arbitrage=raw.get("arbitrage"),
            tickers=raw.get("tickers"),
            logging=raw.get("logging"),
        )

    # Convenience accessors with defaults
    @property
    def polymarket_api_base(self) -> str:
        return self.polymarket.get("api_base", "https://gamma-api.polymarket.com")

    @property
    def manifold_api_base(self) -> str:
        return self.manifold.get("api_base", "https://api.manifold.markets")

    @property
    def dexscreener_api_base(self) -> str:
        return self.dexscreener.get("api_base", "https://api.dexscreener.com")

    @property
    def dexscreener_timeout_sec(self) -> float:
        return float(self.dexscreener.get("request_timeout_sec", 8.0))

    @property
    def http_timeout_sec(self) -> float:
        return float(self.http.get("timeout_sec", 30.0))

    @property
    def arb_min_similarity(self) -> float:
        return float(self.arbitrage.get("min_similarity", 0.75))

    @property
    def arb_min_spread(self) -> float:
        return float(self.arbitrage.get("min_spread", 0.01))

    @property
    def arb_limit(self) -> int:
        return int(self.arbitrage.get("limit", 50))

    @property
    def arb_fetch_limit(self) -> int:
        return int(self.arbitrage.get("fetch_limit", 100))

    @property
    def chain_id(self) -> str:
        return self.tickers.get("chain_id", "solana")

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)


def _renderer(fmt: str) -> structlog.typing.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(settings: Settings) -> None:
    """Set up structlog once at CLI entry. Events are written to stderr."""
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(settings.logging_format))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
