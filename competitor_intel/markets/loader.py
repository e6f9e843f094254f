"""
JSON loader for per-market profiles.
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path

from competitor_intel.config import load_env_files
from competitor_intel.markets.models import DEFAULT_MARKET_PROFILE, MarketProfile

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "markets.json"


def _resolve_config_path(raw_path: str | None) -> Path:
    if not raw_path:
        return _DEFAULT_CONFIG_PATH
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (Path(__file__).resolve().parents[2] / candidate).resolve()


def load_market_profiles(*, config_path: str | None = None) -> dict[str, MarketProfile]:
    """
    Load market profiles keyed by upper-cased country code.

    Numeric fields missing from an entry inherit the default market values.
    """

    path = _resolve_config_path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Market config file not found: {path}")

    raw_data = json.loads(path.read_text(encoding="utf-8"))
    markets = raw_data.get("markets", [])
    if not isinstance(markets, list):
        raise ValueError("Invalid market config: 'markets' must be a list.")

    defaults = DEFAULT_MARKET_PROFILE
    profiles: dict[str, MarketProfile] = {}
    for entry in markets:
        if not isinstance(entry, dict):
            continue

        code = str(entry.get("code", "")).strip().upper()
        currency = str(entry.get("currency", "")).strip().upper()
        if not code or not currency:
            continue

        profiles[code] = MarketProfile(
            code=code,
            name=str(entry.get("name", code)).strip() or code,
            currency=currency,
            currency_symbol=_optional_str(entry.get("currency_symbol")) or defaults.currency_symbol,
            thousands_separator=_optional_str(entry.get("thousands_separator"))
            or defaults.thousands_separator,
            decimal_separator=_optional_str(entry.get("decimal_separator")) or defaults.decimal_separator,
            price_decimals=max(0, _optional_int(entry.get("price_decimals"), defaults.price_decimals)),
            price_min=_optional_int(entry.get("price_min"), defaults.price_min),
            price_max=_optional_int(entry.get("price_max"), defaults.price_max),
            outlier_ratio=_optional_float(entry.get("outlier_ratio"), defaults.outlier_ratio),
            margin_threshold=_optional_int(entry.get("margin_threshold"), defaults.margin_threshold),
            target_margin_floor=_optional_float(
                entry.get("target_margin_floor"),
                defaults.target_margin_floor,
            ),
            price_rounding_step=max(
                1,
                _optional_int(entry.get("price_rounding_step"), defaults.price_rounding_step),
            ),
        )

    return profiles


@lru_cache(maxsize=1)
def get_market_profiles() -> dict[str, MarketProfile]:
    """
    Return cached market profiles from `MARKET_CONFIG_PATH` or the bundled file.
    """

    load_env_files()
    return load_market_profiles(config_path=os.getenv("MARKET_CONFIG_PATH"))


def resolve_market(
    country: str | None,
    *,
    profiles: dict[str, MarketProfile] | None = None,
    default_code: str = DEFAULT_MARKET_PROFILE.code,
) -> MarketProfile:
    """
    Return the profile for `country`, falling back to the default market.
    """

    available = profiles if profiles is not None else get_market_profiles()
    code = (country or "").strip().upper()
    profile = available.get(code)
    if profile is not None:
        return profile
    if code:
        logger.warning("Unknown market code=%s; using default=%s", code, default_code)
    return available.get(default_code, DEFAULT_MARKET_PROFILE)


def _optional_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value or None


def _optional_int(value: object, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _optional_float(value: object, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
