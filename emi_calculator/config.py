from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict

# Package directory (holds config.yaml)
BASE_DIR = Path(__file__).resolve().parent


def _load_yaml() -> Dict[str, Any]:
    with open(BASE_DIR / "config.yaml", "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


CFG = _load_yaml()

# Form defaults
DEFAULT_PRINCIPAL: float = float(CFG.get("principal", 100_000))
DEFAULT_RATE_PCT: float = float(CFG.get("rate_pct", 10.0))  # percent, e.g. 10 for 10%
DEFAULT_YEARS: int = int(CFG.get("years", 1))
DEFAULT_MONTHS: int = int(CFG.get("months", 0))

# Form limits
MAX_MONTHS_FIELD: int = int(CFG.get("max_months_field", 12))

# Display
CURRENCY_SYMBOL: str = str(CFG.get("currency_symbol", "₹"))
