# engine/storage.py
import os
import json
import math
import logging
from typing import Any, Dict

from ..data_model import FinancialParameters, default_parameters

logger = logging.getLogger(__name__)

# Snapshots from the first release paired interestRate1/years1 with the cash-out
# loan and interestRate2/years2 with the purchase loan.
LEGACY_RATE_KEYS = ("interestRate1", "interestRate2")
LEGACY_SWAPPED_PAIRS = (("years1", "years2"), ("gracePeriod1", "gracePeriod2"))


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def load_store(path: str) -> Dict[str, Any]:
    """Read the whole key-value file; a missing, empty or corrupt file reads as empty."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_text = f.read().strip()
            if not raw_text:
                return {}
            data = json.loads(raw_text)
    except (json.JSONDecodeError, OSError) as exc:
        logger.error("Failed to read stored values from %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Ignoring store %s: expected a JSON object, got %s", path, type(data).__name__)
        return {}
    return data


def save_store(path: str, store: Dict[str, Any]) -> None:
    ensure_user_data_dir(path)
    tmp_path = f"{path}.tmp"
    clean = _sanitize_json_compat(store)
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(clean, f, allow_nan=False, ensure_ascii=False)
    except Exception:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    os.replace(tmp_path, path)


def _upgrade_legacy(stored: Dict[str, Any]) -> Dict[str, Any]:
    is_legacy = any(key in stored for key in LEGACY_RATE_KEYS) and not (
        "rates1" in stored or "rates2" in stored
    )
    rate1 = stored.pop("interestRate1", None)
    rate2 = stored.pop("interestRate2", None)
    if not is_legacy:
        return stored
    if rate2 is not None:
        stored["rates1"] = rate2
    if rate1 is not None:
        stored["rates2"] = rate1
    for first, second in LEGACY_SWAPPED_PAIRS:
        value1, value2 = stored.pop(first, None), stored.pop(second, None)
        if value2 is not None:
            stored[first] = value2
        if value1 is not None:
            stored[second] = value1
    return stored


def merge_with_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay a stored snapshot on the defaults so newer fields are never missing."""
    defaults = default_parameters().to_dict()
    stored = _upgrade_legacy(dict(raw))
    merged = {**defaults, **stored}
    merged["expense"] = {**defaults["expense"], **(stored.get("expense") or {})}
    return merged


def load_params(path: str, key: str) -> FinancialParameters:
    stored = load_store(path).get(key)
    if stored is None:
        return default_parameters()
    if isinstance(stored, str):
        # entry written as a serialized JSON string
        try:
            stored = json.loads(stored)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse stored value for %r: %s", key, exc)
            return default_parameters()
    if not isinstance(stored, dict):
        logger.error("Ignoring stored value for %r: expected an object", key)
        return default_parameters()
    try:
        return FinancialParameters.from_dict(merge_with_defaults(stored))
    except (TypeError, ValueError) as exc:
        logger.error("Failed to parse stored value for %r: %s", key, exc)
        return default_parameters()


def save_params(path: str, key: str, params: FinancialParameters) -> bool:
    """Overwrite the stored snapshot; failures are logged and reported as ``False``."""
    store = load_store(path)
    store[key] = params.to_dict()
    try:
        save_store(path, store)
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Failed to save parameters to %s: %s", path, exc)
        return False
    return True
