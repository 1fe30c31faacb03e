"""
Scoring Config Loader
=====================
Load and save ScoringConfig values as JSON/YAML files.

This is the settings store at the edge of the engine: the engine itself only
ever receives a ScoringConfig value. Files may be partial (only the keys a
user tuned) and may use the camelCase spelling of the web settings panel
(`statusThresholds.greenMin`) or snake_case (`status_thresholds.green_min`).
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from portfolio_diagnostics.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from portfolio_diagnostics.config.validation import validate_scoring_config
from portfolio_diagnostics.utils.exceptions import ConfigFileError
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')

# Lists whose items are themselves field names (checklist keys)
_KEY_LIST_FIELDS = {'critical_items'}


def _normalize_key(key: str) -> str:
    """'greenMin' -> 'green_min', 'self-directed' -> 'self_directed'."""
    return _CAMEL_BOUNDARY.sub(r'_\1', key).replace('-', '_').lower()


def normalize_keys(data: Any) -> Any:
    """Recursively convert mapping keys (and checklist item names) to snake_case."""
    if isinstance(data, dict):
        normalized = {}
        for k, v in data.items():
            key = _normalize_key(str(k))
            if key in _KEY_LIST_FIELDS and isinstance(v, list):
                normalized[key] = [_normalize_key(str(item)) for item in v]
            else:
                normalized[key] = normalize_keys(v)
        return normalized
    if isinstance(data, list):
        return [normalize_keys(v) for v in data]
    return data


def _read_mapping(file_path: Path) -> Dict[str, Any]:
    suffix = file_path.suffix.lower()
    try:
        with file_path.open("r", encoding="utf-8") as f:
            if suffix in {".yml", ".yaml"}:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigFileError(str(file_path), f"unsupported format '{suffix}', use .json or .yaml/.yml")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigFileError(str(file_path), f"parse error: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ConfigFileError(str(file_path), f"not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise ConfigFileError(str(file_path), f"cannot read file: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(str(file_path), "top level must be a mapping")
    return data


def load_config_file(path: str) -> Dict[str, Any]:
    """Raw (normalized) mapping from a JSON/YAML file."""
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigFileError(str(path), "file not found")
    return normalize_keys(_read_mapping(file_path))


def build_scoring_config(raw: Dict[str, Any], base: Optional[ScoringConfig] = None,
                         source: Optional[str] = None) -> ScoringConfig:
    """
    Deep-merge a raw mapping onto `base` (defaults) and validate the result.

    A top-level "scoring" or "scoring_config" section is accepted so one file
    can hold other settings too.
    """
    raw = normalize_keys(raw)
    section = raw.get("scoring_config") or raw.get("scoring") or raw
    try:
        config = ScoringConfig.from_dict(section, base=base or DEFAULT_SCORING_CONFIG)
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigFileError(source or "<mapping>", str(exc)) from exc
    return validate_scoring_config(config, source=source)


def load_scoring_config(path: str, base: Optional[ScoringConfig] = None) -> ScoringConfig:
    """
    Load a (possibly partial) scoring config file.

    Raises:
        ConfigFileError: missing file, bad format, unknown keys
        ScoringConfigError: thresholds out of order
    """
    raw = load_config_file(path)
    config = build_scoring_config(raw, base=base, source=str(path))
    logger.info(f"Loaded scoring config from {path}")
    return config


def save_scoring_config(config: ScoringConfig, path: str) -> Path:
    """Write the full config as JSON or YAML (chosen by file suffix)."""
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    data = config.to_dict()

    if suffix in {".yml", ".yaml"}:
        text = yaml.safe_dump(data, sort_keys=False)
    elif suffix == ".json":
        text = json.dumps(data, indent=2)
    else:
        raise ConfigFileError(str(path), f"unsupported format '{suffix}', use .json or .yaml/.yml")

    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding="utf-8")
    logger.info(f"Saved scoring config to {file_path}")
    return file_path
