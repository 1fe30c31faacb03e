"""
Input Loader
============
Read holdings and client profiles from disk into model objects.

Formats:
- holdings: JSON / YAML (a list, or a mapping with a `holdings` list) or CSV
  (one row per holding, header row with snake_case or camelCase columns)
- client: JSON / YAML mapping with `client`, `planning_checklist` and the
  optional `lifetime_income`, `advice_model`, `advisor_fee` sections
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from portfolio_diagnostics.models.portfolio import (
    AdviceModel,
    ClientInfo,
    Holding,
    LifetimeIncomeInputs,
    PlanningChecklist,
)
from portfolio_diagnostics.utils.exceptions import HoldingsFileError
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

STRUCTURED_SUFFIXES = {'.json', '.yml', '.yaml'}


@dataclass(frozen=True)
class ClientFile:
    """Everything a client file can carry besides holdings."""
    client_info: ClientInfo
    planning_checklist: PlanningChecklist
    lifetime_income: Optional[LifetimeIncomeInputs] = None
    advice_model: Optional[AdviceModel] = None
    advisor_fee: Optional[float] = None


def _read_structured(file_path: Path) -> Any:
    try:
        with file_path.open('r', encoding='utf-8') as f:
            if file_path.suffix.lower() == '.json':
                return json.load(f)
            return yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise HoldingsFileError(str(file_path), f"parse error: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise HoldingsFileError(str(file_path), f"not UTF-8 text: {exc}") from exc


def _csv_records(file_path: Path) -> List[Dict[str, Any]]:
    try:
        # Only empty cells are missing; tickers such as "NA" or "NULL" stay text
        df = pd.read_csv(file_path, keep_default_na=False, na_values=[''])
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise HoldingsFileError(str(file_path), f"parse error: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    records = []
    for row in df.to_dict(orient='records'):
        # Blank cells come back as NaN; treat them as missing
        records.append({k: v for k, v in row.items() if not pd.isna(v)})
    return records


def _holding_records(file_path: Path) -> List[Dict[str, Any]]:
    suffix = file_path.suffix.lower()
    if suffix == '.csv':
        return _csv_records(file_path)
    if suffix not in STRUCTURED_SUFFIXES:
        raise HoldingsFileError(str(file_path), f"unsupported format '{suffix}', use .json, .yaml/.yml or .csv")

    data = _read_structured(file_path)
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get('holdings', [])
    if not isinstance(data, list):
        raise HoldingsFileError(str(file_path), "expected a list of holdings")
    return data


def load_holdings_file(path: str) -> List[Holding]:
    """
    Parse a holdings file.

    Raises:
        HoldingsFileError: Missing file, unknown format, parse failure, or a
            record that cannot become a Holding (with its 1-based number)
    """
    file_path = Path(path)
    if not file_path.exists():
        raise HoldingsFileError(str(path), "file not found")

    holdings = []
    for row, record in enumerate(_holding_records(file_path), 1):
        if not isinstance(record, dict):
            raise HoldingsFileError(str(path), "each holding must be a mapping", row=row)
        try:
            holdings.append(Holding.from_dict(record))
        except (TypeError, ValueError) as exc:
            raise HoldingsFileError(str(path), str(exc), row=row) from exc

    logger.info(f"Loaded {len(holdings)} holdings from {file_path.name}")
    return holdings


def load_client_file(path: str) -> ClientFile:
    """
    Parse a client profile file.

    Missing sections fall back to defaults (Moderate, empty checklist, no
    lifetime income inputs).
    """
    file_path = Path(path)
    if not file_path.exists():
        raise HoldingsFileError(str(path), "file not found")
    if file_path.suffix.lower() not in STRUCTURED_SUFFIXES:
        raise HoldingsFileError(str(path), "client files must be .json or .yaml/.yml")

    data = _read_structured(file_path) or {}
    if not isinstance(data, dict):
        raise HoldingsFileError(str(path), "top level must be a mapping")

    def section(*keys: str) -> Optional[Dict[str, Any]]:
        for key in keys:
            if isinstance(data.get(key), dict):
                return data[key]
        return None

    try:
        client_info = ClientInfo.from_dict(section('client', 'client_info', 'clientInfo') or {})
        checklist = PlanningChecklist.from_dict(
            section('planning_checklist', 'planningChecklist', 'planning') or {})
        income_data = section('lifetime_income', 'lifetimeIncome')
        lifetime_income = LifetimeIncomeInputs.from_dict(income_data) if income_data is not None else None

        advice = data.get('advice_model', data.get('adviceModel'))
        advisor_fee = data.get('advisor_fee', data.get('advisorFee'))
        result = ClientFile(
            client_info=client_info,
            planning_checklist=checklist,
            lifetime_income=lifetime_income,
            advice_model=AdviceModel(advice) if advice is not None else None,
            advisor_fee=float(advisor_fee) if advisor_fee is not None else None,
        )
    except (TypeError, ValueError) as exc:
        raise HoldingsFileError(str(path), str(exc)) from exc

    logger.debug(f"Loaded client profile from {file_path.name}")
    return result
