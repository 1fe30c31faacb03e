"""
Tests for loading and saving scoring configs as JSON/YAML files.
"""

import json

import pytest
import yaml

from portfolio_diagnostics.config.loader import (
    build_scoring_config,
    load_scoring_config,
    normalize_keys,
    save_scoring_config,
)
from portfolio_diagnostics.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from portfolio_diagnostics.utils.exceptions import ConfigFileError, ScoringConfigError


def test_normalize_keys_camel_and_kebab():
    raw = {"statusThresholds": {"greenMin": 80}, "fees": {"self-directed": {"yellowMax": 0.02}}}
    assert normalize_keys(raw) == {
        "status_thresholds": {"green_min": 80},
        "fees": {"self_directed": {"yellow_max": 0.02}},
    }
    assert normalize_keys({"top10ConcentrationMax": 0.5}) == {"top10_concentration_max": 0.5}


def test_load_camel_case_json(tmp_path):
    path = tmp_path / "scoring.json"
    path.write_text(json.dumps({
        "statusThresholds": {"greenMin": 75, "yellowMin": 45},
        "riskManagement": {"maxSinglePositionPct": 0.12},
    }))
    config = load_scoring_config(str(path))
    assert config.status_thresholds.green_min == 75.0
    assert config.status_thresholds.yellow_min == 45.0
    assert config.risk_management.max_single_position_pct == 0.12
    assert config.fees == DEFAULT_SCORING_CONFIG.fees


def test_load_yaml_with_scoring_section(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump({
        "scoring": {"tax": {"harvest_bonus_pct": 0.05}},
        "theme": "dark",
    }))
    config = load_scoring_config(str(path))
    assert config.tax.harvest_bonus_pct == 0.05


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_scoring_config(str(path)) == DEFAULT_SCORING_CONFIG


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_save_then_load_round_trip(tmp_path, suffix):
    original = ScoringConfig.from_dict({
        "status_thresholds": {"green_min": 72},
        "planning_gaps": {"critical_items": ["will_trust", "emergency_fund"]},
    })
    path = save_scoring_config(original, str(tmp_path / "nested" / f"config{suffix}"))
    assert path.exists()
    assert load_scoring_config(str(path)) == original


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigFileError, match="file not found"):
        load_scoring_config(str(tmp_path / "nope.json"))


def test_unsupported_suffix_raises(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("x = 1")
    with pytest.raises(ConfigFileError, match="unsupported format"):
        load_scoring_config(str(path))


def test_malformed_json_wrapped(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ConfigFileError, match="parse error") as exc_info:
        load_scoring_config(str(path))
    assert exc_info.value.__cause__ is not None


def test_unknown_key_becomes_config_file_error():
    with pytest.raises(ConfigFileError, match="Unknown config key"):
        build_scoring_config({"statusThresholds": {"blueMin": 1}}, source="inline")


def test_inconsistent_thresholds_rejected():
    with pytest.raises(ScoringConfigError):
        build_scoring_config({"statusThresholds": {"greenMin": 30}})


def test_camel_case_critical_items_are_normalized(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "planningGaps": {"criticalItems": ["willTrust", "poaDirectives", "emergencyFund"]},
    }))
    config = load_scoring_config(str(path))
    assert config.planning_gaps.critical_items == ('will_trust', 'poa_directives', 'emergency_fund')
    assert config == DEFAULT_SCORING_CONFIG


def test_normalize_keys_leaves_other_list_values_alone():
    raw = {"notes": ["keepMe"], "criticalItems": ["longTermCare"]}
    assert normalize_keys(raw) == {"notes": ["keepMe"], "critical_items": ["long_term_care"]}


def test_non_utf8_file_wrapped(tmp_path):
    path = tmp_path / "latin1.yaml"
    path.write_bytes(b"statusThresholds:\n  greenMin: 80 # \xe9t\xe9\n")
    with pytest.raises(ConfigFileError, match="not UTF-8"):
        load_scoring_config(str(path))


def test_unreadable_path_wrapped(tmp_path):
    directory = tmp_path / "config.json"
    directory.mkdir()
    with pytest.raises(ConfigFileError, match="cannot read file"):
        load_scoring_config(str(directory))


def test_fractional_count_rejected():
    with pytest.raises(ConfigFileError, match="whole number"):
        build_scoring_config({"planningGaps": {"greenMinComplete": 6.5}})


def test_integral_float_count_accepted():
    config = build_scoring_config({"planningGaps": {"greenMinComplete": 6.0}})
    assert config.planning_gaps.green_min_complete == 6
    assert isinstance(config.planning_gaps.green_min_complete, int)
