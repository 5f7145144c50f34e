import json
import math

import pytest

from dcplanner.api import _sanitize_records
from dcplanner.engine.state import SettingsState
from dcplanner.engine.storage import _sanitize_json_compat, load_settings, save_settings


def test_sanitize_json_compat_replaces_special_numbers():
    payload = {
        "float": math.nan,
        "list": [1, float("inf"), -float("inf")],
        "nested": {"value": math.nan},
    }

    clean = _sanitize_json_compat(payload)

    assert clean == {
        "float": None,
        "list": [1, None, None],
        "nested": {"value": None},
    }


def test_save_settings_persists_sanitized_values(tmp_path):
    path = tmp_path / "settings.json"
    data = {"Mine": {"otherAssets": math.nan, "returnRates": [1, float("inf")]}}

    save_settings(str(path), data)

    with path.open("r", encoding="utf-8") as handle:
        stored = json.load(handle)

    assert stored == {"Mine": {"otherAssets": None, "returnRates": [1, None]}}


def test_load_settings_ignores_corrupt_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_settings(str(path)) == {}
    assert load_settings(str(tmp_path / "missing.json")) == {}


def test_settings_state_round_trip(tmp_path):
    path = str(tmp_path / "nested" / "settings.json")
    state = SettingsState(path)

    state.save("b", {"nickname": "후배"})
    state.save("a", {"nickname": "선배"})

    reloaded = SettingsState(path)
    assert reloaded.list_names() == ["a", "b"]
    assert reloaded.get("b") == {"nickname": "후배"}

    reloaded.delete("a")
    assert SettingsState(path).list_names() == ["b"]


def test_sanitize_records_used_for_api_payloads():
    rows = [{"value": float("nan"), "other": 5}]

    clean = _sanitize_records(rows)

    assert clean == [{"value": None, "other": 5}]


def test_failed_save_keeps_previous_file_and_removes_temp(tmp_path):
    path = tmp_path / "settings.json"
    save_settings(str(path), {"Mine": {"familySize": 3}})

    with pytest.raises(TypeError):
        save_settings(str(path), {"Mine": {"familySize": object()}})

    assert not (tmp_path / "settings.json.tmp").exists()
    assert load_settings(str(path)) == {"Mine": {"familySize": 3}}
