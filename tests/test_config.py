import json

import pytest
from marshmallow import ValidationError

from potsweep.automation import Ratio, Sweep
from potsweep.config import load_operations_file, save_operations_file
from potsweep.errors import ConfigError
from potsweep.validation_schemas import SweepSchema, dump_operation, load_operations


def test_load_sweep_and_ratio():
    operations = load_operations(
        [
            {"sweep": {"account_goal": 100, "pots": ["bills", "lottery", "student loan"]}},
            {"ratio": {"account_id": "acc_1", "pots": {"savings": 2, "holiday": 1}}},
        ]
    )

    assert operations[0] == Sweep(pots=["bills", "lottery", "student loan"], account_goal=100)
    assert operations[1] == Ratio(pots={"savings": 2, "holiday": 1}, account_id="acc_1")
    assert list(operations[1].pots) == ["savings", "holiday"]


def test_sweep_defaults():
    sweep = SweepSchema().load({"pots": ["bills"]})
    assert sweep.account_id is None
    assert sweep.account_goal == 0


def test_sweep_requires_pots():
    with pytest.raises(ValidationError) as exc:
        SweepSchema().load({"account_goal": 10})
    assert "pots" in exc.value.messages


def test_sweep_rejects_unknown_fields():
    with pytest.raises(ValidationError) as exc:
        SweepSchema().load({"pots": ["bills"], "current_account_goal": 10})
    assert "current_account_goal" in exc.value.messages


def test_sweep_rejects_fractional_goal():
    with pytest.raises(ValidationError):
        SweepSchema().load({"pots": ["bills"], "account_goal": 10.5})


def test_ratio_weights_must_be_positive():
    with pytest.raises(ValidationError):
        load_operations([{"ratio": {"pots": {"savings": 0}}}])


def test_unknown_operation_tag_rejected():
    with pytest.raises(ValidationError):
        load_operations([{"shuffle": {"pots": ["bills"]}}])


def test_entry_must_name_exactly_one_operation():
    with pytest.raises(ValidationError):
        load_operations([{}])
    with pytest.raises(ValidationError):
        load_operations([{"sweep": {"pots": []}, "ratio": {"pots": {"a": 1}}}])


def test_top_level_must_be_a_list():
    with pytest.raises(ValidationError):
        load_operations({"sweep": {"pots": ["bills"]}})


def test_dump_operation_round_trips_through_file(tmp_path):
    path = tmp_path / "config.json"
    sweep = Sweep(pots=["bills"], account_goal=5)
    save_operations_file([sweep], str(path))

    assert json.loads(path.read_text()) == [dump_operation(sweep)]
    assert load_operations_file(str(path)) == [sweep]


def test_missing_file_is_created_empty(tmp_path):
    path = tmp_path / "nested" / "config.json"
    assert load_operations_file(str(path)) == []
    assert json.loads(path.read_text()) == []


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps([{"sweep": {"pots": ["bills"]}}]))
    monkeypatch.setenv("POTSWEEP_CONFIG", str(path))
    assert load_operations_file() == [Sweep(pots=["bills"])]


def test_invalid_json_raises_config_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[{")
    with pytest.raises(ConfigError):
        load_operations_file(str(path))


def test_invalid_operations_raise_config_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps([{"sweep": {"pots": ["bills"], "extra": 1}}]))
    with pytest.raises(ConfigError) as exc:
        load_operations_file(str(path))
    assert "extra" in str(exc.value)
