# -*- coding: utf-8 -*-
import json
import logging
import sys

import pytest

from config import ConfigManager, PIDConfig, SimulationConfig
from core import ConfigurationError, DerivativeMode


def test_missing_file_keeps_defaults(tmp_path):
    manager = ConfigManager(tmp_path / "missing.json")
    assert manager.load_config() is False
    assert PIDConfig.TARGET == 1000.0
    assert PIDConfig.MAX_OUTPUT == sys.float_info.max


def test_save_then_load_restores_values(tmp_path):
    path = tmp_path / "pid.json"
    PIDConfig.KP = 0.8
    PIDConfig.KI = 0.0
    PIDConfig.KD = 0.15
    PIDConfig.MAX_OUTPUT = 42.0
    PIDConfig.DERIVATIVE_ON_MEASUREMENT = True
    SimulationConfig.STEPS = 7

    assert ConfigManager(path, auto_load=False).save_config() is True

    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['PID']['KP'] == 0.8
    assert data['SIMULATION']['STEPS'] == 7
    assert data['version'] == ConfigManager.VERSION

    PIDConfig.update_from_dict({'KP': 0.0, 'KD': 0.0, 'MAX_OUTPUT': 1.0,
                                'DERIVATIVE_ON_MEASUREMENT': False})
    SimulationConfig.STEPS = 100

    assert ConfigManager(path).load_config() is True
    assert PIDConfig.KP == 0.8
    assert PIDConfig.KD == 0.15
    assert PIDConfig.MAX_OUTPUT == 42.0
    assert PIDConfig.DERIVATIVE_ON_MEASUREMENT is True
    assert SimulationConfig.STEPS == 7


def test_partial_file_only_updates_given_keys(tmp_path):
    path = tmp_path / "pid.json"
    path.write_text(json.dumps({'PID': {'KP': 2.5}}), encoding='utf-8')

    ConfigManager(path)

    assert PIDConfig.KP == 2.5
    assert PIDConfig.KI == 0.01
    assert SimulationConfig.ELAPSED_TIME == 10.0


@pytest.mark.parametrize("content", [
    "{not json",
    "[1, 2, 3]",
    '{"PID": {"KP": "fast"}}',
    '{"PID": 5}',
])
def test_invalid_file_is_logged_not_raised(tmp_path, caplog, content):
    path = tmp_path / "pid.json"
    path.write_text(content, encoding='utf-8')

    with caplog.at_level(logging.ERROR):
        manager = ConfigManager(path, auto_load=False)
        assert manager.load_config() is False

    assert "加载失败" in caplog.text
    assert PIDConfig.KP == 0.01


def test_save_failure_returns_false(tmp_path, caplog):
    manager = ConfigManager(tmp_path / "no_such_dir" / "pid.json", auto_load=False)
    with caplog.at_level(logging.ERROR):
        assert manager.save_config() is False
    assert "保存失败" in caplog.text


def test_to_builder_uses_current_values():
    PIDConfig.update_from_dict({'KP': 1.0, 'KI': 0.0, 'KD': 0.0, 'TARGET': 10.0,
                                'MAX_OUTPUT': 5.0, 'DERIVATIVE_ON_MEASUREMENT': True})
    pid = ConfigManager(auto_load=False).to_builder().build()

    assert pid.target == 10.0
    assert pid.max_output == 5.0
    assert pid.derivative_mode is DerivativeMode.ON_MEASUREMENT
    assert pid.compute(8.0, 1.0) == 2.0
    assert pid.compute(0.0, 1.0) == 5.0


def test_to_builder_with_zero_gains_fails_on_build():
    PIDConfig.update_from_dict({'KP': 0.0, 'KI': 0.0, 'KD': 0.0})
    with pytest.raises(ConfigurationError):
        ConfigManager(auto_load=False).to_builder().build()


@pytest.mark.parametrize("data", [
    {'PID': {'KP': 2.0, 'KI': 'fast'}},
    {'PID': {'KP': 3.0}, 'SIMULATION': {'STEPS': 'x'}},
    {'PID': {'KP': 4.0}, 'SIMULATION': {'STEPS': -1}},
])
def test_invalid_file_leaves_no_partial_update(tmp_path, data):
    path = tmp_path / "pid.json"
    path.write_text(json.dumps(data), encoding='utf-8')

    assert ConfigManager(path, auto_load=False).load_config() is False
    assert PIDConfig.KP == 0.01
    assert SimulationConfig.STEPS == 100


@pytest.mark.parametrize("value", ["false", 0, None])
def test_derivative_mode_flag_must_be_bool(value):
    with pytest.raises(ValueError):
        PIDConfig.update_from_dict({'KP': 5.0, 'DERIVATIVE_ON_MEASUREMENT': value})
    assert PIDConfig.KP == 0.01
    assert PIDConfig.DERIVATIVE_ON_MEASUREMENT is False


def test_string_bool_in_file_is_rejected(tmp_path):
    path = tmp_path / "pid.json"
    path.write_text(json.dumps({'PID': {'DERIVATIVE_ON_MEASUREMENT': "false"}}), encoding='utf-8')

    assert ConfigManager(path, auto_load=False).load_config() is False
    assert PIDConfig.DERIVATIVE_ON_MEASUREMENT is False
