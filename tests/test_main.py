# -*- coding: utf-8 -*-
import json

import pytest

import main
from config import PIDConfig


def output_lines(out):
    return [line for line in out.splitlines() if " : " in line and not line.startswith("[")]


def test_default_run_prints_every_step(tmp_path, capsys):
    assert main.main(["--config", str(tmp_path / "none.json"), "--steps", "4"]) == 0

    lines = output_lines(capsys.readouterr().out)
    assert [line.split(" : ")[0] for line in lines] == ["0", "1", "2", "3", "4"]


def test_overrides_reach_controller(tmp_path, capsys):
    argv = ["--config", str(tmp_path / "none.json"),
            "--target", "10", "--kp", "1", "--ki", "0", "--kd", "0",
            "--seed", "2", "--steps", "0"]
    assert main.main(argv) == 0

    lines = output_lines(capsys.readouterr().out)
    assert lines == ["0 : 8.0"]


def test_all_zero_gains_exit_code(tmp_path):
    argv = ["--config", str(tmp_path / "none.json"), "--kp", "0", "--ki", "0", "--kd", "0"]
    assert main.main(argv) == 2


def test_save_config_writes_effective_values(tmp_path):
    path = tmp_path / "pid.json"
    assert main.main(["--config", str(path), "--kp", "0.7", "--steps", "1", "--save-config"]) == 0

    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['PID']['KP'] == pytest.approx(0.7)
    assert data['SIMULATION']['STEPS'] == 1
    assert PIDConfig.KP == pytest.approx(0.7)


def test_negative_steps_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main.main(["--config", str(tmp_path / "none.json"), "--steps", "-1"])
    assert exc.value.code == 2


def test_on_error_overrides_config_file(tmp_path):
    path = tmp_path / "pid.json"
    path.write_text(json.dumps({'PID': {'DERIVATIVE_ON_MEASUREMENT': True}}), encoding='utf-8')

    assert main.main(["--config", str(path), "--steps", "0", "--on-error"]) == 0
    assert PIDConfig.DERIVATIVE_ON_MEASUREMENT is False


def test_on_measurement_flag(tmp_path):
    assert main.main(["--config", str(tmp_path / "none.json"), "--steps", "0", "--on-measurement"]) == 0
    assert PIDConfig.DERIVATIVE_ON_MEASUREMENT is True


def test_derivative_flags_are_exclusive(tmp_path):
    with pytest.raises(SystemExit):
        main.main(["--config", str(tmp_path / "none.json"), "--on-error", "--on-measurement"])
