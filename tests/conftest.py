# -*- coding: utf-8 -*-
import logging

import pytest

from config import PIDConfig, SimulationConfig
from utils import Logger


@pytest.fixture(autouse=True)
def restore_config():
    """配置类是全局的，每个测试后恢复默认值"""
    pid_values = PIDConfig.get_tuning_dict()
    sim_values = SimulationConfig.get_dict()
    yield
    PIDConfig.update_from_dict(pid_values)
    SimulationConfig.update_from_dict(sim_values)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() 会给根日志器加 handler，测试后移除"""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    Logger._console_handler = None
