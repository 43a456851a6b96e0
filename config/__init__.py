# -*- coding: utf-8 -*-
"""
配置模块统一接口 (Configuration Module)

[使用方法 Usage]
    from config import ConfigManager, PIDConfig, SimulationConfig

    PIDConfig.KP = 0.5
    SimulationConfig.STEPS = 200

    manager = ConfigManager("pid_config.json")   # 自动加载（文件存在时）
    pid = manager.to_builder().build()
    manager.save_config()

[说明]
只保存调参参数，不保存控制器运行状态（积分、上次误差等）。
"""

import json
from datetime import datetime
from pathlib import Path

from core.pid import ControllerBuilder
from utils.logger import Logger
from .pid_config import PIDConfig
from .simulation_config import SimulationConfig

logger = Logger("Config")


class ConfigManager:
    """
    配置管理器 (Configuration Manager)
    提供统一的配置加载/保存接口
    """

    CONFIG_FILE = "pid_config.json"
    VERSION = "1.0"

    def __init__(self, config_file=None, auto_load=True):
        """
        :param config_file: JSON 配置文件路径，默认 CONFIG_FILE
        :param auto_load: 创建时自动加载
        """
        self.config_file = Path(config_file or ConfigManager.CONFIG_FILE)

        if auto_load:
            self.load_config()

    # ==========================
    # 配置保存/加载
    # ==========================
    def load_config(self):
        """
        从 JSON 文件加载配置；文件不存在或无效时保留默认值
        Load configuration from file. Returns True when values were loaded.
        """
        if not self.config_file.exists():
            logger.info("配置文件不存在，使用默认值", path=self.config_file)
            return False

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value must be an object")

            # 两部分都校验通过后再赋值，失败时保持原值
            pid_values = PIDConfig.parse_dict(data.get('PID', {}))
            sim_values = SimulationConfig.parse_dict(data.get('SIMULATION', {}))

        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error("加载失败，使用默认值", path=self.config_file, reason=e)
            return False

        PIDConfig.update_from_dict(pid_values)
        SimulationConfig.update_from_dict(sim_values)

        logger.info("已加载配置", path=self.config_file)
        logger.info(f"PID: Kp={PIDConfig.KP:.3f}, Ki={PIDConfig.KI:.3f}, Kd={PIDConfig.KD:.3f}")
        return True

    def save_config(self):
        """
        保存当前配置到 JSON 文件
        Save configuration to file. Returns True on success.
        """
        data = {
            'PID': PIDConfig.get_tuning_dict(),
            'SIMULATION': SimulationConfig.get_dict(),
            'version': ConfigManager.VERSION,
            'last_updated': self._get_timestamp()
        }

        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
        except OSError as e:
            logger.error("保存失败", path=self.config_file, reason=e)
            return False

        logger.info("已保存配置", path=self.config_file)
        return True

    def to_builder(self):
        """
        用当前 PIDConfig 创建 ControllerBuilder（尚未校验）
        """
        builder = (ControllerBuilder.new_with_target(PIDConfig.TARGET)
                   .with_proportional_gain(PIDConfig.KP)
                   .with_integral_gain(PIDConfig.KI)
                   .with_derivative_gain(PIDConfig.KD)
                   .with_max_output(PIDConfig.MAX_OUTPUT))
        if PIDConfig.DERIVATIVE_ON_MEASUREMENT:
            builder.with_derivative_on_measurement()
        return builder

    def _get_timestamp(self):
        """获取当前时间戳"""
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


# 导出所有配置类
__all__ = [
    'PIDConfig',         # PID 参数
    'SimulationConfig',  # 仿真参数
    'ConfigManager'      # 配置管理器
]
