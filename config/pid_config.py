# -*- coding: utf-8 -*-
"""
PID 控制参数配置 (PID Control Configuration)

[调参指南 Tuning Guide]
- KP (比例): 主要动力，越大响应越快，但容易震荡
- KI (积分): 消除稳态误差；注意积分累加器不限幅
- KD (微分): 阻尼作用，抑制震荡，相当于"刹车"

[微分方式]
- DERIVATIVE_ON_MEASUREMENT = False: 对误差求导
- DERIVATIVE_ON_MEASUREMENT = True: 对测量值求导，目标值突变时没有微分冲击

三个增益不能同时为 0，否则 build() 会抛出 ConfigurationError。
"""

import sys


class PIDConfig:
    """PID 控制参数 (PID Control Parameters)"""

    # ==========================
    # PID 三要素
    # ==========================
    KP = 0.01   # 比例系数 (Proportional Gain)
    KI = 0.01   # 积分系数 (Integral Gain)
    KD = 0.01   # 微分系数 (Derivative Gain)

    # ==========================
    # 目标与限幅
    # ==========================
    TARGET = 1000.0                     # 目标值 (Setpoint)
    MAX_OUTPUT = sys.float_info.max     # 输出上限，默认不限
    DERIVATIVE_ON_MEASUREMENT = False

    @classmethod
    def get_tuning_dict(cls):
        """
        返回可调参数字典（用于保存）
        Returns tunable parameters as dict
        """
        return {
            'KP': cls.KP,
            'KI': cls.KI,
            'KD': cls.KD,
            'TARGET': cls.TARGET,
            'MAX_OUTPUT': cls.MAX_OUTPUT,
            'DERIVATIVE_ON_MEASUREMENT': cls.DERIVATIVE_ON_MEASUREMENT
        }

    @classmethod
    def parse_dict(cls, data):
        """
        校验并转换字典中的参数，不修改当前配置
        :raises ValueError: 数值无效，或 DERIVATIVE_ON_MEASUREMENT 不是布尔值
        """
        values = cls.get_tuning_dict()
        for key in ('KP', 'KI', 'KD', 'TARGET', 'MAX_OUTPUT'):
            values[key] = float(data.get(key, values[key]))

        on_measurement = data.get('DERIVATIVE_ON_MEASUREMENT', values['DERIVATIVE_ON_MEASUREMENT'])
        if not isinstance(on_measurement, bool):
            raise ValueError(f"DERIVATIVE_ON_MEASUREMENT must be true or false, got {on_measurement!r}")
        values['DERIVATIVE_ON_MEASUREMENT'] = on_measurement
        return values

    @classmethod
    def update_from_dict(cls, data):
        """
        从字典更新参数（用于加载配置）；全部校验通过后才赋值
        Update parameters from dict
        """
        for key, value in cls.parse_dict(data).items():
            setattr(cls, key, value)
