# -*- coding: utf-8 -*-
"""
仿真参数配置 (Simulation Configuration)

反馈回路仿真：上一步的输出作为下一步的测量值。
"""


class SimulationConfig:
    """仿真参数"""

    INITIAL_MEASUREMENT = 1.0   # 初始测量值 (种子)
    ELAPSED_TIME = 10.0         # 每步时间间隔
    STEPS = 100                 # 执行 0..STEPS 共 STEPS+1 次

    # 数据记录会话名（logs/<name>_<时间>.csv）
    SESSION_NAME = "pid_simulation"

    @classmethod
    def get_dict(cls):
        return {
            'INITIAL_MEASUREMENT': cls.INITIAL_MEASUREMENT,
            'ELAPSED_TIME': cls.ELAPSED_TIME,
            'STEPS': cls.STEPS
        }

    @classmethod
    def parse_dict(cls, data):
        """校验并转换，不修改当前配置；STEPS 不能为负"""
        values = cls.get_dict()
        values['INITIAL_MEASUREMENT'] = float(data.get('INITIAL_MEASUREMENT', values['INITIAL_MEASUREMENT']))
        values['ELAPSED_TIME'] = float(data.get('ELAPSED_TIME', values['ELAPSED_TIME']))
        values['STEPS'] = int(data.get('STEPS', values['STEPS']))
        if values['STEPS'] < 0:
            raise ValueError(f"STEPS must be >= 0, got {values['STEPS']}")
        return values

    @classmethod
    def update_from_dict(cls, data):
        for key, value in cls.parse_dict(data).items():
            setattr(cls, key, value)
