# -*- coding: utf-8 -*-
"""
离散 PID 控制器 (Discrete PID Controller)

[组成 Components]
1. ControllerBuilder - 收集参数（带默认值），调用 build() 校验并生成控制器
2. Controller        - 保存控制回路状态，每个采样周期调用一次 compute()

[使用方法 Usage]
pid = (ControllerBuilder.new_with_target(10.0)
       .with_proportional_gain(1.0)
       .with_integral_gain(0.5)
       .build())
output = pid.compute(measurement, elapsed_time)

[注意]
- 只限制输出上限 (max_output)，负输出原样返回
- 积分累加器本身不限幅（无 anti-windup）
- elapsed_time == 0 时微分项为 0（首次采样或时间戳重复）
"""

import sys
from enum import Enum

from utils.logger import Logger

logger = Logger("PID")


class ConfigurationError(ValueError):
    """控制器参数无效 (Invalid controller configuration)"""


class DerivativeMode(Enum):
    """
    微分项计算方式 (Derivative formulation)
    - ON_ERROR: 对误差求导
    - ON_MEASUREMENT: 对测量值求导，目标值突变时不会产生"微分冲击"
    """
    ON_ERROR = "on_error"
    ON_MEASUREMENT = "on_measurement"


class ControllerBuilder:
    """
    控制器参数构建器 (Controller Builder)

    所有 with_* 方法返回自身，支持链式调用；此时不做任何校验，
    负增益也是合法的（反作用回路）。
    """

    def __init__(self, target):
        self.target = target
        self.proportional_gain = 0.0
        self.integral_gain = 0.0
        self.derivative_gain = 0.0
        self.max_output = sys.float_info.max
        self.derivative_mode = DerivativeMode.ON_ERROR

    @classmethod
    def new_with_target(cls, target):
        return cls(target)

    def with_proportional_gain(self, value):
        self.proportional_gain = value
        return self

    def with_integral_gain(self, value):
        self.integral_gain = value
        return self

    def with_derivative_gain(self, value):
        self.derivative_gain = value
        return self

    def with_derivative_on_measurement(self):
        self.derivative_mode = DerivativeMode.ON_MEASUREMENT
        return self

    def with_max_output(self, value):
        self.max_output = value
        return self

    def build(self):
        """
        校验参数并生成控制器
        :raises ConfigurationError: 三个增益全为 0
        """
        return build_controller(self)

    def __repr__(self):
        return (f"ControllerBuilder(target={self.target}, kp={self.proportional_gain}, "
                f"ki={self.integral_gain}, kd={self.derivative_gain}, "
                f"max_output={self.max_output}, mode={self.derivative_mode.name})")


# build_controller 之外创建 Controller 会被拒绝
_BUILD_TOKEN = object()


def build_controller(config):
    """
    校验配置并创建 Controller (Validate and build)

    唯一的校验规则：三个增益不能同时为 0（不会产生任何控制作用）。
    不检查增益大小、max_output 的正负或是否有限。

    :param config: ControllerBuilder 或任何带有相同属性的对象
    :return: Controller
    :raises ConfigurationError: 所有增益为 0
    """
    if (config.proportional_gain == 0.0
            and config.integral_gain == 0.0
            and config.derivative_gain == 0.0):
        logger.warning("拒绝创建控制器: 所有增益为 0", target=config.target)
        raise ConfigurationError("all gains zero")

    controller = Controller(
        config.proportional_gain,
        config.integral_gain,
        config.derivative_gain,
        config.target,
        config.max_output,
        config.derivative_mode,
        _token=_BUILD_TOKEN,
    )
    logger.debug("控制器已创建",
                 kp=config.proportional_gain,
                 ki=config.integral_gain,
                 kd=config.derivative_gain,
                 target=config.target,
                 mode=config.derivative_mode.name)
    return controller


class Controller:
    """
    PID 控制器 (PID Controller)

    只能通过 ControllerBuilder.build() / build_controller() 创建。
    增益、max_output、derivative_mode 创建后只读；target 可随时修改。
    """

    def __init__(self, proportional_gain, integral_gain, derivative_gain,
                 target, max_output, derivative_mode, _token=None):
        if _token is not _BUILD_TOKEN:
            raise TypeError("Controller must be created with ControllerBuilder.build()")

        self._proportional_gain = proportional_gain
        self._integral_gain = integral_gain
        self._derivative_gain = derivative_gain
        self._max_output = max_output
        self._derivative_mode = derivative_mode

        self.target = target

        self.reset()

    # ==========================
    # 只读参数
    # ==========================
    @property
    def proportional_gain(self): return self._proportional_gain

    @property
    def integral_gain(self): return self._integral_gain

    @property
    def derivative_gain(self): return self._derivative_gain

    @property
    def max_output(self): return self._max_output

    @property
    def derivative_mode(self): return self._derivative_mode

    # ==========================
    # 运行状态
    # ==========================
    def reset(self):
        """ 重置内部状态 (积分累加, 上次误差, 上次测量值)，保留参数和目标值 """
        self.accumulated_error = 0.0
        self.last_error = 0.0
        self.last_measurement = 0.0
        return self

    def set_target(self, new_target):
        """ 修改目标值；积分历史保留（可能产生瞬态） """
        self.target = new_target
        return self

    @property
    def state(self):
        """运行状态快照"""
        return {
            'accumulated_error': self.accumulated_error,
            'last_error': self.last_error,
            'last_measurement': self.last_measurement,
        }

    def compute(self, measurement, elapsed_time):
        """
        计算控制输出
        :param measurement: 当前测量值 (Process Variable)
        :param elapsed_time: 距上次调用的时间间隔，首次调用可为 0
        :return: 控制量输出，不超过 max_output
        """
        # 1. 误差
        error = self.target - measurement

        # 2. 积分（每次都累加，不限幅）
        accumulated_error = self.accumulated_error + error * elapsed_time

        # 3. 微分
        if elapsed_time == 0.0:
            derivative = 0.0
        elif self._derivative_mode is DerivativeMode.ON_MEASUREMENT:
            derivative = (measurement - self.last_measurement) / elapsed_time
        else:
            derivative = (error - self.last_error) / elapsed_time

        # 4. 更新状态
        self.last_error = error
        self.last_measurement = measurement
        self.accumulated_error = accumulated_error

        # 5. 合成输出
        output = (self._proportional_gain * error
                  + self._integral_gain * accumulated_error
                  + self._derivative_gain * derivative)

        # 6. 上限限幅（单侧）
        if output > self._max_output:
            return self._max_output
        return output

    def __repr__(self):
        return (f"Controller(target={self.target}, kp={self._proportional_gain}, "
                f"ki={self._integral_gain}, kd={self._derivative_gain}, "
                f"max_output={self._max_output}, mode={self._derivative_mode.name})")
