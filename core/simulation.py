# -*- coding: utf-8 -*-
"""
反馈回路仿真 (Feedback Loop Simulation)

把上一次的输出直接当作下一次的测量值，观察控制器输出序列。
不模拟任何真实被控对象，只用来演示和调参。
"""

import numpy as np

from utils.logger import Logger

logger = Logger("Simulation")


def run_feedback_loop(controller, initial_measurement, elapsed_time, steps, recorder=None):
    """
    运行反馈回路仿真
    :param controller: 已创建的 Controller
    :param initial_measurement: 初始测量值 (种子)
    :param elapsed_time: 每一步的时间间隔
    :param steps: 最后一步的序号，共执行 steps + 1 次 compute
    :param recorder: 可选 DataRecorder，每步记录一行
    :return: numpy 数组，长度 steps + 1
    :raises ValueError: steps 为负
    """
    if steps < 0:
        raise ValueError(f"steps must be >= 0, got {steps}")

    outputs = np.empty(steps + 1, dtype=float)
    measurement = initial_measurement

    logger.info("仿真开始", seed=initial_measurement, dt=elapsed_time, steps=steps)

    for i in range(steps + 1):
        output = controller.compute(measurement, elapsed_time)
        outputs[i] = output

        if recorder is not None:
            recorder.log(step=i, measurement=measurement, output=output,
                         target=controller.target, **controller.state)

        measurement = output

    logger.info("仿真结束", final_output=outputs[-1])
    return outputs
