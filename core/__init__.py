# -*- coding: utf-8 -*-
"""
核心模块导出 (Core)

PID 控制器与反馈回路仿真。
"""

from .pid import (
    Controller,
    ControllerBuilder,
    ConfigurationError,
    DerivativeMode,
    build_controller,
)
from .simulation import run_feedback_loop

__all__ = [
    'Controller',
    'ControllerBuilder',
    'ConfigurationError',
    'DerivativeMode',
    'build_controller',
    'run_feedback_loop'
]
