# -*- coding: utf-8 -*-
"""
工具模块 (Utilities)

- Logger: 结构化日志
- DataRecorder: 仿真数据记录 (CSV)
- QuickPlotter: 记录数据绘图（需要 plot 扩展依赖）
"""

from .data_recorder import DataRecorder, QuickPlotter
from .logger import Logger

__all__ = ['DataRecorder', 'QuickPlotter', 'Logger']
