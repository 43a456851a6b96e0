# -*- coding: utf-8 -*-
"""
结构化日志工具 (Structured Logger)

[功能]
- 统一的日志格式
- 不同级别的日志（DEBUG, INFO, WARNING, ERROR）
- 控制台输出由程序入口启用，可选同时写入文件

[使用方法]
from utils.logger import Logger

logger = Logger("Controller")
logger.info("控制器已创建", kp=0.5, ki=0.0)
logger.warning("配置文件无效", path="pid_config.json")

# 程序入口 (main.py) 中:
Logger.setup_console()         # 输出到控制台
Logger.enable_file_logging()   # 追加 logs/system_<时间>.log

作为库使用时不会自动添加任何 handler，由调用方决定日志去向。
"""

import logging
import sys
from pathlib import Path
from datetime import datetime


class Logger:
    """结构化日志器"""

    # 全局设置
    _console_handler = None
    _file_handler = None
    _log_dir = Path("logs")

    FORMAT = '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s'
    DATEFMT = '%H:%M:%S'

    def __init__(self, name):
        """
        初始化日志器
        :param name: 模块名称
        """
        self.logger = logging.getLogger(name)

    @staticmethod
    def _formatter():
        return logging.Formatter(Logger.FORMAT, datefmt=Logger.DATEFMT)

    @staticmethod
    def setup_console(level=logging.DEBUG):
        """
        设置全局日志配置（控制台），重复调用只添加一次
        Returns the console handler.
        """
        root_logger = logging.getLogger()
        if Logger._console_handler in root_logger.handlers:
            return Logger._console_handler

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(Logger._formatter())

        root_logger.setLevel(level)
        root_logger.addHandler(console_handler)
        Logger._console_handler = console_handler
        return console_handler

    @staticmethod
    def enable_file_logging(log_dir=None):
        """
        启用文件日志（只会添加一次）
        Returns the log file path.
        """
        if Logger._file_handler is not None:
            return Path(Logger._file_handler.baseFilename)

        log_dir = Path(log_dir) if log_dir is not None else Logger._log_dir
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"system_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(Logger._formatter())
        logging.getLogger().addHandler(file_handler)
        Logger._file_handler = file_handler

        logging.getLogger("Logger").info(f"日志文件: {log_file}")
        return log_file

    def debug(self, message, **kwargs):
        """调试信息"""
        self.logger.debug(self._format_message(message, kwargs))

    def info(self, message, **kwargs):
        """一般信息"""
        self.logger.info(self._format_message(message, kwargs))

    def warning(self, message, **kwargs):
        """警告信息"""
        self.logger.warning(self._format_message(message, kwargs))

    def error(self, message, **kwargs):
        """错误信息"""
        self.logger.error(self._format_message(message, kwargs))

    @staticmethod
    def _format_message(message, kwargs):
        """格式化消息（添加键值对参数）"""
        if not kwargs:
            return message

        params = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        return f"{message} ({params})"
