# -*- coding: utf-8 -*-
"""
数据记录器 (Data Recorder)

⭐ PID 调试神器！

[功能]
- 逐步记录测量值、输出、误差、积分等数据
- 自动保存为 CSV 文件
- 方便用 Excel 或 QuickPlotter 绘图分析

[使用方法]
with DataRecorder("pid_test_1") as recorder:
    recorder.log(step=0, measurement=1.0, output=3.5, target=10.0,
                 accumulated_error=9.0, last_error=9.0, last_measurement=1.0)
# 保存到 logs/pid_test_1_20260210_143052.csv
"""

import csv
import time
from pathlib import Path
from datetime import datetime

from utils.logger import Logger

logger = Logger("Recorder")


class DataRecorder:
    """数据记录器"""

    # CSV 列定义
    FIELDNAMES = [
        'timestamp',          # 时间戳（秒，相对开始时间）
        'step',               # 步数
        'target',             # 目标值
        'measurement',        # 测量值
        'output',             # PID 输出
        'accumulated_error',  # 积分累加
        'last_error',         # 本步误差
        'last_measurement'    # 本步测量值
    ]

    def __init__(self, session_name="pid_debug", auto_save_interval=100, log_dir="logs"):
        """
        初始化记录器
        :param session_name: 会话名称（用于文件命名）
        :param auto_save_interval: 自动保存间隔（记录条数）
        :param log_dir: 输出目录
        """
        self.session_name = session_name
        self.auto_save_interval = auto_save_interval

        # 数据缓冲区
        self.buffer = []
        self.record_count = 0

        self.start_time = time.time()

        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.filename = self.log_dir / f"{session_name}_{timestamp}.csv"

        logger.info("数据记录器已启动", file=self.filename)

    def log(self, step=0, target=0.0, measurement=0.0, output=0.0,
            accumulated_error=0.0, last_error=0.0, last_measurement=0.0):
        """
        记录一条数据
        """
        timestamp = time.time() - self.start_time

        record = {
            'timestamp': f"{timestamp:.3f}",
            'step': step,
            'target': target,
            'measurement': measurement,
            'output': output,
            'accumulated_error': accumulated_error,
            'last_error': last_error,
            'last_measurement': last_measurement
        }

        self.buffer.append(record)
        self.record_count += 1

        # 自动保存
        if self.record_count % self.auto_save_interval == 0:
            self.save()

    def save(self):
        """保存缓冲区数据到文件；失败时保留缓冲区"""
        if not self.buffer:
            return True

        # 判断文件是否存在（决定是否写表头）
        file_exists = self.filename.exists()

        try:
            with open(self.filename, 'a', newline='', encoding='utf-8') as f:
                writer = csv.DictWriter(f, fieldnames=self.FIELDNAMES)

                if not file_exists:
                    writer.writeheader()

                writer.writerows(self.buffer)
        except OSError as e:
            logger.error("保存失败", file=self.filename, reason=e)
            return False

        logger.debug(f"已保存 {len(self.buffer)} 条记录", total=self.record_count)
        self.buffer.clear()
        return True

    def close(self):
        """关闭记录器（保存剩余数据）"""
        self.save()
        duration = time.time() - self.start_time
        logger.info("记录完成",
                    records=self.record_count,
                    duration=f"{duration:.1f}s",
                    file=self.filename)

    def __enter__(self):
        """支持 with 语句"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """退出时自动保存"""
        self.close()


class QuickPlotter:
    """
    快速绘图工具（需要 pandas + matplotlib: pip install .[plot]）

    [使用方法]
    QuickPlotter.plot_csv("logs/pid_simulation_20260210_143052.csv")
    """

    @staticmethod
    def plot_csv(csv_file, show_plot=True, save_fig=True):
        """
        从 CSV 文件绘制仿真曲线
        :param csv_file: CSV 文件路径
        :param show_plot: 是否显示图形
        :param save_fig: 是否保存图片
        :return: matplotlib Figure，缺少依赖时返回 None
        """
        try:
            import pandas as pd
            import matplotlib
            if not show_plot:
                matplotlib.use('Agg')
            import matplotlib.pyplot as plt
        except ImportError as e:
            logger.error("需要安装: pip install pandas matplotlib", reason=e)
            return None

        df = pd.read_csv(csv_file)

        fig, axes = plt.subplots(2, 1, figsize=(12, 8), sharex=True)
        fig.suptitle(f'PID 仿真数据分析 - {Path(csv_file).name}', fontsize=14)

        # 子图1: 测量值 / 输出 / 目标值
        axes[0].plot(df['step'], df['measurement'], label='Measurement', color='blue', alpha=0.7)
        axes[0].plot(df['step'], df['output'], label='Output', color='orange', alpha=0.7)
        axes[0].plot(df['step'], df['target'], label='Target', color='gray', linestyle='--', alpha=0.5)
        axes[0].set_ylabel('值 (Value)')
        axes[0].set_title('输出曲线 (Output)')
        axes[0].legend()
        axes[0].grid(True, alpha=0.3)

        # 子图2: 误差 / 积分
        axes[1].plot(df['step'], df['last_error'], label='Error', color='red', alpha=0.7)
        axes[1].plot(df['step'], df['accumulated_error'], label='Accumulated Error', color='purple', alpha=0.7)
        axes[1].axhline(y=0, color='gray', linestyle='--', alpha=0.5)
        axes[1].set_xlabel('步数 (Step)')
        axes[1].set_ylabel('误差 (Error)')
        axes[1].set_title('误差曲线 (Error)')
        axes[1].legend()
        axes[1].grid(True, alpha=0.3)

        plt.tight_layout()

        if save_fig:
            img_file = Path(csv_file).with_suffix('.png')
            plt.savefig(img_file, dpi=150)
            logger.info("图表已保存", file=img_file)

        if show_plot:
            plt.show()

        return fig
