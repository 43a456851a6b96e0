# -*- coding: utf-8 -*-
"""
程序入口 (Program Entry Point)

反馈回路仿真：把 PID 输出当作下一次的测量值，逐步打印输出。

[示例]
python main.py                              # 使用 pid_config.json / 默认值
python main.py --kp 0.5 --ki 0 --kd 0.1 --steps 50
python main.py --record --plot              # 记录 CSV 并绘图
"""

import argparse
import sys

from config import ConfigManager, PIDConfig, SimulationConfig
from core import ConfigurationError, run_feedback_loop
from utils import DataRecorder, Logger, QuickPlotter

logger = Logger("Main")


def non_negative_int(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="PID feedback loop simulation")
    parser.add_argument("--config", default=ConfigManager.CONFIG_FILE,
                        help="JSON config file (default: %(default)s)")
    parser.add_argument("--target", type=float, help="setpoint")
    parser.add_argument("--kp", type=float, help="proportional gain")
    parser.add_argument("--ki", type=float, help="integral gain")
    parser.add_argument("--kd", type=float, help="derivative gain")
    parser.add_argument("--max-output", type=float, help="upper output clamp")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--on-measurement", dest="on_measurement", action="store_const",
                      const=True, default=None, help="compute the derivative on the measurement")
    mode.add_argument("--on-error", dest="on_measurement", action="store_const",
                      const=False, help="compute the derivative on the error")

    parser.add_argument("--seed", type=float, help="initial measurement")
    parser.add_argument("--dt", type=float, help="elapsed time per step")
    parser.add_argument("--steps", type=non_negative_int, help="last step index")
    parser.add_argument("--record", action="store_true", help="record steps to logs/*.csv")
    parser.add_argument("--plot", action="store_true", help="plot the recording (implies --record)")
    parser.add_argument("--save-config", action="store_true",
                        help="write the effective parameters back to --config")
    parser.add_argument("--log-file", action="store_true", help="also log to logs/system_*.log")
    return parser.parse_args(argv)


def apply_overrides(args):
    """命令行参数覆盖配置文件中的值"""
    pid_overrides = {
        'KP': args.kp,
        'KI': args.ki,
        'KD': args.kd,
        'TARGET': args.target,
        'MAX_OUTPUT': args.max_output,
        'DERIVATIVE_ON_MEASUREMENT': args.on_measurement
    }
    PIDConfig.update_from_dict({k: v for k, v in pid_overrides.items() if v is not None})

    sim_overrides = {
        'INITIAL_MEASUREMENT': args.seed,
        'ELAPSED_TIME': args.dt,
        'STEPS': args.steps
    }
    SimulationConfig.update_from_dict({k: v for k, v in sim_overrides.items() if v is not None})


def main(argv=None):
    args = parse_args(argv)

    Logger.setup_console()
    if args.log_file:
        Logger.enable_file_logging()

    manager = ConfigManager(args.config)
    apply_overrides(args)

    try:
        pid = manager.to_builder().build()
    except ConfigurationError as e:
        logger.error("无效的 PID 参数", reason=e)
        return 2

    if args.save_config:
        manager.save_config()

    recorder = None
    if args.record or args.plot:
        recorder = DataRecorder(SimulationConfig.SESSION_NAME)

    try:
        outputs = run_feedback_loop(pid,
                                    SimulationConfig.INITIAL_MEASUREMENT,
                                    SimulationConfig.ELAPSED_TIME,
                                    SimulationConfig.STEPS,
                                    recorder=recorder)
    finally:
        if recorder is not None:
            recorder.close()

    for i, output in enumerate(outputs):
        print(f"{i} : {output}")

    if args.plot:
        QuickPlotter.plot_csv(recorder.filename)

    return 0


if __name__ == "__main__":
    sys.exit(main())
