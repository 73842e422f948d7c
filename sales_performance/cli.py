"""卖家业绩报表的命令行入口，串联数据读取、分析与报告输出。"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, DataSourceConfig, ReportConfig
from .data_sources.base import SalesDataSource
from .data_sources.json_file import JsonFileDataSource
from .data_sources.mock_records import create_default_mock_source
from .errors import SalesReportError
from .pipeline.pipeline import ReportPipeline
from .reporting.formatter import format_text_report, report_to_dict

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    功能说明:
        构建并解析命令行参数，返回解析后的命名空间。
    参数:
        argv (Optional[Sequence[str]]): 参数列表，为空时读取 sys.argv。
    返回:
        argparse.Namespace: 包含用户指定的运行选项。
    """
    parser = argparse.ArgumentParser(description="Seller sales performance report")
    parser.add_argument(
        "--mode",
        choices=["file", "mock"],
        help="Read --input as JSON or generate mock data. Defaults to file when an input is given.",
    )
    parser.add_argument("--input", type=Path, help="Path to the JSON dataset (sellers/products/purchase_records).")
    parser.add_argument("--seed", type=int, help="Seed for the mock data source.")
    parser.add_argument("--top-n", type=int, help="How many top products to keep per seller.")
    parser.add_argument("--output-json", type=Path, help="Path to save the JSON payload.")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Logging level.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    """
    功能说明:
        以环境变量配置为基础，用命令行参数覆盖对应字段。
    参数:
        args (argparse.Namespace): 命令行解析得到的参数集合。
    返回:
        AppConfig: 用于后续管道运行的配置对象。
    """
    env_config = AppConfig.from_env()
    report = ReportConfig(
        top_n_products=args.top_n if args.top_n is not None else env_config.report.top_n_products,
    )
    data_source = DataSourceConfig(
        input_path=str(args.input) if args.input else env_config.data_source.input_path,
        mock_seed=args.seed if args.seed is not None else env_config.data_source.mock_seed,
    )
    log_level = args.log_level or env_config.log_level.upper()
    if log_level not in LOG_LEVELS:
        logger.warning("Unknown log level %r, falling back to INFO", log_level)
        log_level = "INFO"
    return AppConfig(report=report, data_source=data_source, log_level=log_level)


def build_data_source(config: AppConfig, mode: Optional[str]) -> SalesDataSource:
    """
    功能说明:
        根据运行模式与配置选择数据源。
    参数:
        config (AppConfig): 提供输入路径与模拟种子。
        mode (Optional[str]): ``file``、``mock`` 或 None（有输入路径时按 file 处理）。
    返回:
        SalesDataSource: 选定的数据源。
    """
    if mode is None:
        mode = "file" if config.data_source.input_path else "mock"
    if mode == "file":
        if not config.data_source.input_path:
            raise SalesReportError("File mode requires --input or SALES_REPORT_INPUT")
        return JsonFileDataSource(config.data_source.input_path)
    return create_default_mock_source(config)


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    """
    功能说明:
        命令行主入口：读取参数、执行管道、输出报告并根据需要写出 JSON。
    参数:
        argv (Optional[Sequence[str]]): 参数列表，为空时读取 sys.argv。
    返回:
        int: 进程退出码，成功为 0，报表错误为 1。
    """
    args = parse_args(argv)
    config = build_config(args)
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

    try:
        data_source = build_data_source(config, args.mode)
        pipeline = ReportPipeline(config=config, data_source=data_source)
        report = pipeline.run()
    except SalesReportError as exc:
        logger.error("Sales report failed: %s", exc)
        return 1

    print(format_text_report(report))

    if args.output_json:
        payload = report_to_dict(report)
        args.output_json.parent.mkdir(parents=True, exist_ok=True)
        args.output_json.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"JSON report written to: {args.output_json}")

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_cli())
