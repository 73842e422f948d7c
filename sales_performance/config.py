"""销售业绩报表的配置模型，支持环境变量加载。"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TOP_N_PRODUCTS = 10
DEFAULT_MOCK_SEED = 2024


@dataclass
class ReportConfig:
    """
    定义报表层面的计算参数。

    属性:
        top_n_products (int): 每个卖家保留的畅销 SKU 数量。
    """

    top_n_products: int = DEFAULT_TOP_N_PRODUCTS

    @classmethod
    def from_env(cls, prefix: str = "SALES_REPORT_") -> "ReportConfig":
        """
        功能说明:
            从环境变量加载报表计算参数。
        参数:
            prefix (str): 环境变量前缀。
        返回:
            ReportConfig: 包含 TopN 等参数的实例。
        """
        top_n_products = int(os.getenv(f"{prefix}TOP_N", DEFAULT_TOP_N_PRODUCTS))
        return cls(top_n_products=top_n_products)


@dataclass
class DataSourceConfig:
    """
    描述报表输入数据的来源。

    属性:
        input_path (Optional[str]): JSON 输入文件路径，为空时使用模拟数据。
        mock_seed (int): 模拟数据源的伪随机种子。
    """

    input_path: Optional[str] = None
    mock_seed: int = DEFAULT_MOCK_SEED

    @classmethod
    def from_env(cls, prefix: str = "SALES_REPORT_") -> "DataSourceConfig":
        """
        功能说明:
            从环境变量读取数据源设置。
        参数:
            prefix (str): 变量名前缀。
        返回:
            DataSourceConfig: 输入路径与模拟种子配置。
        """
        input_path = os.getenv(f"{prefix}INPUT") or None
        mock_seed = int(os.getenv(f"{prefix}MOCK_SEED", DEFAULT_MOCK_SEED))
        return cls(input_path=input_path, mock_seed=mock_seed)


@dataclass
class AppConfig:
    """
    顶层组合配置，聚合报表参数、数据源设置与日志级别。

    属性:
        report (ReportConfig): 报表计算参数。
        data_source (DataSourceConfig): 数据源设置。
        log_level (str): 日志级别名称。
    """

    report: ReportConfig
    data_source: DataSourceConfig
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        功能说明:
            统一从环境变量载入所有子配置。
        返回:
            AppConfig: 完整的应用配置实例。
        """
        return cls(
            report=ReportConfig.from_env(),
            data_source=DataSourceConfig.from_env(),
            log_level=os.getenv("SALES_REPORT_LOG_LEVEL", "INFO").upper(),
        )
