from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import AppConfig
from ..data_sources.base import SalesDataSource
from ..metrics.calculations import SalesReport, build_sales_report, default_options

logger = logging.getLogger(__name__)


class ReportPipeline:
    """调度数据读取与卖家业绩汇总的主流程。"""

    def __init__(self, *, config: AppConfig, data_source: SalesDataSource) -> None:
        """初始化管道。

        参数:
            config: 全局配置对象，提供默认 Top N 等参数。
            data_source: 实际的数据源实现（JSON 文件或模拟）。
        """
        self._config = config
        self._data_source = data_source

    def run(
        self,
        *,
        options: Optional[Any] = None,
        top_n: Optional[int] = None,
    ) -> SalesReport:
        """执行一次汇总。

        参数:
            options: 自定义计算策略，未提供则使用参考策略。
            top_n: 覆盖默认的畅销商品数量，仅在未提供 options 时生效。

        返回:
            SalesReport，包含数据来源与按利润排名的报表行。
        """
        if options is None:
            if top_n is None:
                top_n = self._config.report.top_n_products
            options = default_options(top_n=top_n)

        logger.info("Building sales report from %s", self._data_source.name)
        dataset = self._data_source.fetch_dataset()

        report = build_sales_report(
            source_name=self._data_source.name,
            data=dataset,
            options=options,
        )
        logger.info(
            "Sales report ready: %d sellers, total profit %.2f",
            report.seller_count,
            report.total_profit,
        )
        return report
