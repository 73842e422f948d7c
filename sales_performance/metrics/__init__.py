"""卖家业绩分析与参考计算策略的统一入口。

分析流程本身是纯函数 ``analyze_sales_data``；收入与奖金的算法以策略
形式注入，``default_options`` 提供参考实现。
"""

from .calculations import (
    AnalysisOptions,
    RankedSeller,
    ReportRow,
    SalesReport,
    SellerStat,
    TopProduct,
    analyze_sales_data,
    build_sales_report,
    default_options,
    normalize_amount,
)
from .strategies import calculate_bonus_by_profit, calculate_simple_revenue

__all__ = [
    "AnalysisOptions",
    "RankedSeller",
    "ReportRow",
    "SalesReport",
    "SellerStat",
    "TopProduct",
    "analyze_sales_data",
    "build_sales_report",
    "default_options",
    "normalize_amount",
    "calculate_bonus_by_profit",
    "calculate_simple_revenue",
]
