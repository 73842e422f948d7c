"""提供卖家业绩报表的结构化与文本格式化工具。"""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..metrics.calculations import ReportRow, SalesReport


def rows_to_dicts(rows: Sequence[ReportRow]) -> List[Dict[str, object]]:
    """将报表行转换为可 JSON 序列化的字典列表，保持名次顺序。"""
    return [row.to_dict() for row in rows]


def report_to_dict(report: SalesReport) -> Dict[str, object]:
    """
    功能说明:
        将 SalesReport 转换为可 JSON 序列化的字典。
    参数:
        report (SalesReport): 报表对象。
    返回:
        Dict[str, object]: 序列化后的报表结构。
    """
    return {
        "source": report.source_name,
        "seller_count": report.seller_count,
        "totals": {
            "revenue": report.total_revenue,
            "profit": report.total_profit,
            "bonus": report.total_bonus,
            "sales_count": report.total_sales,
        },
        "sellers": rows_to_dicts(report.rows),
    }


def _format_money(value: float) -> str:
    return format(value, ",.2f")


def _format_seller_line(idx: int, row: ReportRow) -> str:
    """
    功能说明:
        将单个卖家的业绩格式化为人类可读的文本。
    参数:
        idx (int): 名次，从 1 开始。
        row (ReportRow): 报表行。
    返回:
        str: 格式化后的文本行。
    """
    if row.top_products:
        top = ", ".join(f"{product.sku} x{product.quantity}" for product in row.top_products[:3])
    else:
        top = "n/a"
    return (
        f"{idx}. {row.name} ({row.seller_id}) - Revenue {_format_money(row.revenue)}, "
        f"Profit {_format_money(row.profit)}, Sales {row.sales_count}, "
        f"Bonus {_format_money(row.bonus)}, Top SKUs {top}"
    )


def format_text_report(report: SalesReport) -> str:
    """
    功能说明:
        生成适合在控制台展示的卖家业绩报表文本。
    参数:
        report (SalesReport): 报表对象。
    返回:
        str: 多行字符串，包含数据来源、合计与按利润排名的卖家列表。
    """
    lines: List[str] = []
    lines.append(f"Source: {report.source_name}")
    lines.append(
        f"Totals: Revenue {_format_money(report.total_revenue)}, "
        f"Profit {_format_money(report.total_profit)}, "
        f"Bonus {_format_money(report.total_bonus)}, "
        f"Sales {report.total_sales}, Sellers {report.seller_count}"
    )
    if not report.rows:
        lines.append("No seller records available.")
        return "\n".join(lines)

    lines.append("Sellers (by profit):")
    for idx, row in enumerate(report.rows, start=1):
        lines.append(_format_seller_line(idx, row))

    return "\n".join(lines)
