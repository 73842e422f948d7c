"""按卖家汇总收入、利润与畅销商品，并按利润排名分配奖金。"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..data_sources.base import DATASET_KEYS
from ..errors import InvalidInputError, MissingStrategyError
from .numbers import as_number
from .strategies import calculate_bonus_by_profit, calculate_simple_revenue

logger = logging.getLogger(__name__)

RevenueStrategy = Callable[[Mapping[str, Any], Mapping[str, Any]], float]
BonusStrategy = Callable[[int, int, "SellerStat"], float]

TOP_PRODUCTS_LIMIT = 10
_CENT = Decimal("0.01")


@dataclass
class AnalysisOptions:
    """
    注入分析流程的计算策略。

    属性:
        calculate_revenue (RevenueStrategy | None): ``(item, product) -> number``。
        calculate_bonus (BonusStrategy | None): ``(index, total, seller) -> number``。
        top_n (int): 每个卖家保留的畅销 SKU 数量。
    """

    calculate_revenue: Optional[RevenueStrategy] = None
    calculate_bonus: Optional[BonusStrategy] = None
    top_n: int = TOP_PRODUCTS_LIMIT


def default_options(top_n: int = TOP_PRODUCTS_LIMIT) -> AnalysisOptions:
    """返回装配了参考收入与奖金策略的选项。"""
    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=calculate_bonus_by_profit,
        top_n=top_n,
    )


@dataclass
class SellerStat:
    """
    聚合阶段的卖家累加器，仅在遍历购买记录时被修改。

    属性:
        id (Any): 卖家原始标识。
        name (str): ``first_name last_name``。
        revenue (float): 购买记录 total_amount 之和。
        profit (float): 行项目收入减成本之和。
        sales_count (int): 命中该卖家的购买记录数。
        products_sold (Dict[str, float]): SKU 到累计销量的映射，按首次售出排序。
    """

    id: Any
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    products_sold: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TopProduct:
    """单个 SKU 的累计销量。"""

    sku: str
    quantity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"sku": self.sku, "quantity": self.quantity}


@dataclass(frozen=True)
class RankedSeller:
    """排名完成后的只读卖家快照，附带名次、奖金与畅销商品。"""

    id: Any
    name: str
    revenue: float
    profit: float
    sales_count: int
    products_sold: Mapping[str, float]
    rank: int
    bonus: float
    top_products: Tuple[TopProduct, ...]


@dataclass(frozen=True)
class ReportRow:
    """
    报表中的一行，金额均已保留两位小数。

    属性:
        seller_id (str): 卖家标识。
        name (str): 卖家姓名。
        revenue (float): 收入。
        profit (float): 利润。
        sales_count (int): 购买记录数。
        top_products (List[TopProduct]): 至多 top_n 个畅销 SKU，按销量降序。
        bonus (float): 奖金。
    """

    seller_id: str
    name: str
    revenue: float
    profit: float
    sales_count: int
    top_products: List[TopProduct]
    bonus: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seller_id": self.seller_id,
            "name": self.name,
            "revenue": self.revenue,
            "profit": self.profit,
            "sales_count": self.sales_count,
            "top_products": [product.to_dict() for product in self.top_products],
            "bonus": self.bonus,
        }


def analyze_sales_data(data: Any, options: Any) -> List[ReportRow]:
    """
    功能说明:
        校验输入与策略后，按卖家汇总购买记录，按利润降序排名并计算奖金，
        返回格式化后的报表行。纯函数，不修改输入。
    参数:
        data (Any): 含 sellers、products、purchase_records 三个非空列表的映射。
        options (Any): ``AnalysisOptions`` 或含 calculate_revenue/calculate_bonus 的映射。
    返回:
        List[ReportRow]: 每个卖家一行，按利润降序；利润相同时保持输入顺序。
    异常:
        InvalidInputError: 输入结构不合法。
        MissingStrategyError: 缺少任一计算策略。
    """
    validate_input(data)
    calculate_revenue, calculate_bonus = resolve_strategies(options)
    top_n = _resolve_top_n(options)

    stats, seller_index = build_seller_index(data["sellers"])
    product_index = build_product_index(data["products"])
    aggregate_purchases(data["purchase_records"], seller_index, product_index, calculate_revenue)
    ranked = rank_sellers(stats, calculate_bonus, top_n=top_n)
    return format_rows(ranked)


def validate_input(data: Any) -> None:
    """
    功能说明:
        检查输入是映射且三个集合均为非空列表，集合元素均为映射。
        任一条件不满足即抛出，不做部分处理。
    参数:
        data (Any): 原始输入。
    异常:
        InvalidInputError: 任一检查失败。
    """
    if not isinstance(data, Mapping):
        raise InvalidInputError(
            f"Input data must be a mapping with {', '.join(DATASET_KEYS)}, "
            f"got {type(data).__name__}"
        )
    for key in DATASET_KEYS:
        collection = data.get(key)
        if not isinstance(collection, (list, tuple)):
            raise InvalidInputError(
                f"'{key}' must be a list, got {type(collection).__name__}"
            )
        if not collection:
            raise InvalidInputError(f"'{key}' must not be empty")
        for position, entry in enumerate(collection):
            if not isinstance(entry, Mapping):
                raise InvalidInputError(
                    f"'{key}[{position}]' must be an object, got {type(entry).__name__}"
                )


def resolve_strategies(options: Any) -> Tuple[RevenueStrategy, BonusStrategy]:
    """
    功能说明:
        从选项中取出收入与奖金策略，二者都必须可调用；同时校验 top_n 可转换为整数。
    参数:
        options (Any): ``AnalysisOptions``、映射或任意带同名属性的对象。
    返回:
        Tuple[RevenueStrategy, BonusStrategy]: (收入策略, 奖金策略)。
    异常:
        MissingStrategyError: 选项为空、任一策略缺失/不可调用，或 top_n 无法转换为整数。
    """
    if options is None:
        raise MissingStrategyError(
            "Analysis options with calculate_revenue and calculate_bonus are required"
        )
    calculate_revenue = _option(options, "calculate_revenue")
    calculate_bonus = _option(options, "calculate_bonus")
    missing = [
        name
        for name, strategy in (
            ("calculate_revenue", calculate_revenue),
            ("calculate_bonus", calculate_bonus),
        )
        if not callable(strategy)
    ]
    if missing:
        raise MissingStrategyError(f"Missing calculation strategies: {', '.join(missing)}")
    _resolve_top_n(options)
    return calculate_revenue, calculate_bonus


def build_seller_index(
    sellers: Sequence[Mapping[str, Any]],
) -> Tuple[List[SellerStat], Dict[str, SellerStat]]:
    """
    功能说明:
        为每个输入卖家创建累加器，并按标识建立索引。
    参数:
        sellers (Sequence[Mapping[str, Any]]): 卖家列表。
    返回:
        Tuple[List[SellerStat], Dict[str, SellerStat]]: 按输入顺序的累加器列表与索引。
    """
    stats = [
        SellerStat(
            id=seller.get("id"),
            name=f"{seller.get('first_name', '')} {seller.get('last_name', '')}",
        )
        for seller in sellers
    ]
    # 标识重复时后出现的卖家占用索引，先出现的仍保留在列表中。
    seller_index = {_index_key(stat.id): stat for stat in stats}
    return stats, seller_index


def build_product_index(products: Sequence[Mapping[str, Any]]) -> Dict[str, Mapping[str, Any]]:
    """按 SKU 建立商品索引，SKU 重复时后者覆盖前者。"""
    return {_index_key(product.get("sku")): product for product in products}


def aggregate_purchases(
    records: Sequence[Mapping[str, Any]],
    seller_index: Mapping[str, SellerStat],
    product_index: Mapping[str, Mapping[str, Any]],
    calculate_revenue: RevenueStrategy,
) -> None:
    """
    功能说明:
        按输入顺序把购买记录累加到对应卖家。未知卖家的记录整条跳过，
        未知 SKU 的行项目单独跳过，二者都不抛异常。
    参数:
        records (Sequence[Mapping[str, Any]]): 购买记录。
        seller_index (Mapping[str, SellerStat]): 卖家索引。
        product_index (Mapping[str, Mapping[str, Any]]): 商品索引。
        calculate_revenue (RevenueStrategy): 行项目收入策略。
    """
    skipped_records = 0
    skipped_items = 0

    for record in records:
        seller = seller_index.get(_index_key(record.get("seller_id")))
        if seller is None:
            skipped_records += 1
            logger.debug("Skipping purchase record for unknown seller %r", record.get("seller_id"))
            continue

        seller.sales_count += 1
        seller.revenue += as_number(record.get("total_amount"))

        items = record.get("items")
        if not isinstance(items, (list, tuple)):
            continue

        for item in items:
            if not isinstance(item, Mapping):
                skipped_items += 1
                continue
            sku = _index_key(item.get("sku"))
            product = product_index.get(sku)
            if product is None:
                skipped_items += 1
                logger.debug("Skipping line item with unknown sku %r", item.get("sku"))
                continue

            quantity = as_number(item.get("quantity"))
            cost = as_number(product.get("purchase_price")) * quantity
            revenue = as_number(calculate_revenue(item, product))
            seller.profit += revenue - cost

            sold = seller.products_sold.setdefault(sku, 0)
            if math.isfinite(quantity):
                seller.products_sold[sku] = sold + quantity

    logger.debug(
        "Aggregated %d purchase records (%d skipped records, %d skipped items)",
        len(records),
        skipped_records,
        skipped_items,
    )


def rank_sellers(
    stats: Sequence[SellerStat],
    calculate_bonus: BonusStrategy,
    *,
    top_n: int = TOP_PRODUCTS_LIMIT,
) -> List[RankedSeller]:
    """
    功能说明:
        按利润降序稳定排序，依名次调用奖金策略并提取畅销商品，
        产出只读的排名快照。
    参数:
        stats (Sequence[SellerStat]): 聚合完成的累加器。
        calculate_bonus (BonusStrategy): 奖金策略。
        top_n (int): 畅销商品数量上限。
    返回:
        List[RankedSeller]: 按名次排列的卖家快照。
    """
    ordered = sorted(stats, key=_profit_sort_key, reverse=True)
    total = len(ordered)
    ranked: List[RankedSeller] = []
    for index, stat in enumerate(ordered):
        bonus = calculate_bonus(index, total, stat)
        ranked.append(
            RankedSeller(
                id=stat.id,
                name=stat.name,
                revenue=stat.revenue,
                profit=stat.profit,
                sales_count=stat.sales_count,
                products_sold=MappingProxyType(dict(stat.products_sold)),
                rank=index,
                bonus=bonus,
                top_products=tuple(top_products(stat.products_sold, top_n)),
            )
        )
    return ranked


def top_products(products_sold: Mapping[str, float], limit: int = TOP_PRODUCTS_LIMIT) -> List[TopProduct]:
    """按累计销量降序取前 ``limit`` 个 SKU，销量相同保持首次售出顺序。"""
    entries = [TopProduct(sku=sku, quantity=quantity) for sku, quantity in products_sold.items()]
    entries.sort(key=lambda entry: entry.quantity, reverse=True)
    return entries[:limit]


def format_rows(ranked: Sequence[RankedSeller]) -> List[ReportRow]:
    """
    功能说明:
        把排名快照投影为报表行：金额归一化为两位小数，标识与姓名转为字符串。
    参数:
        ranked (Sequence[RankedSeller]): 排名后的卖家。
    返回:
        List[ReportRow]: 保持名次顺序的报表行。
    """
    return [
        ReportRow(
            seller_id=_as_label(seller.id),
            name=_as_label(seller.name),
            revenue=normalize_amount(seller.revenue),
            profit=normalize_amount(seller.profit),
            sales_count=_as_count(seller.sales_count),
            top_products=list(seller.top_products) if isinstance(seller.top_products, (list, tuple)) else [],
            bonus=normalize_amount(seller.bonus),
        )
        for seller in ranked
    ]


def normalize_amount(value: Any) -> float:
    """
    功能说明:
        非数值、NaN 与无穷大记为 0，其余按十进制表示四舍五入（远离零）到两位小数。
    参数:
        value (Any): 待归一化的金额。
    返回:
        float: 两位小数的有限浮点数，例如 1.005 -> 1.01，-1.005 -> -1.01。
    """
    number = as_number(value)
    if not math.isfinite(number):
        return 0.0
    rounded = Decimal(repr(number)).quantize(_CENT, rounding=ROUND_HALF_UP)
    # 加 0.0 去掉 -0.0 的符号。
    return float(rounded) + 0.0


def _as_label(value: Any) -> str:
    return str(value) if value else ""


def _as_count(value: Any) -> int:
    if not value:
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)


def _index_key(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _profit_sort_key(stat: SellerStat) -> float:
    # 非有限利润在输出中记为 0，排序时同样按 0 处理。
    profit = as_number(stat.profit)
    return profit if math.isfinite(profit) else 0.0


def _option(options: Any, name: str) -> Any:
    if isinstance(options, Mapping):
        return options.get(name)
    return getattr(options, name, None)


def _resolve_top_n(options: Any) -> int:
    top_n = _option(options, "top_n")
    if top_n is None:
        return TOP_PRODUCTS_LIMIT
    if isinstance(top_n, bool):
        raise MissingStrategyError(f"top_n must be an integer, got {top_n!r}")
    try:
        return max(int(top_n), 0)
    except (TypeError, ValueError, OverflowError) as exc:
        raise MissingStrategyError(f"top_n must be an integer, got {top_n!r}") from exc


@dataclass
class SalesReport:
    """
    封装一次报表运行的结果，供导出或控制台展示使用。

    属性:
        source_name (str): 数据来源名称。
        rows (List[ReportRow]): 按名次排列的报表行。
    """

    source_name: str
    rows: List[ReportRow]

    @property
    def seller_count(self) -> int:
        return len(self.rows)

    @property
    def total_revenue(self) -> float:
        return normalize_amount(sum(row.revenue for row in self.rows))

    @property
    def total_profit(self) -> float:
        return normalize_amount(sum(row.profit for row in self.rows))

    @property
    def total_bonus(self) -> float:
        return normalize_amount(sum(row.bonus for row in self.rows))

    @property
    def total_sales(self) -> int:
        return sum(row.sales_count for row in self.rows)


def build_sales_report(*, source_name: str, data: Any, options: Any) -> SalesReport:
    """
    功能说明:
        运行分析并附上数据来源，生成报表对象。
    参数:
        source_name (str): 数据来源名称。
        data (Any): 原始输入数据集。
        options (Any): 计算策略选项。
    返回:
        SalesReport: 报表结果。
    """
    rows = analyze_sales_data(data, options)
    return SalesReport(source_name=source_name, rows=rows)
