"""参考收入与奖金计算策略。

分析流程通过 ``AnalysisOptions`` 注入这两类策略，调用方可以替换为任意
签名兼容的纯函数。
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from .numbers import as_number

FIRST_PLACE_RATE = 0.15
RUNNER_UP_RATE = 0.10
DEFAULT_RATE = 0.05


def calculate_simple_revenue(item: Mapping[str, Any], product: Mapping[str, Any]) -> float:
    """
    功能说明:
        按售价、数量与折扣计算单个行项目的收入。数值字段按宽松规则读取：
        discount 为 null 时视为 0，缺失或无法识别的字段得到 NaN。
    参数:
        item (Mapping[str, Any]): 行项目，读取 sale_price、quantity、discount。
        product (Mapping[str, Any]): 商品卡片，参考实现不使用。
    返回:
        float: ``sale_price * quantity * (1 - discount / 100)``。
    """
    discount = item.get("discount", math.nan)
    if discount is None:
        discount = 0
    discount_coefficient = 1 - as_number(discount) / 100
    return as_number(item.get("sale_price")) * as_number(item.get("quantity")) * discount_coefficient


def calculate_bonus_by_profit(index: int, total: int, seller: Any) -> float:
    """
    功能说明:
        按利润排名计算奖金。最后一名的判断优先，因此只有一个卖家时奖金为 0。
    参数:
        index (int): 卖家在按利润降序排列后的位置，从 0 开始。
        total (int): 卖家总数。
        seller (Any): 带有 ``profit`` 属性的卖家统计对象。
    返回:
        float: 奖金金额。
    """
    profit = seller.profit

    if index == total - 1:
        return 0.0
    if index == 0:
        return profit * FIRST_PLACE_RATE
    if index in (1, 2):
        return profit * RUNNER_UP_RATE
    return profit * DEFAULT_RATE
