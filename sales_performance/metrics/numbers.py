"""输入数值的宽松读取：核心流程与参考策略共用。"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any


def as_number(value: Any) -> float:
    """
    功能说明:
        把 JSON 中的数值字段转换为数字；无法识别的值记为 NaN，由格式化阶段归零。
    参数:
        value (Any): 原始字段值，可能是数字、数字字符串、布尔值或 None。
    返回:
        float: 数值或 NaN。
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (str, Decimal)):
        try:
            return float(value)
        except ValueError:
            return math.nan
    return math.nan
