"""定义销售业绩报表所需的输入数据源抽象。"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

SalesDataset = Dict[str, List[Dict[str, Any]]]
"""卖家、商品与购买记录三个集合组成的原始输入结构。"""

DATASET_KEYS = ("sellers", "products", "purchase_records")


class SalesDataSource(ABC):
    """
    抽象基类，描述如何获取报表输入数据。

    子类只负责产出 ``{"sellers": [...], "products": [...], "purchase_records": [...]}``
    形状的数据，结构校验由分析流程统一完成。
    """

    name: str

    @abstractmethod
    def fetch_dataset(self) -> SalesDataset:
        """
        功能说明:
            读取或生成一份完整的输入数据集。
        返回:
            SalesDataset: 包含 sellers/products/purchase_records 的字典。
        异常:
            DataSourceError: 数据源无法产出数据集时抛出。
        """
