"""提供可复现的模拟卖家/商品/购买记录数据源，方便本地开发与演示。"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from ..config import AppConfig
from .base import SalesDataset, SalesDataSource

_FIRST_NAMES = ["Alexey", "Maria", "Ivan", "Olga", "Dmitry", "Elena", "Sergey", "Anna"]
_LAST_NAMES = ["Petrov", "Ivanova", "Smirnov", "Kuznetsova", "Popov", "Volkova", "Sokolov", "Orlova"]


@dataclass
class MockDataSourceSettings:
    """
    控制模拟数据源行为的配置项。

    属性:
        seed (int): 伪随机种子，确保数据可复现。
        seller_count (int): 生成的卖家数量。
        product_count (int): 生成的商品数量。
        record_count (int): 生成的购买记录数量。
        max_items_per_record (int): 单条记录包含的最大行项目数。
    """

    seed: int = 2024
    seller_count: int = 5
    product_count: int = 30
    record_count: int = 200
    max_items_per_record: int = 4


class MockSalesDataSource(SalesDataSource):
    """
    基于线性同余发生器的可复现模拟数据源。

    价格、折扣与数量均由伪随机算法生成，行项目的 ``sale_price`` 高于进价，
    以便参考收入策略产出有意义的利润。
    """

    def __init__(self, settings: MockDataSourceSettings | None = None) -> None:
        self.name = "mock_sales_records"
        self._settings = settings or MockDataSourceSettings()

    def fetch_dataset(self) -> SalesDataset:
        """
        功能说明:
            按配置生成一份完整的输入数据集；相同种子总是得到相同结果。
        返回:
            SalesDataset: 卖家、商品与购买记录。
        """
        settings = self._settings
        draws = _MockDraws(settings.seed)

        sellers = [
            {
                "id": f"seller_{idx}",
                "first_name": _FIRST_NAMES[(idx - 1) % len(_FIRST_NAMES)],
                "last_name": _LAST_NAMES[(idx * 3) % len(_LAST_NAMES)],
            }
            for idx in range(1, max(settings.seller_count, 1) + 1)
        ]

        products: List[Dict[str, Any]] = []
        for idx in range(1, max(settings.product_count, 1) + 1):
            products.append(
                {
                    "sku": f"SKU_{idx:03d}",
                    "name": f"Mock Product {idx:03d}",
                    "purchase_price": draws.price(5, 200),
                }
            )

        records: List[Dict[str, Any]] = []
        for idx in range(1, max(settings.record_count, 1) + 1):
            seller = draws.pick(sellers)
            items = []
            for _ in range(draws.count(1, max(settings.max_items_per_record, 1))):
                product = draws.pick(products)
                # 折扣 0~20%，数量 1~10。
                sale_price = draws.markup(product["purchase_price"])
                discount = draws.count(0, 20)
                quantity = draws.count(1, 10)
                items.append(
                    {
                        "sku": product["sku"],
                        "quantity": quantity,
                        "discount": discount,
                        "sale_price": sale_price,
                    }
                )
            total_amount = round(
                sum(
                    item["sale_price"] * item["quantity"] * (1 - item["discount"] / 100)
                    for item in items
                ),
                2,
            )
            records.append(
                {
                    "receipt_id": f"receipt_{idx}",
                    "seller_id": seller["id"],
                    "total_amount": total_amount,
                    "items": items,
                }
            )

        return {"sellers": sellers, "products": products, "purchase_records": records}


def create_default_mock_source(config: AppConfig) -> MockSalesDataSource:
    """
    功能说明:
        使用应用配置中的种子构建默认的模拟数据源。
    参数:
        config (AppConfig): 应用配置，提供 mock_seed。
    返回:
        MockSalesDataSource: 预配置的模拟数据源实例。
    """
    return MockSalesDataSource(MockDataSourceSettings(seed=config.data_source.mock_seed))


class _MockDraws:
    """按种子产出模拟数据所需的各类随机取值，相同种子得到相同序列。"""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def price(self, low: float, high: float) -> float:
        return round(self._rng.uniform(low, high), 2)

    def markup(self, purchase_price: float) -> float:
        # 售价在进价基础上加价 10%~80%。
        return round(purchase_price * self._rng.uniform(1.1, 1.8), 2)

    def pick(self, population: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        return self._rng.choice(population)

    def count(self, low: int, high: int) -> int:
        """返回 [low, high] 闭区间内的整数。"""
        return self._rng.randint(low, high)
