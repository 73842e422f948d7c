"""销售业绩报表使用的统一异常定义。"""


class SalesReportError(Exception):
    """所有报表相关异常的基类，CLI 以此为界转换退出码。"""


class InvalidInputError(SalesReportError):
    """输入数据为空、不是对象，或 sellers/products/purchase_records 不是非空序列。"""


class MissingStrategyError(SalesReportError):
    """分析选项无效：缺少收入或奖金策略、策略不可调用，或 top_n 不是整数。"""


class DataSourceError(SalesReportError):
    """数据源无法产出数据集（文件缺失、JSON 无效等）。"""
