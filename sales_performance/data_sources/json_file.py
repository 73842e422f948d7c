"""从本地 JSON 文件读取报表输入的数据源。"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..errors import DataSourceError
from .base import SalesDataset, SalesDataSource

logger = logging.getLogger(__name__)


class JsonFileDataSource(SalesDataSource):
    """读取单个 UTF-8 JSON 文档，顶层须为对象。"""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self.name = f"json:{self._path.name}"

    @property
    def path(self) -> Path:
        return self._path

    def fetch_dataset(self) -> SalesDataset:
        """
        功能说明:
            读取 JSON 文件并返回原始数据集，不做字段级校验。
        返回:
            SalesDataset: 文件中的顶层对象。
        异常:
            DataSourceError: 文件不可读、JSON 无效或顶层不是对象。
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DataSourceError(f"Cannot read input file {self._path}: {exc}") from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"Invalid JSON in {self._path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise DataSourceError(
                f"Expected a JSON object at the top level of {self._path}, "
                f"got {type(payload).__name__}"
            )

        logger.debug("Loaded dataset from %s with keys %s", self._path, sorted(payload))
        return payload
