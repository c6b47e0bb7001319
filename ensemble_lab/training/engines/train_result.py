from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class TrainResult:
    """
    TrainResult（FINAL / FROZEN）

    语义：
    - 一次完整训练的纯内存态结果
    - 不包含任何 I/O 语义
    - feature_names 顺序必须与训练矩阵列顺序一致
    """

    model: Any
    family: str
    task: str
    feature_names: List[str]
    metrics: Dict[str, Any] = field(default_factory=dict)
