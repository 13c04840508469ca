"""
Progress-Observer: 同步长时间任务的自适应进度汇报工具

不在每次迭代时读取系统时钟，而是根据上一次汇报的实际耗时，
估算还需要多少次迭代才应当再次读取时钟并汇报进度。
"""

__version__ = "0.1.0"

from .estimator.base import CheckpointEstimator, CheckpointRecord, EstimatorState, Observer
from .estimator.options import InvalidConfiguration, ObserverOptions
from .utils.formatters import reprint

__all__ = [
    "CheckpointEstimator",
    "CheckpointRecord",
    "EstimatorState",
    "Observer",
    "InvalidConfiguration",
    "ObserverOptions",
    "reprint",
]
