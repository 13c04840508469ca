"""
估算引擎模块

提供自适应检查点估算器，决定何时应当汇报一次进度。
"""

from .base import CheckpointEstimator, CheckpointRecord, EstimatorState, Observer
from .clock import SimulatedClock
from .options import InvalidConfiguration, ObserverOptions

__all__ = [
    "CheckpointEstimator",
    "CheckpointRecord",
    "EstimatorState",
    "Observer",
    "InvalidConfiguration",
    "ObserverOptions",
    "SimulatedClock",
]
