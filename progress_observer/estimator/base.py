"""
检查点估算器

根据目标汇报间隔，自适应地估算下一次汇报前需要经过的tick数。
只有在越过检查点时才读取一次时钟，稳态下每个tick只做一次整数比较。

注意：run_for 截止只在检查点处检查，检查点很大时循环可能明显超出
run_for 才被标记为结束，它是检查点粒度的尽力而为截止，而不是硬截止时间。
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from pydantic import BaseModel as PydanticModel, ConfigDict

from .options import DurationLike, InvalidConfiguration, ObserverOptions, build_options, to_seconds


logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# 小于该值的耗时视为零，避免除零得到inf/NaN
ELAPSED_EPSILON = 1e-9


@dataclass
class CheckpointRecord:
    """单次检查点调整记录"""
    ticks: int  # 触发时的累计tick数
    elapsed: float  # 距上次观测的耗时（秒）
    ratio: Optional[float]  # 耗时/目标间隔，耗时为零时为None
    previous_size: int
    checkpoint_size: int
    next_checkpoint: int


class EstimatorState(PydanticModel):
    """估算器状态快照"""

    model_config = ConfigDict(frozen=True)

    target_interval: float
    checkpoint_size: int
    max_checkpoint_size: Optional[int]
    max_scale_factor: float
    delay_remaining: int
    ticks_total: int
    next_checkpoint: int
    run_for: Optional[float]
    finished: bool


class CheckpointEstimator:
    """
    自适应进度汇报观察器

    每次调用 advance()/tick() 返回是否应当立即汇报进度。
    也可以作为布尔值迭代器使用：每次取值相当于 tick()，
    一旦 finished 被置位，迭代即结束。
    """

    def __init__(self, target_interval: DurationLike,
                 options: Optional[ObserverOptions] = None,
                 clock: Optional[Clock] = None,
                 record_history: bool = False,
                 **kwargs: Any):
        """
        Args:
            target_interval: 目标汇报间隔（秒数或timedelta）
            options: 配置选项
            clock: 单调时钟，返回浮点秒数，默认 time.monotonic
            record_history: 是否记录每次检查点调整
            **kwargs: 覆盖 options 中的单个字段

        Raises:
            InvalidConfiguration: 目标间隔非正、非有限或选项校验失败
        """
        self._target_interval = to_seconds(target_interval)
        if not self._target_interval > 0:
            raise InvalidConfiguration(f"target_interval必须为正数，实际为 {self._target_interval}")
        if math.isinf(self._target_interval):
            raise InvalidConfiguration("target_interval必须为有限值")

        self._options = build_options(options, **kwargs)
        self._clock = clock or time.monotonic

        self._checkpoint_size = self._options.first_checkpoint
        self._next_checkpoint = self._options.first_checkpoint
        self._delay_remaining = self._options.delay
        self._run_for = self._options.run_for_seconds
        self._ticks_total = 0
        self._finished = False

        now = self._clock()
        self._last_observation = now
        self._first_observation = now

        self.history: Optional[List[CheckpointRecord]] = [] if record_history else None

    @classmethod
    def create(cls, target_interval: DurationLike,
               options: Optional[ObserverOptions] = None, **kwargs: Any) -> "CheckpointEstimator":
        """使用配置选项创建估算器"""
        return cls(target_interval, options, **kwargs)

    @classmethod
    def with_checkpoint_size(cls, target_interval: DurationLike, checkpoint_size: int,
                             **kwargs: Any) -> "CheckpointEstimator":
        """
        指定初始检查点大小创建估算器

        检查点大小会在每次汇报时自动调整，通常1-3次汇报后即可适应负载。
        只有在对目标间隔内的迭代次数有较准确的估计、并且在意最初几次汇报的
        间隔时才需要指定。
        """
        return cls(target_interval, first_checkpoint=checkpoint_size, **kwargs)

    @classmethod
    def with_max_checkpoint_size(cls, target_interval: DurationLike, max_checkpoint_size: int,
                                 **kwargs: Any) -> "CheckpointEstimator":
        """
        指定检查点大小上限创建估算器

        执行时间非常不稳定时，估算器可能得出过大的检查点，
        上限保证两次汇报之间的tick数不会超过该值。
        """
        return cls(target_interval, max_checkpoint_size=max_checkpoint_size, **kwargs)

    @property
    def options(self) -> ObserverOptions:
        return self._options

    @property
    def target_interval(self) -> float:
        """目标汇报间隔（秒）"""
        return self._target_interval

    @property
    def checkpoint_size(self) -> int:
        return self._checkpoint_size

    @property
    def max_checkpoint_size(self) -> Optional[int]:
        return self._options.max_checkpoint_size

    @property
    def max_scale_factor(self) -> float:
        return self._options.max_scale_factor

    @property
    def delay_remaining(self) -> int:
        return self._delay_remaining

    @property
    def ticks_total(self) -> int:
        return self._ticks_total

    @property
    def next_checkpoint(self) -> int:
        return self._next_checkpoint

    @property
    def last_observation(self) -> float:
        return self._last_observation

    @property
    def first_observation(self) -> float:
        return self._first_observation

    @property
    def run_for(self) -> Optional[float]:
        """运行时长上限（秒）"""
        return self._run_for

    @property
    def finished(self) -> bool:
        return self._finished

    def advance(self, n: int) -> bool:
        """
        推进n个tick

        Args:
            n: tick增量，0为空操作

        Returns:
            是否应当立即汇报进度
        """
        if n < 0:
            raise ValueError(f"tick增量不能为负数: {n}")
        if n == 0:
            return False

        # 预热阶段：静默吸收tick，不参与计时
        if self._delay_remaining > 0:
            absorbed = min(n, self._delay_remaining)
            n -= absorbed
            self._delay_remaining -= absorbed
            if self._delay_remaining > 0:
                return False
            now = self._clock()
            self._last_observation = now
            self._first_observation = now
            logger.debug("预热结束，开始计时 (剩余tick: %d)", n)

        self._ticks_total += n
        if self._ticks_total < self._next_checkpoint:
            return False

        self._observe()
        return True

    def advance_one(self) -> bool:
        """推进1个tick"""
        return self.advance(1)

    # 与原始接口保持一致的别名
    tick_n = advance
    tick = advance_one

    def _observe(self) -> None:
        """到达检查点：读取时钟并重新估算检查点大小"""
        now = self._clock()

        if (self._run_for is not None and not self._finished
                and now - self._first_observation > self._run_for):
            self._finished = True
            logger.debug("已超过运行时长上限 %.3fs，标记结束 (ticks=%d)", self._run_for, self._ticks_total)

        elapsed = now - self._last_observation
        previous = self._checkpoint_size
        ceiling = previous * self._options.max_scale_factor

        if elapsed <= ELAPSED_EPSILON:
            # 耗时无法测量，按最大倍数增长
            ratio = None
            estimate = ceiling
        else:
            ratio = elapsed / self._target_interval
            estimate = min(previous / ratio, ceiling)

        # 取整前先截断，超大倍数可能使估计值溢出为inf
        if self._options.max_checkpoint_size is not None:
            estimate = min(estimate, self._options.max_checkpoint_size)
        elif not math.isfinite(estimate):
            estimate = previous
        size = max(1, int(math.floor(estimate)))

        self._checkpoint_size = size
        self._next_checkpoint += size
        self._last_observation = now

        logger.debug("检查点: ticks=%d elapsed=%.6fs size %d -> %d, next=%d",
                     self._ticks_total, elapsed, previous, size, self._next_checkpoint)

        if self.history is not None:
            self.history.append(CheckpointRecord(
                ticks=self._ticks_total,
                elapsed=elapsed,
                ratio=ratio,
                previous_size=previous,
                checkpoint_size=size,
                next_checkpoint=self._next_checkpoint,
            ))

    def snapshot(self) -> EstimatorState:
        """获取当前状态快照"""
        return EstimatorState(
            target_interval=self._target_interval,
            checkpoint_size=self._checkpoint_size,
            max_checkpoint_size=self._options.max_checkpoint_size,
            max_scale_factor=self._options.max_scale_factor,
            delay_remaining=self._delay_remaining,
            ticks_total=self._ticks_total,
            next_checkpoint=self._next_checkpoint,
            run_for=self._run_for,
            finished=self._finished,
        )

    def __iter__(self) -> "CheckpointEstimator":
        return self

    def __next__(self) -> bool:
        if self._finished:
            raise StopIteration
        return self.advance_one()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(target_interval={self._target_interval}, "
                f"checkpoint_size={self._checkpoint_size}, ticks_total={self._ticks_total}, "
                f"next_checkpoint={self._next_checkpoint}, finished={self._finished})")


# 与原始命名保持一致
Observer = CheckpointEstimator
