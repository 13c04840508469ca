"""
示例负载

用于演示估算器用法的几个长时间循环：蒙特卡洛估算π、统计素数比例，
以及在模拟时钟下离线模拟检查点的调整过程。
"""

import math
import random
from typing import Any, Callable, Dict, Optional

from .estimator.base import CheckpointEstimator
from .estimator.clock import SimulatedClock
from .utils.formatters import format_number_with_units, reprint


Reporter = Callable[[str], Any]


def is_prime(n: int) -> bool:
    """试除法判断素数"""
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    for i in range(3, math.isqrt(n) + 1, 2):
        if n % i == 0:
            return False
    return True


def estimate_pi(samples: int, interval: float = 0.5, seed: Optional[int] = None,
                reporter: Reporter = reprint, **options: Any) -> Dict[str, Any]:
    """
    在正方形内随机取点，按落入内切圆的比例估算π

    Args:
        samples: 采样点数
        interval: 汇报间隔（秒）
        seed: 随机种子
        reporter: 汇报回调，默认在同一行重绘
        **options: 估算器配置

    Returns:
        估算结果与汇报次数
    """
    rng = random.Random(seed)
    observer = CheckpointEstimator(interval, **options)
    in_circle = 0
    reports = 0

    for i in range(1, samples + 1):
        x, y = rng.random() * 2.0 - 1.0, rng.random() * 2.0 - 1.0
        if x * x + y * y <= 1.0:
            in_circle += 1
        if observer.tick():
            reports += 1
            reporter(f"π ≈ {4.0 * in_circle / i:.6f} ({format_number_with_units(i)} 样本)")

    return {
        "samples": samples,
        "pi": 4.0 * in_circle / samples if samples else 0.0,
        "reports": reports,
        "state": observer.snapshot(),
    }


def prime_ratio(limit: int, interval: float = 1.0, reporter: Reporter = reprint,
                **options: Any) -> Dict[str, Any]:
    """
    统计 [0, limit) 中素数所占比例，将估算器作为迭代器使用

    Args:
        limit: 上界
        interval: 汇报间隔（秒）
        reporter: 汇报回调
        **options: 估算器配置，如 max_checkpoint_size、run_for

    Returns:
        统计结果；设置了 run_for 时可能提前结束
    """
    observer = CheckpointEstimator(interval, **options)
    primes = 0
    checked = 0
    reports = 0

    for n, should_report in zip(range(limit), observer):
        checked += 1
        if is_prime(n):
            primes += 1
        if should_report:
            reports += 1
            reporter(f"{primes} / {n} = {primes / max(n, 1):.4f}")

    return {
        "limit": limit,
        "checked": checked,
        "primes": primes,
        "ratio": primes / checked if checked else 0.0,
        "reports": reports,
        "finished_early": observer.finished,
        "state": observer.snapshot(),
    }


def simulate(ticks: int, tick_seconds: float, interval: float = 1.0, jitter: float = 0.0,
             seed: Optional[int] = None, **options: Any) -> CheckpointEstimator:
    """
    在模拟时钟下运行估算器

    每个tick耗时 tick_seconds，并叠加 [-jitter, +jitter] 比例的均匀随机扰动。

    Returns:
        记录了检查点历史的估算器
    """
    rng = random.Random(seed)
    clock = SimulatedClock()
    observer = CheckpointEstimator(interval, clock=clock, record_history=True, **options)
    for _ in range(ticks):
        cost = tick_seconds * (1.0 + rng.uniform(-jitter, jitter)) if jitter else tick_seconds
        clock.advance(max(cost, 0.0))
        observer.tick()
    return observer
