"""
模拟时钟

手动推进的单调时钟，可以替代 time.monotonic 注入估算器，
用于测试和离线模拟估算器在给定负载下的行为。
"""


class SimulatedClock:
    """手动推进的单调时钟（单位：秒）"""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        """推进时钟，返回推进后的时间"""
        if seconds < 0:
            raise ValueError(f"单调时钟不能回退: {seconds}")
        self.now += seconds
        return self.now
