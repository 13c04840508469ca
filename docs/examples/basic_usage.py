#!/usr/bin/env python3
"""
Progress-Observer 基本使用示例

演示如何在长时间循环中使用估算器按固定时间间隔汇报进度。
"""

from datetime import timedelta

from progress_observer import CheckpointEstimator, reprint


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    return all(n % i for i in range(2, int(n ** 0.5) + 1))


def main():
    """主函数"""
    print("=== Progress-Observer 基本使用示例 ===\n")

    # 1. 每次迭代调用 tick()，返回True时汇报进度
    primes = 0
    observer = CheckpointEstimator(timedelta(seconds=0.5))
    for n in range(2_000_000):
        if is_prime(n):
            primes += 1
        if observer.tick():
            reprint(f"{primes} / {n} = {primes / max(n, 1):.4f}")
    print()

    # 2. 作为迭代器使用，并限制总运行时长和检查点大小
    primes = 0
    observer = CheckpointEstimator.with_max_checkpoint_size(1.0, 300_000, run_for=3.0)
    for n, should_print in zip(range(10_000_000), observer):
        if is_prime(n):
            primes += 1
        if should_print:
            reprint(f"{primes} / {n} = {primes / max(n, 1):.4f}")
    print()

    if observer.finished:
        print("已达到运行时长上限")
    print(f"最终检查点大小: {observer.checkpoint_size}")

    print("\n=== 示例完成 ===")


if __name__ == "__main__":
    main()
