"""
CLI命令实现

运行内置的示例负载，演示估算器的汇报节奏。
库本身不依赖命令行，这里只是示例入口。
"""

from typing import Any, Callable, Dict, Optional

import click

from ..config.settings import get_settings, update_settings
from ..estimator.options import InvalidConfiguration
from ..examples import estimate_pi, prime_ratio, simulate
from ..utils.formatters import format_duration, format_history, format_state, reprint
from ..utils.logging import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="progress-observer")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="日志级别")
@click.option("--log-file", type=click.Path(), default=None, help="日志文件路径")
def cli(log_level: Optional[str], log_file: Optional[str]):
    """自适应进度汇报演示工具

    运行示例计算，按目标时间间隔汇报进度，
    只在检查点处读取时钟。
    """
    if log_level:
        update_settings(log_level=log_level.upper())
    if log_file:
        update_settings(log_file=log_file)
    setup_logging()


def observer_options(func: Callable) -> Callable:
    """各命令共用的估算器配置选项"""
    settings = get_settings()
    options = [
        click.option("--interval", "-t", type=float, default=settings.default_interval_seconds,
                     show_default=True, help="目标汇报间隔(秒)"),
        click.option("--first-checkpoint", type=int, default=1, show_default=True, help="初始检查点大小"),
        click.option("--max-checkpoint-size", type=int, default=None, help="检查点大小上限"),
        click.option("--delay", type=int, default=0, show_default=True, help="预热tick数"),
        click.option("--max-scale-factor", type=float, default=settings.default_max_scale_factor,
                     show_default=True, help="单次调整的最大放大倍数"),
        click.option("--run-for", type=float, default=None, help="运行时长上限(秒)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _collect_options(first_checkpoint: int, max_checkpoint_size: Optional[int], delay: int,
                     max_scale_factor: float, run_for: Optional[float]) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "first_checkpoint": first_checkpoint,
        "delay": delay,
        "max_scale_factor": max_scale_factor,
    }
    if max_checkpoint_size is not None:
        options["max_checkpoint_size"] = max_checkpoint_size
    if run_for is not None:
        options["run_for"] = run_for
    return options


def _emit(text: str, output_file: Optional[str]) -> None:
    if output_file:
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(text)
        click.echo(f"结果已保存到: {output_file}")
    else:
        click.echo(text)


@cli.command()
@click.option("--samples", "-n", type=int, default=10_000_000, show_default=True, help="采样点数")
@click.option("--seed", type=int, default=None, help="随机种子")
@observer_options
def pi(samples: int, seed: Optional[int], interval: float, **kwargs):
    """蒙特卡洛估算π"""
    try:
        result = estimate_pi(samples, interval=interval, seed=seed, **_collect_options(**kwargs))
    except InvalidConfiguration as e:
        click.echo(f"配置错误: {e}", err=True)
        raise click.Abort()

    reprint(f"π ≈ {result['pi']:.6f}\n")
    click.echo(f"汇报次数: {result['reports']}")


@cli.command()
@click.option("--limit", "-n", type=int, default=10_000_000, show_default=True, help="统计上界")
@observer_options
def primes(limit: int, interval: float, **kwargs):
    """统计素数比例（将估算器作为迭代器使用）"""
    try:
        result = prime_ratio(limit, interval=interval, **_collect_options(**kwargs))
    except InvalidConfiguration as e:
        click.echo(f"配置错误: {e}", err=True)
        raise click.Abort()

    reprint(f"{result['primes']} / {result['checked']} = {result['ratio']:.4f}\n")
    click.echo(f"汇报次数: {result['reports']}")
    if result["finished_early"]:
        click.echo("已达到运行时长上限，提前结束")


@cli.command("simulate")
@click.option("--ticks", "-n", type=int, default=100_000, show_default=True, help="模拟tick数")
@click.option("--tick-seconds", type=float, default=1e-4, show_default=True, help="每个tick的模拟耗时(秒)")
@click.option("--jitter", type=float, default=0.0, show_default=True, help="耗时随机扰动比例(0-1)")
@click.option("--seed", type=int, default=None, help="随机种子")
@click.option("--format", "-f", "output_format", default=None,
              type=click.Choice(["table", "json", "csv"]), help="输出格式")
@click.option("--output-file", type=click.Path(), help="输出文件路径")
@observer_options
def simulate_command(ticks: int, tick_seconds: float, jitter: float, seed: Optional[int],
                     output_format: Optional[str], output_file: Optional[str], interval: float, **kwargs):
    """在模拟时钟下运行估算器，输出检查点调整历史"""
    if tick_seconds < 0:
        raise click.BadParameter("不能为负数", param_hint="--tick-seconds")
    output_format = output_format or get_settings().default_output_format

    try:
        observer = simulate(ticks, tick_seconds, interval=interval, jitter=jitter, seed=seed,
                            **_collect_options(**kwargs))
    except InvalidConfiguration as e:
        click.echo(f"配置错误: {e}", err=True)
        raise click.Abort()

    if output_format == "table":
        lines = [
            f"模拟 {ticks} 个tick，每个约 {format_duration(tick_seconds)}，目标间隔 {format_duration(interval)}",
            "",
            "检查点历史:",
            format_history(observer.history, output_format),
            "",
            "最终状态:",
            format_state(observer.snapshot(), output_format),
        ]
        text = "\n".join(lines)
    else:
        text = format_history(observer.history, output_format)

    _emit(text, output_file)


def main():
    """主程序入口"""
    cli()


if __name__ == "__main__":
    main()
