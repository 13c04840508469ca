"""
数据格式化工具

提供同行重绘输出以及估算器状态、检查点历史的格式化功能。
"""

import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, TextIO

from tabulate import tabulate

from ..estimator.base import CheckpointRecord, EstimatorState


logger = logging.getLogger(__name__)


def reprint(text: str, stream: Optional[TextIO] = None) -> bool:
    """
    在同一行重绘输出

    写入以回车开头的字符串并立即刷新，重复调用会覆盖终端上的同一行。
    写入失败不会中断被监控的计算。

    Args:
        text: 要输出的文本
        stream: 输出流，默认为标准输出

    Returns:
        是否成功写入并刷新
    """
    stream = stream if stream is not None else sys.stdout
    try:
        stream.write("\r" + text)
        stream.flush()
    except (OSError, ValueError) as e:
        logger.warning("进度输出失败: %s", e)
        return False
    return True


def format_duration(seconds: float) -> str:
    """
    格式化时长

    Args:
        seconds: 秒数

    Returns:
        带单位的时长字符串
    """
    # 按显示精度先取整，避免出现 "59m60.0s"
    rounded = round(seconds, 1)
    if rounded >= 3600:
        hours, rest = divmod(rounded, 3600)
        return f"{int(hours)}h{int(rest // 60):02d}m"
    elif rounded >= 60:
        minutes, rest = divmod(rounded, 60)
        return f"{int(minutes)}m{rest:04.1f}s"
    elif seconds >= 1:
        return f"{seconds:.2f}s"
    elif seconds >= 1e-3:
        return f"{seconds * 1e3:.2f}ms"
    else:
        return f"{seconds * 1e6:.2f}us"


def format_number_with_units(value: float, unit: str = "") -> str:
    """
    格式化数字并添加单位

    Args:
        value: 数值
        unit: 单位

    Returns:
        格式化后的字符串
    """
    if value >= 1e12:
        return f"{value/1e12:.2f}T{unit}"
    elif value >= 1e9:
        return f"{value/1e9:.2f}G{unit}"
    elif value >= 1e6:
        return f"{value/1e6:.2f}M{unit}"
    elif value >= 1e3:
        return f"{value/1e3:.2f}K{unit}"
    else:
        return f"{value:.2f}{unit}"


def format_state(state: EstimatorState, format_type: str = "table") -> str:
    """
    格式化估算器状态

    Args:
        state: 状态快照
        format_type: 输出格式 ("table", "json", "csv")

    Returns:
        格式化后的字符串
    """
    data = state.model_dump()
    if format_type == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)

    elif format_type == "csv":
        headers = list(data.keys())
        values = ["" if data[key] is None else str(data[key]) for key in headers]
        return "\n".join([",".join(headers), ",".join(values)])

    else:  # table format
        rows = [
            ["目标间隔", format_duration(state.target_interval)],
            ["检查点大小", state.checkpoint_size],
            ["检查点上限", state.max_checkpoint_size if state.max_checkpoint_size is not None else "无"],
            ["最大放大倍数", f"{state.max_scale_factor:.2f}"],
            ["剩余预热tick", state.delay_remaining],
            ["累计tick", state.ticks_total],
            ["下一检查点", state.next_checkpoint],
            ["运行时长上限", format_duration(state.run_for) if state.run_for is not None else "无"],
            ["已结束", "是" if state.finished else "否"],
        ]
        return tabulate(rows, headers=["字段", "值"], tablefmt="grid")


def _history_rows(history: List[CheckpointRecord]) -> List[Dict[str, Any]]:
    return [asdict(record) for record in history]


def format_history(history: List[CheckpointRecord], format_type: str = "table") -> str:
    """
    格式化检查点调整历史

    Args:
        history: 检查点记录列表
        format_type: 输出格式 ("table", "json", "csv")

    Returns:
        格式化后的字符串
    """
    if not history:
        return "无数据"

    rows = _history_rows(history)
    if format_type == "json":
        return json.dumps(rows, indent=2, ensure_ascii=False)

    elif format_type == "csv":
        headers = list(rows[0].keys())
        csv_lines = [",".join(headers)]
        for row in rows:
            csv_lines.append(",".join("" if row[key] is None else str(row[key]) for key in headers))
        return "\n".join(csv_lines)

    else:  # table format
        table_data = []
        for i, record in enumerate(history, 1):
            table_data.append([
                i,
                record.ticks,
                format_duration(record.elapsed),
                f"{record.ratio:.3f}" if record.ratio is not None else "-",
                record.previous_size,
                record.checkpoint_size,
                record.next_checkpoint,
            ])
        headers = ["#", "累计tick", "耗时", "耗时/目标", "原检查点", "新检查点", "下一检查点"]
        return tabulate(table_data, headers=headers, tablefmt="grid")
