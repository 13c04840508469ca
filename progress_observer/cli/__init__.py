"""
命令行接口模块

提供运行示例负载的命令行工具。
"""

from .commands import cli, main

__all__ = ["cli", "main"]
