"""
日志配置

库本身只通过 logging.getLogger(__name__) 输出日志，不在导入时配置handler。
命令行程序或调用方可以用 setup_logging() 按全局设置配置日志。
"""

import logging
import os
from typing import Optional

from ..config.settings import get_settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAME = "progress_observer"


def _same_target(handler: logging.Handler, log_file: Optional[str]) -> bool:
    if isinstance(handler, logging.FileHandler):
        return log_file is not None and handler.baseFilename == os.path.abspath(log_file)
    return log_file is None


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    配置 progress_observer 包的日志

    重复调用时，若输出目标发生变化，会替换之前由本函数安装的handler；
    调用方自行添加的handler保持不变。

    Args:
        level: 日志级别，默认取全局设置 log_level
        log_file: 日志文件路径，默认取全局设置 log_file，为空时输出到stderr

    Returns:
        包级别的logger
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    logger = logging.getLogger("progress_observer")
    logger.setLevel(level)

    installed = None
    for handler in list(logger.handlers):
        if handler.get_name() != HANDLER_NAME:
            continue
        if installed is None and _same_target(handler, log_file):
            installed = handler
        else:
            logger.removeHandler(handler)
            handler.close()

    if installed is None:
        if log_file:
            installed = logging.FileHandler(log_file, encoding="utf-8")
        else:
            installed = logging.StreamHandler()
        installed.set_name(HANDLER_NAME)
        installed.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(installed)
    installed.setLevel(level)
    return logger
