"""
pytest配置文件

定义测试的全局配置和fixture。
"""

import logging
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from progress_observer.config.settings import reset_settings
from progress_observer.estimator.clock import SimulatedClock


@pytest.fixture
def clock():
    """从0开始、手动推进的模拟时钟"""
    return SimulatedClock()


@pytest.fixture
def sample_options():
    """示例估算器配置"""
    return {
        "first_checkpoint": 1,
        "max_checkpoint_size": 5,
        "delay": 0,
        "max_scale_factor": 2.0,
    }


@pytest.fixture(autouse=True)
def restore_global_state():
    """每个测试结束后恢复全局设置与日志配置"""
    yield
    reset_settings()
    package_logger = logging.getLogger("progress_observer")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
