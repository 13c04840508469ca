"""
观察器配置选项

定义检查点估算器的可选参数包以及配置校验错误。
"""

import math
from datetime import timedelta
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel as PydanticModel, ConfigDict, Field, ValidationError, field_validator, model_validator


DurationLike = Union[float, int, timedelta]


class InvalidConfiguration(ValueError):
    """估算器配置无效（构造时抛出，不可恢复）"""


class ObserverOptions(PydanticModel):
    """检查点估算器配置类"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    first_checkpoint: int = Field(default=1, ge=1, description="初始检查点大小（tick数）")
    max_checkpoint_size: Optional[int] = Field(default=None, ge=1, description="检查点大小上限")
    delay: int = Field(default=0, ge=0, description="开始计时前静默吸收的tick数")
    max_scale_factor: float = Field(default=2.0, description="单次调整允许的最大放大倍数")
    run_for: Optional[timedelta] = Field(default=None, description="总运行时长上限，超过后标记结束")

    @field_validator("max_scale_factor")
    @classmethod
    def _check_scale_factor(cls, value: float) -> float:
        if not value >= 1.0:
            raise ValueError(f"max_scale_factor必须不小于1.0，实际为 {value}")
        if math.isinf(value):
            raise ValueError("max_scale_factor必须为有限值")
        return value

    @field_validator("run_for")
    @classmethod
    def _check_run_for(cls, value: Optional[timedelta]) -> Optional[timedelta]:
        if value is not None and value < timedelta(0):
            raise ValueError(f"run_for不能为负数，实际为 {value}")
        return value

    @model_validator(mode="after")
    def _check_first_checkpoint(self) -> "ObserverOptions":
        if self.max_checkpoint_size is not None and self.first_checkpoint > self.max_checkpoint_size:
            raise ValueError(
                f"first_checkpoint ({self.first_checkpoint}) 超过了 "
                f"max_checkpoint_size ({self.max_checkpoint_size})"
            )
        return self

    @property
    def run_for_seconds(self) -> Optional[float]:
        """运行时长上限（秒）"""
        if self.run_for is None:
            return None
        return self.run_for.total_seconds()


def to_seconds(value: DurationLike) -> float:
    """将时长（秒数或timedelta）统一转换为浮点秒数"""
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"无法识别的时长类型: {type(value).__name__}")
    return float(value)


def build_options(options: Optional[ObserverOptions] = None, **kwargs: Any) -> ObserverOptions:
    """
    构建配置选项

    Args:
        options: 已有的配置对象，kwargs中的字段会覆盖它
        **kwargs: 单独指定的配置字段

    Returns:
        校验后的配置对象

    Raises:
        InvalidConfiguration: 任意字段校验失败
    """
    values: Dict[str, Any] = options.model_dump() if options is not None else {}
    values.update(kwargs)
    try:
        return ObserverOptions(**values)
    except ValidationError as e:
        raise InvalidConfiguration(str(e)) from e
