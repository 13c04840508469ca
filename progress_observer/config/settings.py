"""
全局系统设置

定义系统级配置参数和默认值。
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """系统设置类"""

    model_config = ConfigDict(validate_assignment=True)

    # 日志配置
    log_level: str = Field(default="WARNING", description="日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径")

    # 输出配置
    default_output_format: str = Field(default="table", description="默认输出格式")

    # 演示程序默认参数
    default_interval_seconds: float = Field(default=0.5, gt=0, description="默认汇报间隔(秒)")
    default_max_scale_factor: float = Field(default=2.0, ge=1.0, description="默认最大放大倍数")


class ConfigManager:
    """配置管理器"""

    def __init__(self):
        self._settings: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """获取设置实例（单例模式）"""
        if self._settings is None:
            self._settings = Settings()
        return self._settings

    def update_settings(self, **kwargs) -> None:
        """更新设置"""
        settings = self.get_settings()
        for key, value in kwargs.items():
            if hasattr(settings, key):
                setattr(settings, key, value)

    def reset_settings(self) -> None:
        """恢复默认设置"""
        self._settings = None


# 全局配置管理器实例
config_manager = ConfigManager()


def get_settings() -> Settings:
    """获取全局设置"""
    return config_manager.get_settings()


def update_settings(**kwargs) -> None:
    """更新全局设置"""
    config_manager.update_settings(**kwargs)


def reset_settings() -> None:
    """恢复全局默认设置"""
    config_manager.reset_settings()
