"""
工具模块

提供输出格式化与日志配置功能。
"""
