"""
核心基础设施模块

包含配置、日志和依赖注入
"""

from .config import (
    InjectorSettings,
    get_settings,
    get_injector_settings,
    reload_config
)
from .logger import get_logger, logger, setup_logging

__all__ = [
    "InjectorSettings",
    "get_settings",
    "get_injector_settings",
    "reload_config",
    "get_logger",
    "logger",  # loguru logger，建议直接使用
    "setup_logging",
]
