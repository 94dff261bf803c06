"""
日志管理模块

基于 loguru 的日志管理，提供初始化配置功能
库代码直接使用: from loguru import logger
"""

import os
import sys
from typing import Optional

from loguru import logger as loguru_logger

from .config import get_settings

logger = loguru_logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(config_file: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    根据配置文件初始化 loguru 日志系统

    Args:
        config_file: 配置文件路径，如果为 None 则使用默认配置
        level: 显式指定的日志级别，优先于配置文件
    """
    config = get_settings(config_file)

    # 移除默认的 handler
    loguru_logger.remove()

    log_level = (level or config.get("logging.level", "INFO")).upper()

    use_json = config.get("logging.json", False)
    if isinstance(use_json, str):
        use_json = use_json.lower() in ("true", "1", "yes", "on")

    if use_json:
        console_kwargs = {"serialize": True}
        file_kwargs = {"serialize": True}
    else:
        log_format = config.get("logging.format", None) or DEFAULT_FORMAT
        console_kwargs = {"format": log_format, "colorize": True}
        file_kwargs = {"format": log_format}

    # 日志输出到 stderr，stdout 留给命令行结果
    loguru_logger.add(sys.stderr, level=log_level, backtrace=True, diagnose=True, **console_kwargs)

    log_file = config.get("logging.file")
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        loguru_logger.add(
            log_file,
            level=log_level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            backtrace=True,
            diagnose=True,
            **file_kwargs
        )


def get_logger(name: str = "modinject"):
    """
    获取绑定了名称的日志器

    Args:
        name: 日志器名称

    Returns:
        loguru Logger 实例
    """
    return loguru_logger.bind(name=name)
