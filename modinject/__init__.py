"""
modinject

基于模块的依赖注入容器：
- core/di/: 注解解析、模块注册表、模块加载、注入器
- core/config.py: Dynaconf 配置
- core/logger.py: loguru 日志
- cli.py: 命令行工具
"""

from .core.di import (
    INJECTOR_TOKEN,
    Injector,
    Module,
    ModuleRegistry,
    annotate,
    create_injector,
    get_registry,
    inject,
    module,
    prototype,
    reset_registry,
)
from .exceptions import (
    CircularDependencyError,
    ConfigurationError,
    DependencyError,
    InvalidAnnotationError,
    InvalidProviderError,
    MissingAnnotationError,
    ModInjectException,
    NonStringTokenError,
    ReservedTokenError,
    UnknownModuleError,
    UnknownTokenError,
)

__version__ = "0.1.0"

__all__ = [
    "INJECTOR_TOKEN",
    "Injector",
    "Module",
    "ModuleRegistry",
    "annotate",
    "create_injector",
    "get_registry",
    "inject",
    "module",
    "prototype",
    "reset_registry",
    "CircularDependencyError",
    "ConfigurationError",
    "DependencyError",
    "InvalidAnnotationError",
    "InvalidProviderError",
    "MissingAnnotationError",
    "ModInjectException",
    "NonStringTokenError",
    "ReservedTokenError",
    "UnknownModuleError",
    "UnknownTokenError",
]
