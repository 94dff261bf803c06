"""
模块注册表

保存模块名 -> 模块定义的映射。模块定义记录依赖的模块和按顺序排队的注册调用，
在 create_injector 时由 loader 依次应用到新的 Injector 上
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from loguru import logger

from ...exceptions import UnknownModuleError

CONSTANT = 'constant'
PROVIDER = 'provider'


@dataclass(frozen=True)
class RegistrationRecord:
    """排队的注册调用"""

    kind: str
    args: Tuple[Any, ...]


@dataclass
class Module:
    """模块定义"""

    name: str
    requires: Tuple[str, ...] = ()
    invoke_queue: List[RegistrationRecord] = field(default_factory=list)

    def constant(self, key: str, value: Any) -> 'Module':
        """注册常量，加载时直接写入实例缓存"""
        self.invoke_queue.append(RegistrationRecord(CONSTANT, (key, value)))
        return self

    def provider(self, key: str, entry: Any) -> 'Module':
        """注册提供者，首次 get 时才调用其 $get"""
        self.invoke_queue.append(RegistrationRecord(PROVIDER, (key, entry)))
        return self

    def tokens(self) -> List[str]:
        """模块注册的 token（按注册顺序）"""
        return [record.args[0] for record in self.invoke_queue]


class ModuleRegistry:
    """模块注册表"""

    def __init__(self):
        """初始化模块注册表"""
        self.modules: Dict[str, Module] = {}

    def define_module(self, name: str, requires: Iterable[str] = ()) -> Module:
        """
        定义模块，同名模块会被替换

        Args:
            name: 模块名称
            requires: 依赖的模块名称（允许循环）

        Returns:
            可链式调用 constant / provider 的模块
        """
        if name in self.modules:
            logger.debug(f"替换已定义的模块: {name}")
        module = Module(name, tuple(requires))
        self.modules[name] = module
        return module

    def get_module(self, name: str, required_by: Optional[str] = None) -> Module:
        """
        获取模块定义

        Raises:
            UnknownModuleError: 模块未定义
        """
        try:
            return self.modules[name]
        except KeyError:
            raise UnknownModuleError(name, required_by) from None

    def module(self, name: str, requires: Optional[Iterable[str]] = None) -> Module:
        """给出 requires 时定义模块，否则查找已定义的模块"""
        if requires is not None:
            return self.define_module(name, requires)
        return self.get_module(name)

    def has_module(self, name: str) -> bool:
        """检查模块是否已定义"""
        return name in self.modules

    def module_names(self) -> List[str]:
        """已定义的模块名称（按定义顺序）"""
        return list(self.modules)

    def clear(self) -> None:
        """清空注册表"""
        self.modules.clear()


# 全局默认注册表
_registry: Optional[ModuleRegistry] = None


def get_registry() -> ModuleRegistry:
    """获取进程级默认注册表"""
    global _registry

    if _registry is None:
        _registry = ModuleRegistry()

    return _registry


def module(name: str, requires: Optional[Iterable[str]] = None) -> Module:
    """在默认注册表上定义或查找模块"""
    return get_registry().module(name, requires)


def reset_registry() -> None:
    """丢弃默认注册表，测试之间隔离时使用"""
    global _registry
    _registry = None
