"""
模块加载

从根模块出发深度优先遍历 requires，依赖模块先于依赖它的模块执行注册队列，
每个模块只执行一次（菱形依赖和循环依赖都直接跳过已访问的模块）
"""

from typing import Any, Iterable, List, Set

from loguru import logger

from .registry import CONSTANT, Module, ModuleRegistry, RegistrationRecord


def resolve_load_order(registry: ModuleRegistry, root_names: Iterable[str]) -> List[str]:
    """
    计算模块加载顺序（后序遍历）

    使用显式栈遍历，requires 链的深度不受递归深度限制

    Args:
        registry: 模块注册表
        root_names: 根模块名称

    Returns:
        模块名称列表，依赖在前

    Raises:
        UnknownModuleError: 依赖的模块未定义
    """
    order: List[str] = []
    visited: Set[str] = set()

    for root_name in root_names:
        if root_name in visited:
            continue
        # 先标记再入栈，回到祖先的循环边会被直接跳过
        visited.add(root_name)
        stack = [(root_name, iter(registry.get_module(root_name).requires))]

        while stack:
            name, pending = stack[-1]
            for dependency in pending:
                if dependency not in visited:
                    visited.add(dependency)
                    module = registry.get_module(dependency, name)
                    stack.append((dependency, iter(module.requires)))
                    break
            else:
                stack.pop()
                order.append(name)

    return order


def ordered_records(module: Module) -> List[RegistrationRecord]:
    """常量先于提供者，同类记录保持排队顺序"""
    constants = [record for record in module.invoke_queue if record.kind == CONSTANT]
    others = [record for record in module.invoke_queue if record.kind != CONSTANT]
    return constants + others


def load_modules(registry: ModuleRegistry, root_names: Iterable[str], registrar: Any) -> List[str]:
    """
    按加载顺序把每个模块的注册队列应用到 registrar

    模块内先注册常量再注册提供者，提供者构造函数可以依赖排在它后面的常量

    Args:
        registry: 模块注册表
        root_names: 根模块名称
        registrar: 提供 constant / provider 方法的注册接口

    Returns:
        已加载的模块名称
    """
    order = resolve_load_order(registry, root_names)
    logger.debug(f"模块加载顺序: {order}")

    for name in order:
        module = registry.get_module(name)
        for record in ordered_records(module):
            getattr(registrar, record.kind)(*record.args)
        logger.debug(f"已加载模块: {name} (注册: {module.tokens()})")

    return order
