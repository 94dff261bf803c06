"""
公共工具函数
"""

from typing import Any, Callable


def constant(value: Any) -> Callable[[], Any]:
    """
    返回一个总是返回 value 的无参函数

    常用于提供者: {'$get': constant(42)}
    """
    def get_value() -> Any:
        return value
    return get_value
