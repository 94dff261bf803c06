"""
服务提供者

提供者对象暴露一个 $get 工厂，工厂的依赖与普通函数一样通过注解解析。支持两种写法：
- 映射: {'$get': fn}
- 对象: 任何带有可调用 get 属性的对象（通常是绑定方法）

$get 本身也可以是数组形式注解: {'$get': ['a', fn]}
"""

from collections.abc import Mapping
from typing import Any

from ...exceptions import InvalidProviderError
from .annotator import is_array_form

GET_KEY = '$get'


def get_factory(entry: Any) -> Any:
    """
    取出提供者的 $get 工厂

    Raises:
        InvalidProviderError: 提供者没有可调用的 $get
    """
    if isinstance(entry, Mapping):
        factory = entry.get(GET_KEY)
    else:
        factory = getattr(entry, 'get', None)

    if not (callable(factory) or is_array_form(factory)):
        raise InvalidProviderError(entry)
    return factory
