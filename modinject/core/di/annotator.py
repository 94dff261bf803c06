"""
依赖注解解析

从可调用对象上提取有序的依赖 token 列表，支持三种形式：
- 数组形式: ['a', 'b', fn]
- 显式注解: fn.__inject__ = ['a', 'b'] 或 @inject('a', 'b')
- 隐式推断: 从参数签名读取参数名（严格模式下禁用）
"""

import inspect
import re
from typing import Any, Callable, List, Optional, Tuple

from ...exceptions import InvalidAnnotationError, MissingAnnotationError
from .decorators import INJECT_ATTR

# 两侧同时带下划线时各去掉一个: _b_ -> b
_SURROUNDING_UNDERSCORES = re.compile(r'^_(.+)_$')

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def is_array_form(target: Any) -> bool:
    """判断是否为数组形式注解（最后一个元素是函数，前面是 token）"""
    return isinstance(target, (list, tuple)) and len(target) > 0 and callable(target[-1])


def split_array_form(target: Any) -> Tuple[Optional[List[Any]], Callable]:
    """
    拆分数组形式注解

    Returns:
        (token 列表, 函数)；非数组形式时 token 列表为 None

    Raises:
        InvalidAnnotationError: 列表或元组的最后一个元素不可调用
    """
    if isinstance(target, (list, tuple)):
        if not is_array_form(target):
            raise InvalidAnnotationError(target)
        return list(target[:-1]), target[-1]
    return None, target


def get_explicit_tokens(target: Any) -> Optional[List[Any]]:
    """
    读取显式注解

    类只认自身声明的 __inject__，不继承父类的注解
    """
    if inspect.isclass(target):
        tokens = target.__dict__.get(INJECT_ATTR)
    else:
        tokens = getattr(target, INJECT_ATTR, None)
    return None if tokens is None else list(tokens)


def strip_surrounding_underscores(name: str) -> str:
    """_b_ -> b；只有一侧带下划线的名称保持不变"""
    match = _SURROUNDING_UNDERSCORES.match(name)
    return match.group(1) if match else name


def infer_tokens(target: Callable) -> List[str]:
    """
    从参数签名推断 token

    只取位置参数，*args / **kwargs / 仅限关键字参数不参与注入

    Raises:
        MissingAnnotationError: 无法读取签名
    """
    try:
        signature = inspect.signature(target)
    except (ValueError, TypeError):
        if inspect.isclass(target) and target.__init__ is object.__init__:
            return []
        raise MissingAnnotationError(
            target,
            f"Unable to infer dependencies of {target!r}: no introspectable signature"
        )

    return [
        strip_surrounding_underscores(param.name)
        for param in signature.parameters.values()
        if param.kind in _POSITIONAL_KINDS
    ]


def annotate(target: Any, strict: bool = False) -> List[Any]:
    """
    获取可调用对象的依赖 token 列表

    Args:
        target: 函数、类、绑定方法或数组形式注解
        strict: 严格模式下不允许隐式推断

    Returns:
        按声明顺序排列的 token 列表（原样返回，不校验类型）

    Raises:
        MissingAnnotationError: 严格模式下缺少显式注解
    """
    tokens, func = split_array_form(target)
    if tokens is not None:
        return tokens

    tokens = get_explicit_tokens(func)
    if tokens is not None:
        return tokens

    if strict:
        raise MissingAnnotationError(func)

    return infer_tokens(func)
