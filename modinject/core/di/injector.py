"""
依赖注入器

Injector 持有一次解析会话的提供者缓存和实例缓存，按需递归解析 token 并缓存单例
"""

import inspect
import types
from typing import Any, Dict, Iterable, List, Mapping, Optional

from loguru import logger

from ...exceptions import (
    CircularDependencyError,
    InvalidProviderError,
    NonStringTokenError,
    ReservedTokenError,
    UnknownTokenError,
)
from ..config import get_injector_settings
from .annotator import annotate, split_array_form
from .cache import InstanceCache
from .decorators import get_prototype
from .loader import load_modules
from .providers import get_factory
from .registry import ModuleRegistry, get_registry

# 注入器自身以该 token 注册，$get 工厂可以依赖它做延迟查找
INJECTOR_TOKEN = '$injector'

RESERVED_TOKENS = frozenset({'hasOwnProperty', INJECTOR_TOKEN})

# 提供者构造函数通过 <token>Provider 依赖其他提供者本身
PROVIDER_SUFFIX = 'Provider'

# 初始化函数返回这些类型的值时仍以接收者为结果
_SCALAR_TYPES = (bool, int, float, complex, str, bytes)


class Registrar:
    """模块注册队列使用的注册接口"""

    def __init__(self, injector: 'Injector', reserved_tokens: Iterable[str] = ()):
        self.injector = injector
        self.reserved_tokens = RESERVED_TOKENS | frozenset(reserved_tokens)
        self.constants: Dict[str, Any] = {}

    def _check_token(self, token: str) -> None:
        if token in self.reserved_tokens:
            raise ReservedTokenError(token)

    def constant(self, token: str, value: Any) -> None:
        """直接写入实例缓存，不经过提供者"""
        self._check_token(token)
        self.constants[token] = value
        self.injector.instance_cache.put(token, value)
        logger.debug(f"已注册常量: {token}")

    def provider(self, token: str, entry: Any) -> None:
        """
        注册提供者

        entry 是类时先构造实例，再把实例作为提供者。构造函数只能依赖常量和
        已注册的提供者（<token>Provider），不会触发任何 $get
        """
        self._check_token(token)
        if inspect.isclass(entry):
            entry = self._construct_provider(entry)
        # 提前校验，避免到首次 get 时才发现没有 $get
        try:
            get_factory(entry)
        except InvalidProviderError:
            raise InvalidProviderError(entry, token) from None
        self.injector.provider_cache[token] = entry
        logger.debug(f"已注册提供者: {token}")

    def _construct_provider(self, provider_class: type) -> Any:
        tokens = self.injector.annotate(provider_class)
        for token in tokens:
            if not isinstance(token, str):
                raise NonStringTokenError(token, provider_class)
        return provider_class(*[self._provider_dependency(token) for token in tokens])

    def _provider_dependency(self, token: str) -> Any:
        if token in self.constants:
            return self.constants[token]
        if token.endswith(PROVIDER_SUFFIX):
            name = token[:-len(PROVIDER_SUFFIX)]
            if name in self.injector.provider_cache:
                return self.injector.provider_cache[name]
        raise UnknownTokenError(token)


class Injector:
    """依赖注入器"""

    def __init__(self, strict: bool = False, reserved_tokens: Iterable[str] = ()):
        """
        初始化注入器

        Args:
            strict: 严格模式，禁止从参数签名隐式推断依赖
            reserved_tokens: 额外的保留 token
        """
        self._strict = bool(strict)
        self.provider_cache: Dict[str, Any] = {}
        self.instance_cache = InstanceCache()
        self.registrar = Registrar(self, reserved_tokens)
        # 正在解析的 token，按解析顺序排列
        self._path: List[str] = []

        self.instance_cache.put(INJECTOR_TOKEN, self)

    @property
    def strict(self) -> bool:
        return self._strict

    def has(self, token: str) -> bool:
        """token 是否已有实例（含解析中）或提供者"""
        return token in self.instance_cache or token in self.provider_cache

    def get(self, token: str) -> Any:
        """
        获取 token 对应的单例，首次请求时调用提供者的 $get

        Raises:
            UnknownTokenError: token 没有提供者也没有实例
            CircularDependencyError: token 正在解析中

        Note:
            解析沿依赖链递归，链的深度受解释器递归深度限制
        """
        slot = self.instance_cache.slot(token)
        if slot.is_ready:
            return slot.value
        if slot.in_progress:
            raise CircularDependencyError(self._path + [token])
        if token not in self.provider_cache:
            raise UnknownTokenError(token)
        return self._instantiate_provider(token)

    def _instantiate_provider(self, token: str) -> Any:
        factory = get_factory(self.provider_cache[token])

        self.instance_cache.mark_in_progress(token)
        self._path.append(token)
        try:
            value = self.invoke(factory)
        except BaseException:
            # 不缓存失败，下次 get 重新调用 $get
            self.instance_cache.reset(token)
            logger.debug(f"提供者 '{token}' 实例化失败，已重置缓存槽")
            raise
        finally:
            self._path.pop()

        self.instance_cache.put(token, value)
        logger.debug(f"已实例化: {token}")
        return value

    def annotate(self, fn: Any) -> List[Any]:
        """获取依赖 token 列表"""
        return annotate(fn, self._strict)

    def invoke(self, fn: Any, context: Any = None, locals_: Optional[Mapping[str, Any]] = None) -> Any:
        """
        注入依赖并调用函数

        Args:
            fn: 函数或数组形式注解
            context: 接收者，给出时绑定为函数的第一个参数，不参与注入
            locals_: 覆盖值，优先于缓存

        Returns:
            函数返回值，函数抛出的异常原样向上传播

        Raises:
            NonStringTokenError: 注解中有非字符串 token（在解析任何依赖之前检查）
        """
        tokens, func = split_array_form(fn)
        if context is not None:
            func = types.MethodType(func, context)
        if tokens is None:
            tokens = self.annotate(func)

        for token in tokens:
            if not isinstance(token, str):
                raise NonStringTokenError(token, func)

        locals_ = locals_ or {}
        args = [
            locals_[token] if token in locals_ else self.get(token)
            for token in tokens
        ]
        return func(*args)

    def instantiate(self, type_: Any, locals_: Optional[Mapping[str, Any]] = None) -> Any:
        """
        注入依赖并构造对象

        类直接以解析出的参数调用；普通初始化函数先分配一个带有 @prototype 能力的接收者，
        再把接收者作为第一个参数传入。函数返回对象时以返回值为结果，返回 None 或
        数字、字符串、bytes 等标量时仍返回接收者

        Args:
            type_: 类、初始化函数或数组形式注解
            locals_: 覆盖值，优先于缓存
        """
        _, ctor = split_array_form(type_)
        if inspect.isclass(ctor):
            return self.invoke(type_, None, locals_)

        instance = _allocate(ctor)
        result = self.invoke(type_, instance, locals_)
        if result is None or isinstance(result, _SCALAR_TYPES):
            return instance
        return result


def _allocate(initializer: Any) -> Any:
    base = get_prototype(initializer)
    if base is None:
        return types.SimpleNamespace()
    return base.__new__(base)


def create_injector(
    root_names: Iterable[str] = (),
    strict: Optional[bool] = None,
    registry: Optional[ModuleRegistry] = None
) -> Injector:
    """
    加载根模块及其依赖的模块，创建新的注入器

    Args:
        root_names: 根模块名称
        strict: 严格模式，为 None 时读取配置 injector.strict
        registry: 模块注册表，为 None 时使用默认注册表

    Returns:
        Injector 实例

    Raises:
        UnknownModuleError: 依赖的模块未定义
        ReservedTokenError: 模块注册了保留 token
    """
    settings = get_injector_settings()
    if strict is None:
        strict = settings.strict
    if registry is None:
        registry = get_registry()

    injector = Injector(strict, settings.reserved_tokens)
    load_modules(registry, list(root_names), injector.registrar)
    return injector
