"""
依赖注入模块

提供基于模块的依赖注入：模块注册常量和提供者，注入器按需解析并缓存单例
"""

from .annotator import annotate
from .cache import CacheSlot, InstanceCache, SlotState
from .decorators import inject, prototype
from .injector import INJECTOR_TOKEN, RESERVED_TOKENS, Injector, Registrar, create_injector
from .loader import load_modules, resolve_load_order
from .registry import Module, ModuleRegistry, RegistrationRecord, get_registry, module, reset_registry

__all__ = [
    'annotate',
    'CacheSlot',
    'InstanceCache',
    'SlotState',
    'inject',
    'prototype',
    'INJECTOR_TOKEN',
    'RESERVED_TOKENS',
    'Injector',
    'Registrar',
    'create_injector',
    'load_modules',
    'resolve_load_order',
    'Module',
    'ModuleRegistry',
    'RegistrationRecord',
    'get_registry',
    'module',
    'reset_registry',
]
