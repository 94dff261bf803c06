"""
modinject 异常模块

提供容器相关的异常类
"""

from typing import Any, Dict, List, Optional, Sequence


class ModInjectException(Exception):
    """modinject 异常基类"""

    def __init__(
        self,
        message: str = "modinject error",
        code: str = "MODINJECT_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ModInjectException):
    """配置错误异常"""

    def __init__(
        self,
        message: str = "invalid configuration",
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.config_key = config_key
        super().__init__(message, "CONFIGURATION_ERROR", details)


class ModuleError(ModInjectException):
    """模块错误异常"""

    def __init__(
        self,
        message: str = "module error",
        module: Optional[str] = None,
        code: str = "MODULE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.module = module
        super().__init__(message, code, details)


class UnknownModuleError(ModuleError):
    """依赖的模块未定义"""

    def __init__(self, module: str, required_by: Optional[str] = None):
        if required_by:
            message = f"Module '{module}' is not available (required by '{required_by}')"
        else:
            message = f"Module '{module}' is not available"
        self.required_by = required_by
        super().__init__(message, module, "UNKNOWN_MODULE", {"required_by": required_by})


class RegistrationError(ModInjectException):
    """注册错误异常"""

    def __init__(
        self,
        message: str = "registration error",
        token: Optional[str] = None,
        code: str = "REGISTRATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.token = token
        super().__init__(message, code, details)


class ReservedTokenError(RegistrationError):
    """注册了保留的 token 名称"""

    def __init__(self, token: str):
        super().__init__(f"'{token}' is not a valid token name", token, "RESERVED_TOKEN")


class InvalidProviderError(RegistrationError, TypeError):
    """提供者没有可调用的 $get"""

    def __init__(self, entry: Any, token: Optional[str] = None):
        self.entry = entry
        super().__init__(f"Provider {entry!r} does not expose a callable $get", token, "INVALID_PROVIDER")


class DependencyError(ModInjectException):
    """依赖错误异常"""

    def __init__(
        self,
        message: str = "dependency error",
        dependency: Optional[str] = None,
        code: str = "DEPENDENCY_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.dependency = dependency
        super().__init__(message, code, details)


class UnknownTokenError(DependencyError):
    """token 既没有提供者也没有实例"""

    def __init__(self, token: str):
        super().__init__(f"Unknown provider: {token}", token, "UNKNOWN_TOKEN")


class CircularDependencyError(DependencyError):
    """
    循环依赖

    path 为按解析顺序排列的 token 链，最后一个元素是再次被请求的 token
    """

    def __init__(self, path: Sequence[str]):
        self.path: List[str] = list(path)
        super().__init__(
            "Circular dependency found: " + " <- ".join(self.path),
            self.path[-1] if self.path else None,
            "CIRCULAR_DEPENDENCY",
            {"path": self.path}
        )


class AnnotationError(ModInjectException):
    """注解错误异常"""

    def __init__(
        self,
        message: str = "annotation error",
        target: Any = None,
        code: str = "ANNOTATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.target = target
        super().__init__(message, code, details)


class NonStringTokenError(AnnotationError):
    """注解中出现了非字符串 token"""

    def __init__(self, token: Any, target: Any = None):
        self.token = token
        super().__init__(
            f"Incorrect injection token! Expected a string, got {token!r}",
            target,
            "NON_STRING_TOKEN",
            {"token": token}
        )


class InvalidAnnotationError(AnnotationError, TypeError):
    """数组形式注解的最后一个元素不可调用"""

    def __init__(self, target: Any):
        super().__init__(
            f"Array-form annotation must end with a callable, got {target!r}",
            target,
            "INVALID_ANNOTATION"
        )


class MissingAnnotationError(AnnotationError):
    """严格模式下缺少显式注解，或无法从签名推断依赖"""

    def __init__(self, target: Any, reason: Optional[str] = None):
        name = getattr(target, "__qualname__", None) or repr(target)
        message = reason or f"{name} is not using explicit annotation and cannot be invoked in strict mode"
        super().__init__(message, target, "MISSING_ANNOTATION")
