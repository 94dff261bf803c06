"""
依赖注入装饰器

提供 @inject 显式注解和 @prototype 能力声明
"""

from typing import Any, Callable, Optional

INJECT_ATTR = '__inject__'
PROTOTYPE_ATTR = '__prototype__'


def inject(*tokens: str) -> Callable:
    """
    依赖注入装饰器

    为函数或类附加显式的依赖 token 列表，等价于直接设置 ``fn.__inject__``

    Example:
        @inject('user_repository', 'mailer')
        def make_user_service(repo, mailer):
            return UserService(repo, mailer)
    """
    def decorator(target):
        setattr(target, INJECT_ATTR, list(tokens))
        return target
    return decorator


def prototype(base: type) -> Callable:
    """
    声明初始化函数构造对象时使用的能力类型

    Injector.instantiate 会先分配一个 base 的实例，再把它作为第一个参数传给初始化函数，
    因此 base 上定义的方法在初始化函数里和结果对象上都可用

    Example:
        class Counter:
            def start(self):
                return 42

        @prototype(Counter)
        def make_counter(self):
            self.value = self.start()
    """
    def decorator(func):
        setattr(func, PROTOTYPE_ATTR, base)
        return func
    return decorator


def get_prototype(func: Any) -> Optional[type]:
    """获取初始化函数声明的能力类型"""
    return getattr(func, PROTOTYPE_ATTR, None)
