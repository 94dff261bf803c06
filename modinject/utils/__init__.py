"""
工具函数模块
"""

from .common import constant

__all__ = [
    "constant",
]
