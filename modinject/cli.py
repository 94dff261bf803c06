#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
modinject CLI 工具

导入定义模块的 Python 模块，查看模块加载顺序或解析指定 token
"""

import importlib
import os
import sys
from typing import Optional, Tuple

import click

from .core.config import get_settings, reload_config
from .core.di import create_injector, get_registry, resolve_load_order
from .core.logger import get_logger, setup_logging
from .exceptions import ModInjectException

log = get_logger("modinject.cli")


def _import_target(target: str) -> None:
    """导入定义模块的 Python 模块，模块定义会写入默认注册表"""
    # 控制台脚本不会把当前目录加入 sys.path
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())
    try:
        importlib.import_module(target)
    except ImportError as e:
        raise click.ClickException(f"无法导入 '{target}': {e}") from e
    log.debug(f"已导入: {target}")


@click.group()
@click.option('--config', 'config_file', default=None, help='配置文件路径或 URL')
@click.option('--log-level', default=None, help='日志级别（覆盖配置文件）')
def cli(config_file: Optional[str], log_level: Optional[str]):
    """modinject 命令行工具 - 查看模块图和解析依赖"""
    reload_config()
    get_settings(config_file)
    setup_logging(config_file, level=log_level)


@cli.command()
@click.argument('target')
@click.argument('roots', nargs=-1, required=True)
def graph(target: str, roots: Tuple[str, ...]):
    """导入 TARGET 并打印 ROOTS 的模块加载顺序"""
    _import_target(target)
    registry = get_registry()

    try:
        order = resolve_load_order(registry, roots)
    except ModInjectException as e:
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    for index, name in enumerate(order, start=1):
        module = registry.get_module(name)
        requires = ', '.join(module.requires) or '-'
        tokens = ', '.join(module.tokens()) or '-'
        click.echo(f"{index}. {name}")
        click.echo(f"   requires: {requires}")
        click.echo(f"   tokens:   {tokens}")


@cli.command()
@click.argument('target')
@click.argument('roots', nargs=-1, required=True)
@click.option('--token', required=True, help='要解析的 token')
@click.option('--strict/--no-strict', default=None, help='严格模式（默认读取配置 injector.strict）')
def resolve(target: str, roots: Tuple[str, ...], token: str, strict: Optional[bool]):
    """导入 TARGET，用 ROOTS 创建注入器并打印 TOKEN 的值"""
    _import_target(target)

    try:
        injector = create_injector(roots, strict=strict)
        value = injector.get(token)
    except ModInjectException as e:
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        # 提供者工厂自身抛出的异常
        click.echo(f"❌ 提供者执行失败: {type(e).__name__}: {e}", err=True)
        log.debug(f"解析 {token} 失败: {e!r}")
        sys.exit(1)

    click.echo(repr(value))


def main():
    """命令行入口"""
    cli()


if __name__ == '__main__':
    main()
