"""
配置管理模块

使用 Dynaconf 加载配置，支持远程配置文件、配置文件优先级、环境变量覆盖
injector 配置段通过 pydantic 模型校验
"""

import hashlib
import os
import tempfile
from pathlib import Path
from typing import List, Optional

import requests
from dynaconf import Dynaconf
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError


class InjectorSettings(BaseModel):
    """injector 配置段"""

    strict: bool = False
    reserved_tokens: List[str] = Field(default_factory=list)

    @field_validator('reserved_tokens')
    @classmethod
    def _check_reserved_tokens(cls, value: List[str]) -> List[str]:
        for token in value:
            if not token.strip():
                raise ValueError("reserved token names must not be blank")
        return value


def _find_project_root() -> str:
    """查找项目根目录"""
    current_dir = Path(__file__).parent.absolute()

    while current_dir.parent != current_dir:
        if (current_dir / 'pyproject.toml').exists():
            return str(current_dir)
        current_dir = current_dir.parent

    return os.getcwd()


def _is_url(path: Optional[str]) -> bool:
    """检查是否为 URL"""
    return bool(path) and path.startswith(('http://', 'https://'))


def _download_config(url: str, cache_dir: str) -> str:
    """下载配置文件到缓存，下载失败时回退到已有缓存"""
    url_hash = hashlib.md5(url.encode()).hexdigest()
    cache_path = os.path.join(cache_dir, f"{url_hash}.yaml")

    try:
        logger.info(f"正在下载配置文件: {url}")
        response = requests.get(url, timeout=30)
        response.raise_for_status()

        with open(cache_path, 'w', encoding='utf-8') as f:
            f.write(response.text)

        logger.debug(f"配置文件已缓存到: {cache_path}")
        return cache_path
    except requests.RequestException as e:
        if os.path.exists(cache_path):
            logger.warning(f"下载配置文件失败 ({e})，使用缓存: {cache_path}")
            return cache_path
        raise ConfigurationError(f"Unable to download configuration from {url}: {e}") from e


def _get_config_files(config_file: Optional[str] = None) -> list:
    """获取配置文件列表，按优先级排序

    优先级：环境变量 > 参数指定 > 项目根目录/conf > 项目根目录
    """
    project_root = _find_project_root()
    cache_dir = os.path.join(tempfile.gettempdir(), 'modinject_config_cache')
    os.makedirs(cache_dir, exist_ok=True)

    config_files = []
    added_paths = set()

    config_paths = [
        os.getenv('CONFIG_FILE'),
        config_file,
        os.path.join(project_root, 'conf', 'config.yaml'),
        os.path.join(project_root, 'conf', 'config.yml'),
        os.path.join(project_root, 'config.yaml'),
        os.path.join(project_root, 'config.yml'),
    ]

    for config_path in config_paths:
        if not config_path:
            continue

        if _is_url(config_path):
            downloaded_path = _download_config(config_path, cache_dir)
            if downloaded_path not in added_paths:
                config_files.append(downloaded_path)
                added_paths.add(downloaded_path)
        elif os.path.exists(config_path) and config_path not in added_paths:
            config_files.append(config_path)
            added_paths.add(config_path)

    return config_files


def create_settings(config_file: Optional[str] = None) -> Dynaconf:
    """创建 Dynaconf 设置实例"""
    return Dynaconf(
        settings_files=_get_config_files(config_file),
        # 禁用环境变量前缀，INJECTOR__STRICT=true 直接覆盖 injector.strict
        envvar_prefix=False,
        envvar_separator="__",
        env_parse_values=True,
        ignore_unknown_envvars=True,
        merge_enabled=True,
    )


# 全局配置实例
_settings: Optional[Dynaconf] = None


def get_settings(config_file: Optional[str] = None) -> Dynaconf:
    """获取 Dynaconf 设置实例"""
    global _settings

    if _settings is None:
        _settings = create_settings(config_file)

    return _settings


def get_injector_settings(settings: Optional[Dynaconf] = None) -> InjectorSettings:
    """
    读取并校验 injector 配置段

    Args:
        settings: Dynaconf 实例，为 None 时使用全局配置

    Returns:
        InjectorSettings 实例

    Raises:
        ConfigurationError: 配置值不合法
    """
    settings = settings if settings is not None else get_settings()
    data = {"strict": settings.get("injector.strict", False)}
    reserved = settings.get("injector.reserved_tokens", None)
    if reserved is not None:
        # 原样交给 pydantic 校验，字符串不会被当成字符序列
        data["reserved_tokens"] = reserved
    try:
        return InjectorSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid injector configuration: {e}",
            config_key="injector",
            details={"errors": e.errors()}
        ) from e


def reload_config() -> None:
    """重新加载配置"""
    global _settings
    _settings = None
