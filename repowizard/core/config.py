"""集中配置管理

提供统一的配置入口：YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from repowizard.core.exceptions import ConfigError
from repowizard.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/default.yml"

# 服务端单页上限
MAX_PAGE_SIZE = 100

# 环境变量 -> 配置字段
_ENV_OVERRIDES = {
    "REPOWIZARD_API_URL": "api_url",
    "REPOWIZARD_API_KEY": "api_key",
}


@dataclass
class Config:
    """向导全局配置"""

    # 服务端
    api_url: str = "http://localhost:3986"
    api_key: str = ""
    request_timeout: int = 30  # 秒

    # 已配置的 Git 提供方注册表
    providers_file: str = "data/git_providers.yml"

    # 分页
    page_size: int = 100

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_PATH) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        cfg.page_size = _check_page_size(cfg.page_size)
        return cfg

    def apply_env(self) -> Config:
        """用环境变量覆盖对应字段（非空才覆盖）"""
        for env_key, attr in _ENV_OVERRIDES.items():
            value = os.getenv(env_key, "")
            if value:
                setattr(self, attr, value)
        return self


def _check_page_size(value: object) -> int:
    """page_size 须为正整数，超过 MAX_PAGE_SIZE 时截断并告警"""
    try:
        n = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise ConfigError(f"page_size 必须是整数: {value!r}") from e
    if n < 1:
        raise ConfigError(f"page_size 必须大于 0: {n}")
    if n > MAX_PAGE_SIZE:
        logger.warning("page_size=%d 超过服务端上限，按 %d 处理", n, MAX_PAGE_SIZE)
        return MAX_PAGE_SIZE
    return n


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config().apply_env()
    return _current


def init_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path).apply_env()
    logger.info("配置已加载: %s", path)
    return _current
