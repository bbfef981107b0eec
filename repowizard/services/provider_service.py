"""已配置 Git 提供方注册表

持久化在 YAML 文件的 git_providers 段，键为句柄 id:

    git_providers:
      gh-work:
        provider_id: github
        username: alice
        alias: work

手工编辑留下的空条目（`gh-work:`）或非映射条目在读取时跳过并告警。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from repowizard.core.exceptions import ConfigError, ValidationError
from repowizard.core.models import GitProviderHandle
from repowizard.core.providers import is_supported
from repowizard.utils.net import validate_url_scheme
from repowizard.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)

SECTION_KEY = "git_providers"


class ProviderRegistry:
    """GitProviderHandle 的增删查"""

    def __init__(self, registry_file: str = "") -> None:
        if not registry_file:
            from repowizard.core.config import get_config
            registry_file = get_config().providers_file
        self.registry_file = Path(registry_file)
        try:
            self._data: dict[str, Any] = load_yaml(self.registry_file)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"无法读取 Git 提供方注册表 {self.registry_file}: {e}") from e

    def _section(self) -> dict[str, Any]:
        section = self._data.get(SECTION_KEY)
        if not isinstance(section, dict):
            section = {}
            self._data[SECTION_KEY] = section
        return section

    def _to_handle(self, handle_id: str, entry: Any) -> GitProviderHandle | None:
        if not isinstance(entry, dict):
            logger.warning("忽略无效的 Git 提供方条目: %s (%s)", handle_id, self.registry_file)
            return None
        handle = GitProviderHandle.from_dict({**entry, "id": str(handle_id)})
        if not handle.provider_id:
            logger.warning("Git 提供方条目缺少 provider_id: %s", handle_id)
            return None
        return handle

    def add(self, handle: GitProviderHandle) -> bool:
        """写入句柄，已存在同 id 时覆盖。返回是否为覆盖"""
        if not handle.id:
            raise ValidationError("提供方 id 为必填")
        if not is_supported(handle.provider_id):
            raise ValidationError(f"不支持的 Git 提供方: {handle.provider_id}")
        if handle.base_api_url:
            validate_url_scheme(handle.base_api_url, context="base_api_url")
        replaced = self.get(handle.id) is not None
        section = self._section()
        section[handle.id] = {
            "provider_id": handle.provider_id,
            "username": handle.username,
            "alias": handle.alias,
            "base_api_url": handle.base_api_url,
        }
        save_yaml(self.registry_file, self._data)
        logger.info("Git 提供方已%s: %s (%s)",
                    "更新" if replaced else "添加", handle.id, handle.provider_id)
        return replaced

    def get(self, handle_id: str) -> GitProviderHandle | None:
        section = self._section()
        if handle_id not in section:
            return None
        return self._to_handle(handle_id, section[handle_id])

    def list_handles(self) -> list[GitProviderHandle]:
        handles = []
        for handle_id, entry in self._section().items():
            handle = self._to_handle(handle_id, entry)
            if handle is not None:
                handles.append(handle)
        return handles

    def remove(self, handle_id: str) -> bool:
        section = self._section()
        if handle_id not in section:
            return False
        del section[handle_id]
        save_yaml(self.registry_file, self._data)
        logger.info("Git 提供方已移除: %s", handle_id)
        return True
