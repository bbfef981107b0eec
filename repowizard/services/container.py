"""服务容器：统一依赖注入

CLI 通过 get_container() 获取服务，同一容器内实例共享。
提示层（终端交互）由调用方传入，容器只装配与界面无关的部分。

用法:
    container = ServiceContainer()
    wizard = container.build_wizard(prompt, manual_entry)
    result = wizard.run(WizardOptions(skip_branch_selection=True))
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repowizard.core.config import Config
    from repowizard.core.protocols import ManualEntry, SelectionPrompt
    from repowizard.services.api_client import ApiClient
    from repowizard.services.provider_service import ProviderRegistry
    from repowizard.services.wizard_service import RepositoryWizard

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(self, config: Config | None = None) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from repowizard.core.config import get_config
            config = get_config()
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    @property
    def api(self) -> ApiClient:
        if "api" not in self._instances:
            from repowizard.services.api_client import ApiClient
            self._instances["api"] = ApiClient(
                api_url=self._config.api_url,
                api_key=self._config.api_key,
                timeout=self._config.request_timeout,
            )
        return self._instances["api"]  # type: ignore[return-value]

    @property
    def providers(self) -> ProviderRegistry:
        if "providers" not in self._instances:
            from repowizard.services.provider_service import ProviderRegistry
            self._instances["providers"] = ProviderRegistry(
                registry_file=self._config.providers_file,
            )
        return self._instances["providers"]  # type: ignore[return-value]

    def build_wizard(
        self, prompt: SelectionPrompt, manual_entry: ManualEntry,
    ) -> RepositoryWizard:
        """每次调用返回新的向导实例，多项目批量创建时各自独立"""
        from repowizard.services.wizard_service import RepositoryWizard
        return RepositoryWizard(
            query=self.api,
            prompt=prompt,
            samples=self.api,
            manual_entry=manual_entry,
            providers=self.providers.list_handles(),
            page_size=self._config.page_size,
        )


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
