"""协作方协议定义

向导核心只依赖这些 Protocol，不依赖具体的 REST 客户端或终端提示实现。
使用 typing.Protocol 而非 ABC，使得现有类无需修改继承关系即可满足协议。
"""

from __future__ import annotations

from typing import Any, Protocol

from repowizard.core.models import (
    NavigationOutcome,
    ProviderView,
    RepositoryRef,
    ResourceKind,
    Sample,
)

# =========================================================================
# 分页查询协议
# =========================================================================


class PagedQuery(Protocol):
    """按页拉取某个提供方下的命名空间 / 代码仓 / 分支

    parent 为上一级选中的对象:
      - namespace: None
      - repository: Namespace
      - branch: RepositoryRef（携带 namespace_id）
    返回对应的 Namespace / RepositoryRef / BranchRef 列表。
    失败时直接抛出异常，由导航循环包装为 FetchError。
    """

    def fetch(
        self,
        provider_id: str,
        resource_kind: ResourceKind,
        parent: Any,
        page: int,
        per_page: int,
    ) -> list[Any]:
        ...


# =========================================================================
# 交互提示协议
# =========================================================================


class SelectionPrompt(Protocol):
    """向用户展示列表并返回选择或导航意图"""

    def ask(
        self,
        items: list[Any],
        context_label: str,
        pagination_enabled: bool,
        page: int,
        *,
        resource_kind: ResourceKind,
        project_order: int = 1,
        selected_repos: dict[str, int] | None = None,
    ) -> NavigationOutcome:
        """返回 Selected(item) / Navigate(next|prev) / Cancelled 之一"""
        ...

    def choose_source(
        self,
        providers: list[ProviderView],
        project_order: int,
        samples_available: bool,
    ) -> str | None:
        """返回提供方 id、CUSTOM_REPO / CREATE_FROM_SAMPLE 标识，取消时返回 None"""
        ...

    def choose_sample(self, samples: list[Sample]) -> Sample | None:
        ...


# =========================================================================
# 样例模板协议
# =========================================================================


class SampleTemplateSource(Protocol):
    """样例列表与样例 URL 解析"""

    def list_samples(self) -> list[Sample]:
        ...

    def resolve_sample(self, git_url: str) -> RepositoryRef:
        ...


# =========================================================================
# 手动输入协议
# =========================================================================


class ManualEntry(Protocol):
    """自由输入仓库 URL 并校验，取消时返回 None"""

    def get_repository(
        self,
        multi_project: bool,
        project_order: int,
        selected_repos: dict[str, int],
    ) -> RepositoryRef | None:
        ...
