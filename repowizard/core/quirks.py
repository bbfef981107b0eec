"""提供方分页兼容性表

部分 Git 托管服务的列表接口不能可靠分页，此时服务端在第 1 页返回全集，
提示层只做本地滚动、不显示翻页控件。

按 (provider_id, resource_kind) 建表而不是按提供方打标记：
bitbucket 的仓库列表支持分页，命名空间 / 分支列表不支持。
"""

from __future__ import annotations

from repowizard.core.models import ResourceKind

# 列表接口整体不支持分页的提供方
UNPAGINATED_PROVIDERS: frozenset[str] = frozenset((
    "azure-devops",
    "bitbucket",
    "gitness",
    "aws-codecommit",
))

# 例外：(provider_id, resource_kind) -> 是否不支持分页
_OVERRIDES: dict[tuple[str, ResourceKind], bool] = {
    ("bitbucket", ResourceKind.REPOSITORY): False,
}


def _build_table() -> dict[tuple[str, ResourceKind], bool]:
    table = {
        (provider_id, kind): True
        for provider_id in UNPAGINATED_PROVIDERS
        for kind in ResourceKind
    }
    table.update(_OVERRIDES)
    return table


PAGINATION_UNSUPPORTED: dict[tuple[str, ResourceKind], bool] = _build_table()


def pagination_unsupported(provider_id: str, resource_kind: ResourceKind | str) -> bool:
    """该提供方的该类资源是否不支持服务端分页

    未登记的组合一律视为支持分页。
    """
    return PAGINATION_UNSUPPORTED.get((provider_id, ResourceKind(resource_kind)), False)


def pagination_enabled(provider_id: str, resource_kind: ResourceKind | str) -> bool:
    return not pagination_unsupported(provider_id, resource_kind)
