"""支持的 Git 提供方目录

已配置的提供方句柄需在此目录中才会出现在选择列表里。
"""

from __future__ import annotations

from dataclasses import dataclass

from repowizard.core.models import GitProviderHandle, ProviderView


@dataclass(frozen=True)
class SupportedProvider:
    id: str
    name: str


SUPPORTED_PROVIDERS: tuple[SupportedProvider, ...] = (
    SupportedProvider("github", "GitHub"),
    SupportedProvider("github-enterprise-server", "GitHub Enterprise Server"),
    SupportedProvider("gitlab", "GitLab"),
    SupportedProvider("gitlab-self-managed", "GitLab Self-managed"),
    SupportedProvider("bitbucket", "Bitbucket"),
    SupportedProvider("bitbucket-server", "Bitbucket Server"),
    SupportedProvider("gitea", "Gitea"),
    SupportedProvider("gitee", "Gitee"),
    SupportedProvider("gogs", "Gogs"),
    SupportedProvider("gitness", "Gitness"),
    SupportedProvider("azure-devops", "Azure DevOps"),
    SupportedProvider("aws-codecommit", "AWS CodeCommit"),
)

_BY_ID = {p.id: p for p in SUPPORTED_PROVIDERS}


def get_supported(provider_id: str) -> SupportedProvider | None:
    return _BY_ID.get(provider_id)


def is_supported(provider_id: str) -> bool:
    return provider_id in _BY_ID


def build_provider_views(handles: list[GitProviderHandle]) -> list[ProviderView]:
    """已配置句柄 × 支持目录 -> 选择列表行，不在目录中的句柄被丢弃"""
    views: list[ProviderView] = []
    for handle in handles:
        supported = get_supported(handle.provider_id)
        if supported is None:
            continue
        views.append(ProviderView(
            id=handle.id,
            provider_id=handle.provider_id,
            name=supported.name,
            username=handle.username,
            alias=handle.alias,
        ))
    return views
