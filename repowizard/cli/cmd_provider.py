"""CLI: Git 提供方管理"""

from __future__ import annotations

import click

from repowizard.cli import _svc
from repowizard.core.exceptions import ValidationError
from repowizard.core.models import GitProviderHandle, ResourceKind
from repowizard.core.providers import SUPPORTED_PROVIDERS, get_supported
from repowizard.core.quirks import pagination_unsupported


def register(group: click.Group) -> None:
    group.add_command(provider_group)


@click.group(name="provider")
def provider_group() -> None:
    """已配置的 Git 提供方"""


@provider_group.command(name="list")
def provider_list() -> None:
    """列出已配置的提供方"""
    handles = _svc().providers.list_handles()
    if not handles:
        click.echo("没有已配置的 Git 提供方。")
        return
    for h in handles:
        supported = get_supported(h.provider_id)
        name = supported.name if supported else f"{h.provider_id} (不支持)"
        line = f"  {h.id:20s} [{name}] {h.username or '-'}  {h.alias}"
        if h.base_api_url:
            line += f"  {h.base_api_url}"
        click.echo(line)


@provider_group.command(name="add")
@click.argument("handle_id")
@click.option(
    "--provider", "provider_id", required=True,
    type=click.Choice([p.id for p in SUPPORTED_PROVIDERS]), help="提供方类型",
)
@click.option("--username", default="", help="用户名")
@click.option("--alias", default="", help="别名")
@click.option("--base-api-url", default="", help="自托管实例 API 地址")
def provider_add(
    handle_id: str, provider_id: str, username: str, alias: str, base_api_url: str,
) -> None:
    """添加提供方"""
    try:
        replaced = _svc().providers.add(GitProviderHandle(
            id=handle_id, provider_id=provider_id,
            username=username, alias=alias, base_api_url=base_api_url,
        ))
    except ValidationError as e:
        raise click.ClickException(str(e)) from e
    action = "已更新" if replaced else "已添加"
    click.echo(f"Git 提供方{action}: {handle_id} ({provider_id})")


@provider_group.command(name="remove")
@click.argument("handle_id")
def provider_remove(handle_id: str) -> None:
    """移除提供方"""
    if _svc().providers.remove(handle_id):
        click.echo(f"Git 提供方已移除: {handle_id}")
    else:
        click.echo(f"Git 提供方不存在: {handle_id}")


@provider_group.command(name="supported")
def provider_supported() -> None:
    """列出支持的提供方及各资源是否分页"""
    kinds = list(ResourceKind)
    click.echo(f"  {'id':26s} {'名称':24s} " + " ".join(f"{k.value:10s}" for k in kinds))
    for p in SUPPORTED_PROVIDERS:
        flags = " ".join(
            f"{'不分页' if pagination_unsupported(p.id, k) else '分页':10s}" for k in kinds
        )
        click.echo(f"  {p.id:26s} {p.name:24s} {flags}")
