"""终端交互适配器（click）

实现 SelectionPrompt / ManualEntry 协议：编号列表 + 单行输入。
输入约定: 数字选择，n 下一页，p 上一页，q 取消；Ctrl-C / EOF 同取消。
"""

from __future__ import annotations

from typing import Any

import click

from repowizard.core.exceptions import ApiError, ResolutionError, ValidationError
from repowizard.core.models import (
    CREATE_FROM_SAMPLE,
    CUSTOM_REPO,
    BranchRef,
    Namespace,
    NavigationOutcome,
    ProviderView,
    RepositoryRef,
    ResourceKind,
    Sample,
)
from repowizard.utils.net import validate_url_scheme

CANCEL_KEYS = frozenset(("q", "quit"))
NEXT_KEY = "n"
PREV_KEY = "p"

# 不支持服务端分页时，本地每屏显示条数
DEFAULT_WINDOW = 20


def describe(item: Any, selected_repos: dict[str, int] | None = None) -> str:
    """列表行文本"""
    if isinstance(item, Namespace):
        return item.name or item.id
    if isinstance(item, RepositoryRef):
        text = f"{item.owner}/{item.name}" if item.owner else item.name
        order = (selected_repos or {}).get(item.identity)
        if order is not None:
            text += f"  [已被项目 #{order} 选择]"
        return text
    if isinstance(item, BranchRef):
        return item.name
    return str(item)


def _title(kind_label: str, project_order: int, context_label: str) -> str:
    title = f"项目 #{project_order} - 选择{kind_label}"
    if context_label:
        title += f" ({context_label})"
    return title


def _read(label: str) -> str | None:
    """读一行输入，Ctrl-C / EOF 返回 None"""
    try:
        return str(click.prompt(label, default="", show_default=False)).strip()
    except click.Abort:
        return None


def _pick(title: str, labels: list[str]) -> int | None:
    """简单编号选择，返回下标；取消返回 None"""
    while True:
        click.echo(title)
        for i, label in enumerate(labels, start=1):
            click.echo(f"  {i:3d}) {label}")
        answer = _read("请选择 [q 取消]")
        if answer is None or answer.lower() in CANCEL_KEYS:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(labels):
            return int(answer) - 1
        click.echo(f"无效输入: {answer}")


class ClickSelectionPrompt:
    """基于 click 的列表选择"""

    def __init__(self, window: int = DEFAULT_WINDOW) -> None:
        self.window = window

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
        offset = 0
        title = _title(resource_kind.label, project_order, context_label)
        if pagination_enabled:
            title += f"  第 {page} 页"

        while True:
            click.echo(title)
            visible = items if pagination_enabled else items[offset:offset + self.window]
            start = 1 if pagination_enabled else offset + 1
            for i, item in enumerate(visible, start=start):
                click.echo(f"  {i:3d}) {describe(item, selected_repos)}")
            if not items:
                click.echo("  (无结果)")

            answer = _read(f"请选择 [{self._hints(items, pagination_enabled, page, offset)}]")
            if answer is None or answer.lower() in CANCEL_KEYS:
                return NavigationOutcome.cancelled()

            key = answer.lower()
            if key == NEXT_KEY:
                if pagination_enabled:
                    return NavigationOutcome.next_page()
                if offset + self.window < len(items):
                    offset += self.window
                continue
            if key == PREV_KEY:
                if pagination_enabled:
                    return NavigationOutcome.prev_page()
                offset = max(0, offset - self.window)
                continue
            if answer.isdigit() and 1 <= int(answer) <= len(items):
                return NavigationOutcome.selected(items[int(answer) - 1])
            click.echo(f"无效输入: {answer}")

    def _hints(self, items: list[Any], pagination_enabled: bool, page: int, offset: int) -> str:
        hints = []
        if pagination_enabled:
            hints.append("n 下一页")
            if page > 1:
                hints.append("p 上一页")
        elif len(items) > self.window:
            if offset + self.window < len(items):
                hints.append("n 向下")
            if offset > 0:
                hints.append("p 向上")
        hints.append("q 取消")
        return " / ".join(hints)

    def choose_source(
        self,
        providers: list[ProviderView],
        project_order: int,
        samples_available: bool,
    ) -> str | None:
        choices = [(p.id, p.label) for p in providers]
        choices.append((CUSTOM_REPO, "输入自定义仓库 URL"))
        if samples_available:
            choices.append((CREATE_FROM_SAMPLE, "从样例创建"))
        idx = _pick(f"项目 #{project_order} - 选择 Git 提供方", [label for _, label in choices])
        return None if idx is None else choices[idx][0]

    def choose_sample(self, samples: list[Sample]) -> Sample | None:
        labels = [
            f"{s.name} - {s.description}" if s.description else s.name
            for s in samples
        ]
        idx = _pick("选择样例", labels)
        return None if idx is None else samples[idx]


class ClickManualEntry:
    """手动输入仓库 URL，交给服务端解析为代码仓"""

    def __init__(self, resolver: Any) -> None:
        self._resolver = resolver

    def get_repository(
        self,
        multi_project: bool,
        project_order: int,
        selected_repos: dict[str, int],
    ) -> RepositoryRef | None:
        label = f"项目 #{project_order} 的仓库 URL" if multi_project else "仓库 URL"
        while True:
            url = _read(label)
            if not url:
                return None
            try:
                validate_url_scheme(url, context="仓库 URL")
            except ValidationError as e:
                click.echo(str(e))
                continue
            try:
                repo = self._resolver.resolve_url(url)
            except ApiError as e:
                raise ResolutionError(f"解析仓库 URL 失败: {e}") from e

            order = selected_repos.get(repo.identity)
            if order is not None:
                click.echo(f"提示: 该仓库已被项目 #{order} 选择")
            return repo
