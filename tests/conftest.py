"""共享测试替身：可编排的分页查询 / 提示 / 样例源 / 手动输入

  FakeQuery       按资源类型预置若干页数据，记录每次 fetch
  ScriptedPrompt  按资源类型依次返回预置的 NavigationOutcome
  FakeSamples     样例列表与解析，可注入失败
  FakeManual      手动输入，返回预置代码仓或 None（取消）
"""

from __future__ import annotations

from collections import deque
from typing import Any, Callable

import pytest

from repowizard.core.models import (
    NavigationOutcome,
    RepositoryRef,
    ResourceKind,
    Sample,
)


def pick(index: int) -> Callable[[list[Any]], NavigationOutcome]:
    """选择当前页第 index 项"""
    return lambda items: NavigationOutcome.selected(items[index])


class FakeQuery:
    def __init__(self, pages: dict[ResourceKind, list[list[Any]]] | None = None) -> None:
        self.pages = pages or {}
        self.errors: dict[ResourceKind, Exception] = {}
        self.calls: list[dict[str, Any]] = []

    def fetch(self, provider_id, resource_kind, parent, page, per_page):
        kind = ResourceKind(resource_kind)
        self.calls.append({
            "provider_id": provider_id, "kind": kind, "parent": parent,
            "page": page, "per_page": per_page,
        })
        if kind in self.errors:
            raise self.errors[kind]
        pages = self.pages.get(kind, [])
        return list(pages[page - 1]) if page <= len(pages) else []

    def calls_for(self, kind: ResourceKind) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["kind"] == kind]


class ScriptedPrompt:
    def __init__(
        self,
        outcomes: dict[ResourceKind, list[Any]] | None = None,
        *,
        source: str | None = None,
        sample_index: int | None = None,
    ) -> None:
        self.outcomes = {k: deque(v) for k, v in (outcomes or {}).items()}
        self.source = source
        self.sample_index = sample_index
        self.asked: list[dict[str, Any]] = []
        self.source_calls: list[dict[str, Any]] = []

    def ask(self, items, context_label, pagination_enabled, page, *,
            resource_kind, project_order=1, selected_repos=None):
        self.asked.append({
            "kind": resource_kind, "items": list(items), "label": context_label,
            "pagination_enabled": pagination_enabled, "page": page,
            "project_order": project_order, "selected_repos": selected_repos,
        })
        outcome = self.outcomes[resource_kind].popleft()
        return outcome(items) if callable(outcome) else outcome

    def asked_for(self, kind: ResourceKind) -> list[dict[str, Any]]:
        return [a for a in self.asked if a["kind"] == kind]

    def choose_source(self, providers, project_order, samples_available):
        self.source_calls.append({
            "providers": list(providers), "project_order": project_order,
            "samples_available": samples_available,
        })
        return self.source

    def choose_sample(self, samples):
        if self.sample_index is None:
            return None
        return samples[self.sample_index]


class FakeSamples:
    def __init__(self, samples: list[Sample] | None = None) -> None:
        self.samples = samples or []
        self.list_error: Exception | None = None
        self.resolve_error: Exception | None = None
        self.resolved: list[str] = []

    def list_samples(self):
        if self.list_error is not None:
            raise self.list_error
        return list(self.samples)

    def resolve_sample(self, git_url):
        self.resolved.append(git_url)
        if self.resolve_error is not None:
            raise self.resolve_error
        name = git_url.rstrip("/").split("/")[-1]
        return RepositoryRef(id=name, name=name, url=git_url, owner="samples", provider_id="github")


class FakeManual:
    def __init__(self, repo: RepositoryRef | None = None) -> None:
        self.repo = repo
        self.calls: list[tuple[bool, int, dict[str, int]]] = []

    def get_repository(self, multi_project, project_order, selected_repos):
        self.calls.append((multi_project, project_order, selected_repos))
        return self.repo


@pytest.fixture()
def query() -> FakeQuery:
    return FakeQuery()


@pytest.fixture()
def samples() -> FakeSamples:
    return FakeSamples()


@pytest.fixture()
def manual() -> FakeManual:
    return FakeManual(RepositoryRef(id="m", name="manual-repo", url="https://example.com/x/manual-repo.git",
                                    source="manual"))
