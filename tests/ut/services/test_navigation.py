"""NavigationLoop 单元测试"""

from __future__ import annotations

import pytest
from conftest import FakeQuery, ScriptedPrompt, pick

from repowizard.core.exceptions import FetchError, RepoWizardError, WizardAborted
from repowizard.core.models import (
    BranchRef,
    Namespace,
    NavigationOutcome,
    PageCursor,
    RepositoryRef,
    ResourceKind,
)
from repowizard.services.navigation import NavigationLoop

NS = ResourceKind.NAMESPACE
REPO = ResourceKind.REPOSITORY
BRANCH = ResourceKind.BRANCH


def _ns(*names: str) -> list[Namespace]:
    return [Namespace(id=n, name=n) for n in names]


def _repos(*names: str) -> list[RepositoryRef]:
    return [RepositoryRef(id=n, name=n, owner="acme", provider_id="github") for n in names]


class TestShortCircuit:
    """单结果直选"""

    def test_single_namespace_skips_prompt(self):
        query = FakeQuery({NS: [_ns("only")]})
        prompt = ScriptedPrompt()
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("github", NS, short_circuit_single=True)

        assert chosen.name == "only"
        assert prompt.asked == []
        assert len(query.calls) == 1

    def test_two_namespaces_prompt(self):
        query = FakeQuery({NS: [_ns("a", "b")]})
        prompt = ScriptedPrompt({NS: [pick(1)]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("github", NS, short_circuit_single=True)

        assert chosen.name == "b"
        assert len(prompt.asked) == 1

    def test_single_result_prompts_when_disabled(self):
        query = FakeQuery({REPO: [_repos("solo")]})
        prompt = ScriptedPrompt({REPO: [pick(0)]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("github", REPO, parent=Namespace(id="acme", name="acme"))

        assert chosen.name == "solo"
        assert len(prompt.asked) == 1

    def test_short_circuit_only_on_first_fetch(self):
        """翻页后恰好只剩 1 条，仍需用户确认"""
        query = FakeQuery({NS: [_ns("a", "b"), _ns("c")]})
        prompt = ScriptedPrompt({NS: [NavigationOutcome.next_page(), pick(0)]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("github", NS, short_circuit_single=True)

        assert chosen.name == "c"
        assert len(prompt.asked) == 2


class TestPagination:
    """翻页单调性"""

    def test_next_increments_page_and_refetches(self):
        query = FakeQuery({REPO: [_repos("a"), _repos("b"), _repos("c"), _repos("d")]})
        prompt = ScriptedPrompt({REPO: [
            NavigationOutcome.next_page(),
            NavigationOutcome.next_page(),
            NavigationOutcome.next_page(),
            pick(0),
        ]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("github", REPO, parent=Namespace(id="acme", name="acme"))

        assert chosen.name == "d"
        assert [c["page"] for c in query.calls] == [1, 2, 3, 4]
        assert [a["page"] for a in prompt.asked] == [1, 2, 3, 4]

    def test_prev_at_first_page_does_not_refetch(self):
        query = FakeQuery({NS: [_ns("a", "b")]})
        prompt = ScriptedPrompt({NS: [
            NavigationOutcome.prev_page(),
            NavigationOutcome.prev_page(),
            pick(0),
        ]})
        loop = NavigationLoop(query, prompt)

        loop.run("github", NS)

        assert len(query.calls) == 1
        assert [a["page"] for a in prompt.asked] == [1, 1, 1]

    def test_prev_after_next_goes_back(self):
        query = FakeQuery({NS: [_ns("a", "b"), _ns("c", "d")]})
        prompt = ScriptedPrompt({NS: [
            NavigationOutcome.next_page(),
            NavigationOutcome.prev_page(),
            pick(1),
        ]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("github", NS)

        assert chosen.name == "b"
        assert [c["page"] for c in query.calls] == [1, 2, 1]

    def test_page_size_passed_to_query(self):
        query = FakeQuery({NS: [_ns("a", "b")]})
        prompt = ScriptedPrompt({NS: [pick(0)]})
        loop = NavigationLoop(query, prompt, page_size=25)

        loop.run("gitlab", NS)

        assert query.calls[0]["per_page"] == 25

    def test_initial_cursor(self):
        query = FakeQuery({NS: [_ns("a"), _ns("b"), _ns("c", "d")]})
        prompt = ScriptedPrompt({NS: [pick(0)]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("github", NS, cursor=PageCursor(page=3, per_page=2))

        assert chosen.name == "c"
        assert query.calls[0]["page"] == 3
        assert query.calls[0]["per_page"] == 2


class TestProviderQuirks:
    """不支持分页的提供方"""

    def test_unpaginated_provider_single_fetch(self):
        query = FakeQuery({NS: [_ns("a", "b", "c")]})
        prompt = ScriptedPrompt({NS: [
            NavigationOutcome.next_page(),
            NavigationOutcome.prev_page(),
            pick(2),
        ]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("azure-devops", NS)

        assert chosen.name == "c"
        assert len(query.calls) == 1
        assert all(a["pagination_enabled"] is False for a in prompt.asked)

    def test_bitbucket_repositories_paginated(self):
        query = FakeQuery({REPO: [_repos("a"), _repos("b")]})
        prompt = ScriptedPrompt({REPO: [NavigationOutcome.next_page(), pick(0)]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run("bitbucket", REPO, parent=Namespace(id="ws", name="ws"))

        assert chosen.name == "b"
        assert prompt.asked[0]["pagination_enabled"] is True
        assert len(query.calls) == 2

    @pytest.mark.parametrize("kind", [NS, BRANCH])
    def test_bitbucket_other_kinds_not_paginated(self, kind):
        query = FakeQuery({kind: [[BranchRef("main"), BranchRef("dev")]]})
        prompt = ScriptedPrompt({kind: [pick(0)]})
        loop = NavigationLoop(query, prompt)

        loop.run("bitbucket", kind)

        assert prompt.asked[0]["pagination_enabled"] is False


class TestCancellation:
    def test_cancel_raises_aborted(self):
        query = FakeQuery({NS: [_ns("a", "b")]})
        prompt = ScriptedPrompt({NS: [NavigationOutcome.cancelled()]})
        loop = NavigationLoop(query, prompt)

        with pytest.raises(WizardAborted) as exc_info:
            loop.run("github", NS)

        assert exc_info.value.stage == "namespace"
        assert not isinstance(exc_info.value, RepoWizardError)

    def test_empty_selection_is_cancel(self):
        query = FakeQuery({BRANCH: [[BranchRef("main"), BranchRef("dev")]]})
        prompt = ScriptedPrompt({BRANCH: [NavigationOutcome.selected(None)]})
        loop = NavigationLoop(query, prompt)

        with pytest.raises(WizardAborted):
            loop.run("github", BRANCH)


class TestFetchFailure:
    def test_error_wrapped_with_kind(self):
        query = FakeQuery()
        query.errors[REPO] = ConnectionError("connection reset")
        loop = NavigationLoop(query, ScriptedPrompt())

        with pytest.raises(FetchError, match="加载代码仓失败") as exc_info:
            loop.run("github", REPO, parent=Namespace(id="acme", name="acme"))

        assert exc_info.value.resource_kind == "repository"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_error_on_later_page_not_retried(self):
        query = FakeQuery({NS: [_ns("a", "b")]})
        prompt = ScriptedPrompt({NS: [NavigationOutcome.next_page()]})
        loop = NavigationLoop(query, prompt)

        def fail_on_page_two(provider_id, resource_kind, parent, page, per_page):
            query.calls.append({"page": page})
            if page == 2:
                raise TimeoutError("timed out")
            return _ns("a", "b")

        query.fetch = fail_on_page_two  # type: ignore[method-assign]

        with pytest.raises(FetchError, match="命名空间"):
            loop.run("github", NS)
        assert [c["page"] for c in query.calls] == [1, 2]


class TestPromptContext:
    def test_selected_repos_passed_through_unchanged(self):
        selected = {"github/acme/a": 1}
        snapshot = dict(selected)
        query = FakeQuery({REPO: [_repos("a", "b")]})
        prompt = ScriptedPrompt({REPO: [pick(0)]})
        loop = NavigationLoop(query, prompt)

        chosen = loop.run(
            "github", REPO, parent=Namespace(id="acme", name="acme"),
            context_label="github/acme", project_order=2, selected_repos=selected,
        )

        assert chosen.name == "a"
        asked = prompt.asked[0]
        assert asked["selected_repos"] is selected
        assert asked["label"] == "github/acme"
        assert asked["project_order"] == 2
        assert selected == snapshot

    def test_parent_forwarded_to_query(self):
        ns = Namespace(id="acme", name="acme")
        query = FakeQuery({REPO: [_repos("a", "b")]})
        loop = NavigationLoop(query, ScriptedPrompt({REPO: [pick(0)]}))

        loop.run("github", REPO, parent=ns)

        assert query.calls[0]["parent"] is ns
