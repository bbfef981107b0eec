"""代码仓选择向导

状态流转:
  ChooseSource ──> ManualEntry      （无提供方且无样例，或调用方要求手动）
               ──> SampleTemplate   （从样例创建）
               ──> ProviderFlow     （命名空间 -> 代码仓 -> [分支]）

任一阶段用户取消，立即返回 WizardResult.aborted()，不返回部分结果。
"""

from __future__ import annotations

import logging
from dataclasses import replace

from repowizard.core.exceptions import (
    ResolutionError,
    ValidationError,
    WizardAborted,
)
from repowizard.core.models import (
    CREATE_FROM_SAMPLE,
    CUSTOM_REPO,
    GitProviderHandle,
    Namespace,
    ProviderView,
    RepositoryRef,
    ResourceKind,
    Sample,
    WizardOptions,
    WizardResult,
)
from repowizard.core.protocols import (
    ManualEntry,
    PagedQuery,
    SampleTemplateSource,
    SelectionPrompt,
)
from repowizard.core.providers import build_provider_views
from repowizard.services.navigation import DEFAULT_PAGE_SIZE, NavigationLoop

logger = logging.getLogger(__name__)


class RepositoryWizard:
    """编排来源选择与三级导航"""

    def __init__(
        self,
        *,
        query: PagedQuery,
        prompt: SelectionPrompt,
        samples: SampleTemplateSource,
        manual_entry: ManualEntry,
        providers: list[GitProviderHandle],
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._prompt = prompt
        self._samples = samples
        self._manual_entry = manual_entry
        self._providers = list(providers)
        self._loop = NavigationLoop(query, prompt, page_size=page_size)

    def run(self, options: WizardOptions | None = None) -> WizardResult:
        """运行向导

        Returns:
            WizardResult: 完成时附带代码仓；用户取消时 status=aborted

        Raises:
            FetchError: 分页查询失败
            ResolutionError: 样例解析失败
        """
        options = options or WizardOptions()
        try:
            repo = self._choose(options)
        except WizardAborted as e:
            logger.info("向导已取消 (stage=%s)", e.stage or "-")
            return WizardResult.aborted()
        logger.info("向导完成: %s", repo.identity)
        return WizardResult.completed(repo)

    # ---- 来源选择 ----

    def _choose(self, options: WizardOptions) -> RepositoryRef:
        samples = self._list_samples()

        if (not self._providers and not samples) or options.manual:
            return self._manual(options)

        views = build_provider_views(self._providers)
        choice = self._prompt.choose_source(views, options.project_order, bool(samples))
        if not choice:
            raise WizardAborted("source")

        if choice == CUSTOM_REPO:
            return self._manual(options)
        if choice == CREATE_FROM_SAMPLE:
            return self._from_sample(samples)

        view = next((v for v in views if v.id == choice), None)
        if view is None:
            raise ValidationError(f"未知的 Git 提供方: {choice}")
        return self._provider_flow(view, options)

    def _list_samples(self) -> list[Sample]:
        """样例只是便捷入口，拉取失败按无样例处理"""
        try:
            return list(self._samples.list_samples())
        except Exception as e:  # noqa: BLE001
            logger.warning("获取样例列表失败（非致命）: %s", e)
            return []

    # ---- 手动输入 ----

    def _manual(self, options: WizardOptions) -> RepositoryRef:
        repo = self._manual_entry.get_repository(
            options.multi_project, options.project_order, options.selected_repos,
        )
        if repo is None:
            raise WizardAborted("manual")
        return repo

    # ---- 样例模板 ----

    def _from_sample(self, samples: list[Sample]) -> RepositoryRef:
        sample = self._prompt.choose_sample(samples)
        if sample is None:
            raise WizardAborted("sample")
        try:
            repo = self._samples.resolve_sample(sample.git_url)
        except Exception as e:
            raise ResolutionError(f"解析样例 {sample.name} ({sample.git_url}) 失败: {e}") from e
        return replace(repo, source="sample")

    # ---- 提供方逐级选择 ----

    def _provider_flow(self, view: ProviderView, options: WizardOptions) -> RepositoryRef:
        provider_id = view.provider_id

        namespace: Namespace = self._loop.run(
            provider_id, ResourceKind.NAMESPACE,
            context_label=view.label,
            short_circuit_single=True,
            project_order=options.project_order,
        )

        chosen: RepositoryRef = self._loop.run(
            provider_id, ResourceKind.REPOSITORY,
            parent=namespace,
            context_label=f"{provider_id}/{namespace.name}",
            project_order=options.project_order,
            selected_repos=options.selected_repos,
        )
        chosen = replace(
            chosen,
            provider_id=chosen.provider_id or provider_id,
            namespace_id=chosen.namespace_id or namespace.id,
            branch=None,
        )

        if options.skip_branch_selection:
            return chosen

        branch = self._loop.run(
            provider_id, ResourceKind.BRANCH,
            parent=chosen,
            context_label=f"{provider_id}/{namespace.name}/{chosen.name}",
            project_order=options.project_order,
        )
        return chosen.with_branch(branch)
