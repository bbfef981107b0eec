"""分页导航循环

命名空间 / 代码仓 / 分支三级选择共用同一个循环，按资源类型与
"单结果直选" 开关参数化：

  fetch(page) ──> [首次且仅 1 条?] ──是──> 直接返回
                       │否
                       v
                  prompt.ask ──Selected──> 返回
                       │
                       ├─ Navigate(next) ──> page+1, 重新 fetch
                       ├─ Navigate(prev) ──> page>1 时 page-1 并 fetch，否则原页重提示
                       └─ Cancelled ──────> 抛出 WizardAborted

拉取失败不重试，包装为 FetchError 直接终止本次向导。
"""

from __future__ import annotations

import logging
from typing import Any

from repowizard.core.exceptions import FetchError, WizardAborted
from repowizard.core.models import (
    Direction,
    OutcomeKind,
    PageCursor,
    ResourceKind,
)
from repowizard.core.protocols import PagedQuery, SelectionPrompt
from repowizard.core.quirks import pagination_enabled

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class NavigationLoop:
    """单级资源的分页选择状态机

    每次 run() 独占自己的游标，不修改传入的 selected_repos。
    """

    def __init__(
        self,
        query: PagedQuery,
        prompt: SelectionPrompt,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._query = query
        self._prompt = prompt
        self._page_size = page_size

    def run(
        self,
        provider_id: str,
        resource_kind: ResourceKind,
        *,
        parent: Any = None,
        context_label: str = "",
        short_circuit_single: bool = False,
        project_order: int = 1,
        selected_repos: dict[str, int] | None = None,
        cursor: PageCursor | None = None,
    ) -> Any:
        """运行到用户选中一项为止，返回该项

        Raises:
            FetchError: 分页查询失败
            WizardAborted: 用户取消
        """
        cursor = cursor or PageCursor(per_page=self._page_size)
        paginated = pagination_enabled(provider_id, resource_kind)

        items = self._fetch(provider_id, resource_kind, parent, cursor)
        if short_circuit_single and len(items) == 1:
            logger.info("%s 仅有一项，自动选择: %s", resource_kind.label, items[0])
            return items[0]

        while True:
            outcome = self._prompt.ask(
                items, context_label, paginated, cursor.page,
                resource_kind=resource_kind,
                project_order=project_order,
                selected_repos=selected_repos,
            )

            if outcome.kind == OutcomeKind.CANCELLED:
                raise WizardAborted(resource_kind.value)

            if outcome.kind == OutcomeKind.SELECTED:
                if outcome.item is None:
                    raise WizardAborted(resource_kind.value)
                logger.info("已选择%s: %s", resource_kind.label, outcome.item)
                return outcome.item

            # Navigate
            if not paginated:
                logger.debug("%s 不支持分页，忽略翻页: %s", provider_id, outcome.direction)
                continue

            moved = cursor.next() if outcome.direction == Direction.NEXT else cursor.prev()
            if moved == cursor:
                logger.debug("已在第 1 页，忽略上一页")
                continue
            cursor = moved
            items = self._fetch(provider_id, resource_kind, parent, cursor)

    def _fetch(
        self,
        provider_id: str,
        resource_kind: ResourceKind,
        parent: Any,
        cursor: PageCursor,
    ) -> list[Any]:
        logger.debug(
            "加载%s: provider=%s page=%d per_page=%d",
            resource_kind.label, provider_id, cursor.page, cursor.per_page,
        )
        try:
            items = self._query.fetch(
                provider_id, resource_kind, parent, cursor.page, cursor.per_page,
            )
        except Exception as e:
            raise FetchError(
                f"加载{resource_kind.label}失败: {e}",
                resource_kind=resource_kind.value,
            ) from e
        return list(items)
