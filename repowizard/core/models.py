"""核心数据模型

向导各层共享的数据类集中定义：
提供方句柄、命名空间、代码仓引用、分支、分页游标、导航结果、向导结果。
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from repowizard.core.exceptions import ValidationError

# =========================================================================
# 资源类型
# =========================================================================


class ResourceKind(str, Enum):
    """分页查询的资源类型，按向导顺序排列"""
    NAMESPACE = "namespace"
    REPOSITORY = "repository"
    BRANCH = "branch"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    ResourceKind.NAMESPACE: "命名空间",
    ResourceKind.REPOSITORY: "代码仓",
    ResourceKind.BRANCH: "分支",
}


# =========================================================================
# 提供方领域模型
# =========================================================================


@dataclass(frozen=True)
class GitProviderHandle:
    """用户已配置的 Git 托管服务连接，加载后只读"""

    id: str
    provider_id: str               # github | gitlab | bitbucket | ...
    username: str = ""
    alias: str = ""
    base_api_url: str = ""         # 自托管实例地址（可选）

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GitProviderHandle:
        return cls(
            id=str(data.get("id", "")),
            provider_id=str(data.get("provider_id") or data.get("providerId", "")),
            username=str(data.get("username", "")),
            alias=str(data.get("alias", "")),
            base_api_url=str(data.get("base_api_url") or data.get("baseApiUrl") or ""),
        )


@dataclass
class ProviderView:
    """提供方选择列表中的一行（已配置句柄 + 支持列表中的显示名）"""

    id: str
    provider_id: str
    name: str
    username: str = ""
    alias: str = ""

    @property
    def label(self) -> str:
        who = self.alias or self.username
        return f"{self.name} ({who})" if who else self.name


@dataclass
class Sample:
    """样例模板：与提供方无关的快速起步仓库"""

    name: str
    git_url: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Sample:
        return cls(
            name=str(data.get("name", "")),
            git_url=str(data.get("git_url") or data.get("gitUrl", "")),
            description=str(data.get("description", "")),
        )


# =========================================================================
# 代码仓领域模型
# =========================================================================


@dataclass
class Namespace:
    """组织 / 用户 / 群组作用域"""

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Namespace:
        return cls(id=str(data.get("id", "")), name=str(data.get("name", "")))


@dataclass
class BranchRef:
    """分支引用"""

    name: str
    sha: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BranchRef:
        return cls(name=str(data.get("name", "")), sha=str(data.get("sha", "")))


@dataclass
class RepositoryRef:
    """向导的最终产物，返回后归调用方所有

    source:
      - provider: 通过提供方逐级选择
      - sample: 由样例模板解析
      - manual: 手动输入 URL
    """

    id: str
    name: str
    url: str = ""
    owner: str = ""
    provider_id: str = ""
    namespace_id: str = ""
    source: str = "provider"   # provider | sample | manual
    branch: BranchRef | None = None

    @property
    def identity(self) -> str:
        """selected_repos 的键：provider/owner/name，缺 owner 时退化为 URL"""
        if self.owner:
            return f"{self.provider_id}/{self.owner}/{self.name}"
        return self.url or self.id

    def with_branch(self, branch: BranchRef) -> RepositoryRef:
        return replace(self, branch=branch)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, source: str = "provider") -> RepositoryRef:
        repo = cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            url=str(data.get("url", "")),
            owner=str(data.get("owner", "")),
            provider_id=str(data.get("provider_id") or data.get("providerId") or ""),
            namespace_id=str(data.get("namespace_id") or data.get("namespaceId") or ""),
            source=source,
        )
        if data.get("branch"):
            repo.branch = BranchRef(name=str(data["branch"]), sha=str(data.get("sha", "")))
        return repo


# =========================================================================
# 导航状态
# =========================================================================


@dataclass(frozen=True)
class PageCursor:
    """分页游标，page 从 1 开始；prev 在第 1 页不动"""

    page: int = 1
    per_page: int = 100

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError(f"page 必须 >= 1: {self.page}")
        if self.per_page < 1:
            raise ValidationError(f"per_page 必须 >= 1: {self.per_page}")

    @property
    def at_first(self) -> bool:
        return self.page == 1

    def next(self) -> PageCursor:
        return replace(self, page=self.page + 1)

    def prev(self) -> PageCursor:
        if self.at_first:
            return self
        return replace(self, page=self.page - 1)


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"


class OutcomeKind(str, Enum):
    SELECTED = "selected"
    NAVIGATE = "navigate"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class NavigationOutcome:
    """一次提示交互的结果：选中 / 翻页 / 取消，三者恰居其一"""

    kind: OutcomeKind
    item: Any = None
    direction: Direction | None = None

    @classmethod
    def selected(cls, item: Any) -> NavigationOutcome:
        return cls(kind=OutcomeKind.SELECTED, item=item)

    @classmethod
    def navigate(cls, direction: Direction | str) -> NavigationOutcome:
        return cls(kind=OutcomeKind.NAVIGATE, direction=Direction(direction))

    @classmethod
    def next_page(cls) -> NavigationOutcome:
        return cls.navigate(Direction.NEXT)

    @classmethod
    def prev_page(cls) -> NavigationOutcome:
        return cls.navigate(Direction.PREV)

    @classmethod
    def cancelled(cls) -> NavigationOutcome:
        return cls(kind=OutcomeKind.CANCELLED)


# =========================================================================
# 向导输入 / 输出
# =========================================================================


@dataclass
class WizardOptions:
    """单次向导运行的调用参数"""

    manual: bool = False                 # 仅手动输入 URL
    multi_project: bool = False          # 批量创建多个项目
    skip_branch_selection: bool = False
    project_order: int = 1               # 批量创建中的项目序号（用于提示标题）
    # 本次会话已选代码仓 identity -> 项目序号，仅用于提示中的标注
    selected_repos: dict[str, int] = field(default_factory=dict)


class WizardStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class WizardResult:
    """向导结果：完成（附代码仓）或用户取消，取消不是错误"""

    status: WizardStatus
    repository: RepositoryRef | None = None

    @classmethod
    def completed(cls, repository: RepositoryRef) -> WizardResult:
        return cls(status=WizardStatus.COMPLETED, repository=repository)

    @classmethod
    def aborted(cls) -> WizardResult:
        return cls(status=WizardStatus.ABORTED)

    @property
    def ok(self) -> bool:
        return self.status == WizardStatus.COMPLETED


# 来源选择中的两个非提供方选项
CUSTOM_REPO = "<CUSTOM_REPO>"
CREATE_FROM_SAMPLE = "<CREATE_FROM_SAMPLE>"
