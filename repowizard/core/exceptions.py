"""统一异常体系

所有业务异常继承 RepoWizardError。
CLI 层据此输出友好提示；用户主动取消不属于异常体系，见 WizardAborted。
"""

from __future__ import annotations


class RepoWizardError(Exception):
    """向导基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(RepoWizardError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(RepoWizardError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ApiError(RepoWizardError):
    """服务端 API 调用失败（传输错误或非 2xx 响应）"""

    code = "API_ERROR"

    def __init__(self, message: str, status: int = 0) -> None:
        super().__init__(message)
        self.status = status


class FetchError(RepoWizardError):
    """分页查询失败，携带资源类型上下文，对本次向导是致命的"""

    code = "FETCH_ERROR"

    def __init__(self, message: str, resource_kind: str = "") -> None:
        super().__init__(message)
        self.resource_kind = resource_kind


class ResolutionError(RepoWizardError):
    """样例 / URL 解析为代码仓失败"""

    code = "RESOLUTION_ERROR"


class WizardAborted(Exception):  # noqa: N818
    """用户在任一提示处主动退出

    不继承 RepoWizardError：调用方 ``except RepoWizardError`` 不会误把取消当作失败。
    仅在向导内部传播，由编排器转换为 WizardResult.aborted()。
    """

    def __init__(self, stage: str = "") -> None:
        super().__init__(f"用户取消: {stage}" if stage else "用户取消")
        self.stage = stage
