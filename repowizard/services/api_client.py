"""工作区服务端 REST API 客户端

同时满足 PagedQuery / SampleTemplateSource 协议，并提供 URL -> 代码仓解析：

  GET  /sample
  GET  /gitprovider/{provider}/namespaces?page=&perPage=
  GET  /gitprovider/{provider}/{namespace}/repositories?page=&perPage=
  GET  /gitprovider/{provider}/{namespace}/{repository}/branches?page=&perPage=
  POST /gitprovider/context        {"url": "..."}
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from repowizard.core.config import MAX_PAGE_SIZE
from repowizard.core.exceptions import ApiError
from repowizard.core.models import (
    BranchRef,
    Namespace,
    RepositoryRef,
    ResourceKind,
    Sample,
)
from repowizard.utils.net import join_path, validate_url_scheme

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = MAX_PAGE_SIZE


def _safe_int(value: Any, default: int, lo: int = 1, hi: int = 10000) -> int:
    """安全的整数转换，非法值取默认，越界截断"""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return max(lo, min(n, hi))


def normalize_paging(page: Any, per_page: Any) -> tuple[int, int]:
    """page 非法时取 1，per_page 非法时取 100"""
    return (
        _safe_int(page, 1),
        _safe_int(per_page, DEFAULT_PER_PAGE, hi=MAX_PER_PAGE),
    )


class ApiClient:
    """服务端 API 客户端"""

    def __init__(self, api_url: str, api_key: str = "", timeout: int = 30) -> None:
        validate_url_scheme(api_url, context="api_url")
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    # ---- PagedQuery ----

    def fetch(
        self,
        provider_id: str,
        resource_kind: ResourceKind,
        parent: Any,
        page: int,
        per_page: int,
    ) -> list[Any]:
        kind = ResourceKind(resource_kind)
        if kind == ResourceKind.NAMESPACE:
            return self.get_namespaces(provider_id, page=page, per_page=per_page)
        if kind == ResourceKind.REPOSITORY:
            return self.get_repositories(provider_id, parent.id, page=page, per_page=per_page)
        return self.get_branches(
            provider_id, parent.namespace_id, parent.id, page=page, per_page=per_page,
        )

    def get_namespaces(
        self, provider_id: str, *, page: int = 1, per_page: int = DEFAULT_PER_PAGE,
    ) -> list[Namespace]:
        path = join_path("/gitprovider", provider_id, "namespaces")
        data = self._get(path, self._paging(page, per_page))
        return [Namespace.from_dict(d) for d in data or []]

    def get_repositories(
        self, provider_id: str, namespace_id: str, *,
        page: int = 1, per_page: int = DEFAULT_PER_PAGE,
    ) -> list[RepositoryRef]:
        path = join_path("/gitprovider", provider_id, namespace_id, "repositories")
        data = self._get(path, self._paging(page, per_page))
        repos = []
        for d in data or []:
            repo = RepositoryRef.from_dict(d)
            repo.provider_id = repo.provider_id or provider_id
            repo.namespace_id = repo.namespace_id or namespace_id
            repos.append(repo)
        return repos

    def get_branches(
        self, provider_id: str, namespace_id: str, repository_id: str, *,
        page: int = 1, per_page: int = DEFAULT_PER_PAGE,
    ) -> list[BranchRef]:
        path = join_path("/gitprovider", provider_id, namespace_id, repository_id, "branches")
        data = self._get(path, self._paging(page, per_page))
        return [BranchRef.from_dict(d) for d in data or []]

    # ---- SampleTemplateSource ----

    def list_samples(self) -> list[Sample]:
        data = self._get("/sample")
        return [Sample.from_dict(d) for d in data or []]

    def resolve_sample(self, git_url: str) -> RepositoryRef:
        return self.resolve_url(git_url, source="sample")

    # ---- URL 解析 ----

    def resolve_url(self, url: str, *, source: str = "manual") -> RepositoryRef:
        """由仓库 URL 获取代码仓上下文（服务端识别提供方 / owner / 分支）"""
        data = self._request("POST", "/gitprovider/context", body={"url": url})
        if not isinstance(data, dict):
            raise ApiError(f"无法解析仓库 URL: {url}")
        repo = RepositoryRef.from_dict(data, source=source)
        repo.url = repo.url or url
        return repo

    # ---- 内部方法 ----

    @staticmethod
    def _paging(page: int, per_page: int) -> dict[str, int]:
        p, pp = normalize_paging(page, per_page)
        return {"page": p, "perPage": pp}

    def _get(self, path: str, query: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, query=query)

    def _request(
        self,
        method: str,
        path: str,
        *,
        query: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.api_url}{path}"
        if query:
            url = f"{url}?{urllib.parse.urlencode(query)}"

        headers = {"Accept": "application/json"}
        payload = None
        if body is not None:
            payload = json.dumps(body, ensure_ascii=False).encode()
            headers["Content-Type"] = "application/json"
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        req = urllib.request.Request(url, data=payload, method=method, headers=headers)
        logger.debug("%s %s", method, url)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # nosec B310
                raw = resp.read().decode()
        except urllib.error.HTTPError as e:
            raise ApiError(
                f"{method} {path} 返回 {e.code}: {self._error_message(e)}",
                status=e.code,
            ) from e
        except (urllib.error.URLError, OSError) as e:
            raise ApiError(f"无法连接服务端 {self.api_url}: {e}") from e

        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ApiError(f"{method} {path} 响应不是合法 JSON: {e}") from e

    @staticmethod
    def _error_message(err: urllib.error.HTTPError) -> str:
        """服务端错误体形如 {"error": "..."}，取不到时退化为 reason"""
        try:
            data = json.loads(err.read().decode() or "{}")
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            return str(err.reason)
        if isinstance(data, dict):
            return str(data.get("error") or data.get("message") or err.reason)
        return str(err.reason)
