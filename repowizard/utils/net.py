"""网络工具：URL 校验与拼接"""

from __future__ import annotations

from urllib.parse import quote, urlparse

from repowizard.core.exceptions import ValidationError

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES or not parsed.netloc:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL '{url}'{label}，仅支持 http/https 地址"
        )


def join_path(base: str, *segments: str) -> str:
    """拼接 API 路径，每段单独转义（命名空间 id 里可能带 '/'）"""
    parts = [quote(str(s), safe="") for s in segments]
    return "/".join([base.rstrip("/"), *parts])
