"""repowizard 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os
import sys
from typing import Any

import click

from repowizard import __version__
from repowizard.core.config import DEFAULT_CONFIG_PATH, init_config
from repowizard.core.exceptions import RepoWizardError
from repowizard.services.container import get_container, reset_container
from repowizard.utils.logger import setup_logging


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path", default=DEFAULT_CONFIG_PATH,
    envvar="REPOWIZARD_CONFIG", show_default=True, help="配置文件路径",
)
def main(config_path: str) -> None:
    """repowizard - 交互式选择 Git 代码仓与分支"""
    setup_logging(
        level=os.getenv("REPOWIZARD_LOG_LEVEL", "WARNING"),
        json_output=os.getenv("REPOWIZARD_LOG_JSON", "") == "1",
    )
    try:
        init_config(config_path)
    except RepoWizardError as e:
        click.echo(f"错误: {e}", err=True)
        sys.exit(2)
    reset_container()


# 注册各领域子命令
from repowizard.cli.cmd_select import register as _reg_select  # noqa: E402
from repowizard.cli.cmd_provider import register as _reg_provider  # noqa: E402

_reg_select(main)
_reg_provider(main)
