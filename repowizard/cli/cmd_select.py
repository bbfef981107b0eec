"""CLI: 运行代码仓选择向导"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict

import click

from repowizard.cli import _svc
from repowizard.cli.prompt import ClickManualEntry, ClickSelectionPrompt
from repowizard.core.exceptions import RepoWizardError
from repowizard.core.models import WizardOptions


def register(group: click.Group) -> None:
    group.add_command(select)


@click.command()
@click.option("--manual", is_flag=True, help="跳过提供方，直接输入仓库 URL")
@click.option("--skip-branch", is_flag=True, help="不选择分支")
@click.option("--multi-project", is_flag=True, help="批量创建中的一个项目")
@click.option("--project-order", default=1, type=click.IntRange(min=1), help="项目序号")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出结果")
def select(
    manual: bool, skip_branch: bool, multi_project: bool,
    project_order: int, as_json: bool,
) -> None:
    """交互式选择代码仓（及分支）"""
    options = WizardOptions(
        manual=manual,
        multi_project=multi_project,
        skip_branch_selection=skip_branch,
        project_order=project_order,
    )
    try:
        container = _svc()
        wizard = container.build_wizard(
            ClickSelectionPrompt(), ClickManualEntry(container.api),
        )
        result = wizard.run(options)
    except RepoWizardError as e:
        click.echo(f"错误: {e}", err=True)
        sys.exit(2)

    # 用户取消：静默退出
    if not result.ok or result.repository is None:
        sys.exit(1)

    repo = result.repository
    if as_json:
        click.echo(json.dumps(asdict(repo), ensure_ascii=False, indent=2))
        return
    click.echo(f"代码仓: {repo.identity}")
    click.echo(f"URL:    {repo.url or '-'}")
    if repo.branch is not None:
        click.echo(f"分支:   {repo.branch.name}")
