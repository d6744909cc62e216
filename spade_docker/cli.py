"""CLI命令行接口模块"""

from pathlib import Path
from typing import Optional

import typer

from spade_docker.cli_utils import (
    ToolContext,
    exit_on_error,
    get_image_manager,
    parse_architecture_option,
    parse_zig_version_option,
)
from spade_docker.formatters.records import format_prune_report, format_records
from spade_docker.managers.image.base import BuildArguments, ZigVersion
from spade_docker.utils import configure_logging

# 创建CLI应用
app = typer.Typer(
    help="管理Spade交叉编译Docker镜像",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich"
)

@app.callback()
def main_callback(
    ctx: typer.Context,
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="记录文件所在目录"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="显示调试日志"),
):
    """管理Spade交叉编译Docker镜像"""
    if verbose:
        configure_logging("DEBUG")
    ctx.obj = ToolContext(data_dir)

@app.command("build")
@exit_on_error
def build_image(
    ctx: typer.Context,
    architecture: str = typer.Option(
        ..., "-a", "--arch", help="目标架构：x86_64/aarch64", callback=parse_architecture_option
    ),
    zig_version: str = typer.Option(
        ZigVersion.V0_13_0.value, "--zig-version", help="要安装的Zig版本", callback=parse_zig_version_option
    ),
    spade_rev: str = typer.Option(..., "--spade-rev", help="要打包的Spade版本"),
    swim_rev: str = typer.Option(..., "--swim-rev", help="要打包的Swim版本"),
    context_dir: Optional[str] = typer.Option(None, "-c", "--context", help="构建上下文目录"),
    dockerfile: Optional[str] = typer.Option(None, "-f", "--file", help="Dockerfile路径"),
):
    """构建新镜像并记录"""
    image_manager = get_image_manager(ctx)

    if context_dir:
        image_manager.builder.context_dir = Path(context_dir)
    if dockerfile:
        image_manager.builder.dockerfile = dockerfile

    build_args = BuildArguments(
        architecture=architecture,
        zig_version=zig_version,
        spade_rev=spade_rev,
        swim_rev=swim_rev,
    )
    image_id = image_manager.build_image(build_args)
    typer.echo(image_id)

@app.command("clean")
@exit_on_error
def clean_images(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="只显示将要删除的镜像，不实际删除"),
):
    """清理已构建的镜像"""
    image_manager = get_image_manager(ctx)
    report = image_manager.cleanup_images(dry_run=dry_run)
    format_prune_report(report, dry_run)

@app.command("list")
@exit_on_error
def list_images(ctx: typer.Context):
    """列出已记录的镜像"""
    image_manager = get_image_manager(ctx)
    format_records(image_manager.list_images(), image_manager.store.location.record_path)

def main():
    """主入口函数"""
    app()

if __name__ == "__main__":
    main()
