"""镜像记录格式化模块"""

from pathlib import Path
from typing import List

from loguru import logger

from ..managers.image.base import PruneReport


def format_records(records: List[str], record_path: Path) -> None:
    """格式化并显示已记录的镜像

    Args:
        records: 镜像ID列表
        record_path: 记录文件路径
    """
    logger.info(f"记录文件: {record_path}")
    if not records:
        logger.info("当前没有已记录的镜像")
        return

    logger.info(f"已记录 {len(records)} 个镜像:")
    for index, image_id in enumerate(records, 1):
        logger.info(f"  {index}. {image_id}")


def format_prune_report(report: PruneReport, dry_run: bool = False) -> None:
    """格式化并显示清理结果

    Args:
        report: 清理结果
        dry_run: 是否为模拟运行
    """
    if dry_run:
        logger.warning("模拟运行模式，不会实际删除镜像")

    removed = report["removed"]
    if removed:
        logger.warning("将删除以下镜像:" if dry_run else "已删除以下镜像:")
        for image_id in removed:
            logger.warning(f"  - {image_id}")
    else:
        logger.success("没有需要删除的镜像")

    if report["forgotten"]:
        logger.info("以下镜像已不存在，已从记录中移除:")
        for image_id in report["forgotten"]:
            logger.info(f"  - {image_id}")

    if report["kept"]:
        logger.success("以下镜像保留在记录中:")
        for image_id in report["kept"]:
            logger.success(f"  - {image_id}")

    if not dry_run and removed:
        logger.success(f"已成功删除 {len(removed)} 个镜像")
