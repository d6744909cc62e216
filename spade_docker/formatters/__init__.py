"""输出格式化模块"""

from .records import format_prune_report, format_records

__all__ = [
    "format_records",
    "format_prune_report",
]
