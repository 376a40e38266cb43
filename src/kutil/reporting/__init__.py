from .presenter import ReportPresenter, render_table
from .formatting import *

__all__ = [
    "ReportPresenter",
    "render_table",
    "fmt_cpu",
    "fmt_milli",
    "fmt_mem",
    "fmt_mib",
    "fmt_pct",
]
