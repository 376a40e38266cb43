"""Display formatting for millicore and byte quantities."""

KIB = 1024
MIB = 1024 ** 2
GIB = 1024 ** 3
TIB = 1024 ** 4


def _precision(value: float) -> int:
    """0 decimals for whole amounts, 1 otherwise."""
    return 0 if f"{value:.1f}".endswith("0") else 1


def fmt_cpu(millicores: int) -> str:
    """Millicores as vCPU, e.g. ``2 vCPU`` or ``1.5 vCPU``."""
    cores = millicores / 1000
    return f"{cores:.{_precision(cores)}f} vCPU"


def fmt_milli(millicores: int) -> str:
    return f"{millicores}m"


def fmt_mem(num_bytes: int) -> str:
    """Bytes as TiB or GiB (0 or 1 decimals), MiB below one GiB."""
    if num_bytes >= TIB:
        tib = num_bytes / TIB
        return f"{tib:.{_precision(tib)}f} TiB"
    if num_bytes >= GIB:
        gib = num_bytes / GIB
        return f"{gib:.{_precision(gib)}f} GiB"
    return f"{num_bytes / MIB:.0f} MiB"


def fmt_mib(num_bytes: int) -> str:
    return f"{num_bytes / MIB:.0f} MiB"


def fmt_pct(pct: int) -> str:
    return f"{pct}%"
