from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional
import psutil
from .utils import format_bytes

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PartitionUsage:
    mountpoint: str
    fstype: str
    total: int
    used: int
    free: int
    percent: float

def find_mountpoint(path: str):
    """Partition whose mountpoint is the longest prefix of `path`."""
    target = os.path.realpath(path)
    best = None
    best_len = -1
    for p in psutil.disk_partitions(all=True):
        mp = p.mountpoint
        if not mp:
            continue
        mp_norm = os.path.abspath(mp)
        try:
            inside = os.path.commonpath([target, mp_norm]) == mp_norm
        except ValueError:  # different drives on Windows
            continue
        if inside and len(mp_norm) > best_len:
            best, best_len = p, len(mp_norm)
    return best

def partition_usage(path: str) -> Optional[PartitionUsage]:
    part = find_mountpoint(path)
    mountpoint = os.path.abspath(part.mountpoint) if part else os.path.realpath(path)
    try:
        u = psutil.disk_usage(mountpoint)
    except OSError as e:
        logger.warning("Unable to read filesystem usage for %s: %s", mountpoint, e)
        return None
    return PartitionUsage(
        mountpoint=mountpoint,
        fstype=part.fstype if part else "",
        total=int(u.total),
        used=int(u.used),
        free=int(u.free),
        percent=float(u.percent),
    )

def describe(usage: PartitionUsage, si: bool = False) -> str:
    fs = f" [{usage.fstype}]" if usage.fstype else ""
    return (f"{usage.mountpoint}{fs}: {format_bytes(usage.used, si)} used of "
            f"{format_bytes(usage.total, si)} ({usage.percent:.1f}%), "
            f"{format_bytes(usage.free, si)} free")
