"""Text rendering of Delaney sets and symbols."""

from __future__ import annotations

from typing import List, Optional

from dsyms.core.model import ChamberSystem, DSym


def format_ops(ds: ChamberSystem) -> str:
    groups: List[str] = []
    for i in range(ds.dim() + 1):
        entries = []
        for D in range(1, ds.size() + 1):
            E = ds.index(i, D)
            if E == 0 or E >= D:
                entries.append(str(E))
        groups.append(" ".join(entries))
    return ",".join(groups)


def _header(ds: ChamberSystem, count1: int, count2: int) -> str:
    dims = f"{ds.size()}" if ds.dim() == 2 else f"{ds.size()} {ds.dim()}"
    return f"<{count1}.{count2}:{dims}:{format_ops(ds)}"


def format_dset(ds: ChamberSystem, count1: int = 1, count2: int = 1) -> str:
    return _header(ds, count1, count2) + ">"


def format_symbol(sym: DSym, count1: int = 1, count2: int = 1) -> str:
    """Render ``sym`` as ``<count1.count2:size[ dim]:ops:ms>``.

    The branching part lists, for each pair index, ``r * v`` of every orbit
    in orbit order.
    """
    orbs = sym.orbits
    groups: List[str] = []
    for i in range(sym.dim()):
        groups.append(" ".join(
            str(orb.r * v) for orb, v in zip(orbs, sym.vs) if orb.index == i
        ))
    return f"{_header(sym, count1, count2)}:{','.join(groups)}>"


def annotate(text: str, note: Optional[str]) -> str:
    return text if not note else f"{text} # {note}"
