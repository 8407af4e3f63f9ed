from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from dsyms.core.dset import DelaneySet
from dsyms.core.model import DSym, InvalidDelaneySetError, SearchOptions, SymbolSyntaxError
from dsyms.core.orbits import all_orbits


@dataclass
class InputFile:
    sets: List[DelaneySet]
    options: SearchOptions = field(default_factory=SearchOptions)


def _ints(text: str) -> List[int]:
    try:
        return [int(tok) for tok in text.split()]
    except ValueError as exc:
        raise SymbolSyntaxError(f"expected integers, got {text!r}") from exc


def _is_size_field(text: str) -> bool:
    tokens = text.split()
    return 1 <= len(tokens) <= 2 and all(tok.isdigit() for tok in tokens)


def _split(text: str) -> List[str]:
    body = text.strip()
    if not (body.startswith("<") and body.endswith(">")):
        raise SymbolSyntaxError(f"symbol must be enclosed in <...>: {text!r}")
    parts = body[1:-1].split(":")

    # the leading numbering field is optional, so three fields are either
    # "number:size:ops" or "size:ops:ms"; ops always has dim + 1 groups
    if len(parts) == 4:
        parts = parts[1:]
    elif len(parts) == 3 and _is_size_field(parts[1]):
        header = parts[1].split()
        dim = int(header[1]) if len(header) == 2 else 2
        if len(parts[2].split(",")) == dim + 1:
            parts = parts[1:]

    if len(parts) not in (2, 3):
        raise SymbolSyntaxError(f"wrong number of ':' separated fields in {text!r}")
    return parts


def _parse_ops(size: int, dim: int, text: str) -> List[List[int]]:
    groups = text.split(",")
    if len(groups) != dim + 1:
        raise SymbolSyntaxError(f"expected {dim + 1} index groups, got {len(groups)}")

    ops: List[List[int]] = []
    for i, group in enumerate(groups):
        nums = _ints(group)
        op = [0] * (size + 1)
        done = [False] * (size + 1)
        pos = 0
        for D in range(1, size + 1):
            if done[D]:
                continue
            if pos >= len(nums):
                raise SymbolSyntaxError(f"index group {i} is too short: {group!r}")
            E = nums[pos]
            pos += 1
            if not 0 <= E <= size or (E and done[E]):
                raise SymbolSyntaxError(f"bad partner {E} for chamber {D} in index group {i}")
            op[D] = E
            done[D] = True
            if E:
                op[E] = D
                done[E] = True
        if pos != len(nums):
            raise SymbolSyntaxError(f"index group {i} has trailing entries: {group!r}")
        ops.append(op[1:])

    return ops


def parse_dset(text: str) -> DelaneySet:
    """Parse the Delaney set part of ``<n.m:size [dim]:ops[:ms]>``."""
    parts = _split(text)
    header = _ints(parts[0])
    if len(header) not in (1, 2):
        raise SymbolSyntaxError(f"bad size field {parts[0]!r}")
    size = header[0]
    dim = header[1] if len(header) == 2 else 2
    if size < 1 or dim < 0:
        raise SymbolSyntaxError(f"bad size field {parts[0]!r}")

    try:
        return DelaneySet.from_lists(_parse_ops(size, dim, parts[1]))
    except InvalidDelaneySetError as exc:
        raise SymbolSyntaxError(f"{text!r}: {exc}") from exc


def parse_symbol(text: str) -> DSym:
    """Parse a full symbol; the branching part lists ``r * v`` for every orbit."""
    parts = _split(text)
    if len(parts) != 3:
        raise SymbolSyntaxError(f"symbol has no branching part: {text!r}")
    dset = parse_dset(text)
    orbs = all_orbits(dset)

    groups = parts[2].split(",")
    if len(groups) != dset.dim():
        raise SymbolSyntaxError(f"expected {dset.dim()} branching groups, got {len(groups)}")

    ms: List[int] = []
    for group in groups:
        ms.extend(_ints(group))
    if len(ms) != len(orbs):
        raise SymbolSyntaxError(f"expected {len(orbs)} branching values, got {len(ms)}")

    vs = []
    for orb, m in zip(orbs, ms):
        if m <= 0 or m % orb.r:
            raise SymbolSyntaxError(f"branching {m} is not a positive multiple of {orb.r}")
        vs.append(m // orb.r)

    return DSym(dset, tuple(vs))


def _dset_entry(entry: Any) -> DelaneySet:
    if isinstance(entry, str):
        return parse_dset(entry)
    if isinstance(entry, dict) and "ops" in entry:
        dset = DelaneySet.from_lists(entry["ops"])
        if "size" in entry and int(entry["size"]) != dset.size():
            raise SymbolSyntaxError(f"size {entry['size']} does not match index tables")
        if "dim" in entry and int(entry["dim"]) != dset.dim():
            raise SymbolSyntaxError(f"dim {entry['dim']} does not match index tables")
        return dset
    raise SymbolSyntaxError(f"cannot read Delaney set from {entry!r}")


def load_options(data: Dict[str, Any]) -> SearchOptions:
    defaults = SearchOptions()
    max_branching = data.get("max_branching", defaults.max_branching)
    check_signatures = data.get("check_signatures", defaults.check_signatures)

    if isinstance(max_branching, bool) or not isinstance(max_branching, int):
        raise SymbolSyntaxError(f"max_branching must be an integer, got {max_branching!r}")
    if not isinstance(check_signatures, bool):
        raise SymbolSyntaxError(f"check_signatures must be true or false, got {check_signatures!r}")

    try:
        return SearchOptions(max_branching=max_branching, check_signatures=check_signatures)
    except ValueError as exc:
        raise SymbolSyntaxError(str(exc)) from exc


def load_input(path: str | Path) -> InputFile:
    """Load a YAML file with a ``sets`` list and optional ``options`` mapping."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if isinstance(data, list):
        data = {"sets": data}
    options = data.get("options", {}) or {}
    sets = [_dset_entry(e) for e in data.get("sets", [])]

    return InputFile(sets=sets, options=load_options(options))
