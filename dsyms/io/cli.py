"""Command-line interface for generating Delaney symbols."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from dsyms.core.generator import DSymGenerator
from dsyms.core.model import DSym
from . import parser
from .format import annotate, format_symbol

logger = logging.getLogger(__name__)


def _print_all(gen: DSymGenerator, count1: int) -> int:
    count2 = 0
    for count2, sym in enumerate(gen, 1):
        note = None
        curv = sym.curvature
        if curv >= 0:
            note = f"{curv} {gen.signature(sym.vs) or '-'}"
        print(annotate(format_symbol(sym, count1, count2), note))
    return count2


def _print_minimal(gen: DSymGenerator, count1: int) -> int:
    st = gen.root()
    curv = st.curvature
    text = format_symbol(DSym(gen.dset, st.vs), count1, 1)
    if curv < 0:
        print(text)
    else:
        print(annotate(text, str(curv)))
        print(f"# {sorted(gen.orbit_maps)}")
    return 1


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Enumerate Delaney symbols over the given Delaney sets")
    ap.add_argument("input", type=Path, help="YAML file listing Delaney sets")
    ap.add_argument("--max-branching", type=int, default=None, help="largest branching number tried per orbit")
    ap.add_argument("--minimal", action="store_true", help="only print the minimal branching per set")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="log progress to stderr")
    args = ap.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        data = parser.load_input(args.input)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Cannot read {args.input}: {exc}") from exc

    options = data.options
    if args.max_branching is not None:
        try:
            options = replace(options, max_branching=args.max_branching)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc

    total = 0
    for count1, dset in enumerate(data.sets, 1):
        gen = DSymGenerator(dset, options)
        found = _print_minimal(gen, count1) if args.minimal else _print_all(gen, count1)
        logger.info(f"set {count1}: {found} symbol(s)")
        total += found

    logger.info(f"{len(data.sets)} set(s), {total} symbol(s) in total")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
