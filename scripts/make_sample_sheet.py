#!/usr/bin/env python
from __future__ import annotations

import argparse
from pathlib import Path

from openpyxl import Workbook


HEADER = ["Name", "Code", "Issued", "Notes"]

ROWS = [
    ["Banana", "B1", "031524", "ripe banana batch"],
    ["Apple", "A1", "022924", "see annex"],
    ["apple", "A2", "110123", "ANN"],
    ["Cherry", "C1", "070124", "planned"],
    ["Apple", "A3", "120523", "canned"],
]

CONTRACTIONS = ["ANN", "approx", "misc"]


def _write(path: Path, header: list[str], rows: list[list[str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(header)
    for row in rows:
        sheet.append(row)
    workbook.save(path)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a demo grid workbook and a contraction list")
    parser.add_argument("--output", required=True, help="Grid workbook path (.xlsx)")
    parser.add_argument("--contractions", help="Contraction workbook path (.xlsx)")
    args = parser.parse_args()

    output = Path(args.output)
    _write(output, HEADER, ROWS)
    print(f"Sample grid written: {output}")

    if args.contractions:
        contractions = Path(args.contractions)
        _write(contractions, ["Contraction"], [[value] for value in CONTRACTIONS])
        print(f"Sample contraction list written: {contractions}")


if __name__ == "__main__":
    main()
