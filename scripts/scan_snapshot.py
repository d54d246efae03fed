#!/usr/bin/env python3
"""
Print the turnover board for a portfolio exported as CSV.

- properties.csv    id,name,internalName
- reservations.csv  id,propertyId,guestName,checkIn,checkOut[,checkInTime,checkOutTime]
- inventory.csv     id,name,stock,minStock   (optional)
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from turnover.ops_summary import build_ops_board
from turnover.snapshot import Snapshot
from turnover.utils.dates import today_iso


logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def require_file(path: Path) -> Path:
    if not path.is_file():
        raise FileNotFoundError(f"Expected input file: {path}")
    return path


def read_records(path: Optional[Path]) -> List[Dict[str, Any]]:
    """Read a CSV as string records, dropping blank cells."""
    if path is None:
        return []
    df = pd.read_csv(require_file(path), dtype=str, keep_default_na=False)
    df.columns = [c.strip() for c in df.columns]
    logging.info("Read %s rows from %s", len(df), path.name)
    return [
        {key: value.strip() for key, value in row.items() if value and value.strip()}
        for row in df.to_dict(orient="records")
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="Folder holding the CSV exports")
    parser.add_argument("--today", default=None, help="Reference date (YYYY-MM-DD); defaults to the local date")
    args = parser.parse_args()

    inventory_path = args.data_dir / "inventory.csv"
    snapshot = Snapshot.from_records(
        properties=read_records(args.data_dir / "properties.csv"),
        reservations=read_records(args.data_dir / "reservations.csv"),
        inventory=read_records(inventory_path if inventory_path.exists() else None),
    )
    today = args.today or today_iso()
    board = build_ops_board(snapshot, today)

    if not board["criticalDays"]:
        logging.info("No upcoming turnover collisions from %s", today)
    print(json.dumps(board, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
