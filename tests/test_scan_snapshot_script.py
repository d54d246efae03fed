import pytest

from scripts.scan_snapshot import read_records
from turnover.ops_summary import build_ops_board
from turnover.snapshot import Snapshot


def test_csv_exports_feed_the_board(tmp_path):
    (tmp_path / "properties.csv").write_text("id,name,internalName\np1,Casa Amplia,\np2,Loft,Loft Centro\n")
    (tmp_path / "reservations.csv").write_text(
        "id,propertyId,guestName,checkIn,checkOut\n"
        "r1,p1,Ana,2024-06-01,2024-06-10\n"
        "r2,p1,Luis,2024-06-10,2024-06-15\n"
    )

    properties = read_records(tmp_path / "properties.csv")
    snapshot = Snapshot.from_records(properties=properties, reservations=read_records(tmp_path / "reservations.csv"))
    board = build_ops_board(snapshot, "2024-06-01")

    assert properties[0] == {"id": "p1", "name": "Casa Amplia"}
    assert board["criticalDays"] == [{"date": "2024-06-10", "count": 1, "propertyIds": ["p1"]}]
    assert board["priorityWatch"]["outGuest"]["guestName"] == "Ana"


def test_missing_export_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_records(tmp_path / "reservations.csv")
    assert read_records(None) == []
