from turnover.config import load_config
from turnover.priority_watch import resolve_priority_property, watch_priority_property
from turnover.types import Property, Reservation


def _res(rid, pid, check_in, check_out, guest="Guest"):
    return Reservation(id=rid, property_id=pid, guest_name=guest, check_in=check_in, check_out=check_out)


CASA = Property(id="p1", name="Casa Amplia")


def test_casa_amplia_example():
    r1 = _res("r1", "p1", "2024-06-01", "2024-06-10", "Ana")
    r2 = _res("r2", "p1", "2024-06-10", "2024-06-15", "Luis")

    result = watch_priority_property([r1, r2], [CASA], "2024-06-01")

    assert result.property == CASA
    assert result.date == "2024-06-10"
    assert result.out_guest == r1
    assert result.in_guest == r2
    assert not result.is_clear


def test_no_matching_property_returns_empty_result():
    result = watch_priority_property([], [Property(id="p9", name="Loft Centro")], "2024-06-01")

    assert result.property is None
    assert result.date is None
    assert result.to_payload() == {"property": None, "date": None, "outGuest": None, "inGuest": None}


def test_property_without_handover_is_clear():
    result = watch_priority_property([_res("r1", "p1", "2024-06-01", "2024-06-10")], [CASA], "2024-06-01")

    assert result.property == CASA
    assert result.date is None
    assert result.is_clear


def test_internal_name_takes_precedence_for_matching():
    props = [
        Property(id="p1", name="Casa Amplia", internal_name="Villa Norte"),
        Property(id="p2", name="Big family house", internal_name="CASA AMPLIA - grupos y familia"),
    ]

    assert resolve_priority_property(props).id == "p2"


def test_resolution_does_not_depend_on_list_order():
    props = [
        Property(id="b", name="Casa Amplia Sur"),
        Property(id="a", name="Casa Amplia Norte"),
    ]

    assert resolve_priority_property(props).id == resolve_priority_property(list(reversed(props))).id == "a"


def test_exact_match_beats_substring_match():
    props = [Property(id="p2", name="Casa Amplia Anexo"), Property(id="p1", name="casa amplia")]

    assert resolve_priority_property(props).id == "p1"


def test_earliest_turnover_wins_regardless_of_order():
    reservations = [
        _res("late-out", "p1", "2024-07-01", "2024-07-10", "Zoe"),
        _res("late-in", "p1", "2024-07-10", "2024-07-12", "Yann"),
        _res("early-out", "p1", "2024-06-20", "2024-06-25", "Ana"),
        _res("early-in", "p1", "2024-06-25", "2024-06-30", "Luis"),
    ]

    result = watch_priority_property(reservations, [CASA], "2024-06-01")

    assert result.date == "2024-06-25"
    assert result.out_guest.id == "early-out"
    assert result.in_guest.id == "early-in"


def test_past_turnovers_are_ignored():
    reservations = [
        _res("r1", "p1", "2024-05-01", "2024-05-10"),
        _res("r2", "p1", "2024-05-10", "2024-05-15"),
    ]

    assert watch_priority_property(reservations, [CASA], "2024-06-01").is_clear


def test_other_properties_do_not_leak_into_watch():
    reservations = [
        _res("r1", "p1", "2024-06-01", "2024-06-10"),
        _res("r2", "p2", "2024-06-10", "2024-06-15"),
    ]

    result = watch_priority_property(reservations, [CASA, Property(id="p2", name="Loft")], "2024-06-01")

    assert result.is_clear


def test_marker_can_be_overridden(monkeypatch):
    props = [CASA, Property(id="p2", name="Ático Mar")]
    reservations = [
        _res("r1", "p2", "2024-06-01", "2024-06-03"),
        _res("r2", "p2", "2024-06-03", "2024-06-05"),
    ]

    assert watch_priority_property(reservations, props, "2024-06-01", marker="atico").property.id == "p2"

    monkeypatch.setenv("TURNOVER_PRIORITY_MARKER", "ático mar")
    load_config(refresh=True)
    try:
        assert watch_priority_property(reservations, props, "2024-06-01").date == "2024-06-03"
    finally:
        monkeypatch.delenv("TURNOVER_PRIORITY_MARKER")
        load_config(refresh=True)


def test_guest_payload_carries_default_times():
    r1 = _res("r1", "p1", "2024-06-01", "2024-06-10", "Ana")
    r2 = _res("r2", "p1", "2024-06-10", "2024-06-15", "Luis")

    payload = watch_priority_property([r1, r2], [CASA], "2024-06-01").to_payload()

    assert payload["outGuest"]["checkOutTime"] == "11:00"
    assert payload["inGuest"]["checkInTime"] == "14:00"


def test_zero_night_stay_is_never_its_own_incoming_guest():
    zero_night = _res("z", "p1", "2024-06-10", "2024-06-10", "Zoe")
    next_guest = _res("x", "p1", "2024-06-10", "2024-06-12", "Xavi")

    result = watch_priority_property([zero_night, next_guest], [CASA], "2024-06-01")

    assert result.date == "2024-06-10"
    assert result.out_guest.id == "z"
    assert result.in_guest.id == "x"


def test_watch_is_idempotent():
    reservations = [
        _res("r1", "p1", "2024-06-01", "2024-06-10", "Ana"),
        _res("r2", "p1", "2024-06-10", "2024-06-15", "Luis"),
    ]

    first = watch_priority_property(reservations, [CASA], "2024-06-01")

    assert watch_priority_property(reservations, [CASA], "2024-06-01") == first
    assert watch_priority_property(reservations, [CASA], "2024-06-01").to_payload() == first.to_payload()
