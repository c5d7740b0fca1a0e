# path: navigoplan-api/tests/test_itinerary_assembler.py

from __future__ import annotations

from datetime import date

from navigoplan.models.itinerary_models import DayAnnotation, Yacht
from navigoplan.services.itinerary_assembler import (
    VIP_NOTES,
    assemble,
    day_notes,
    format_hours_hm,
    risk_advisory,
    stable_json_sha256,
)


def _assemble(resolver, stops, preferences=(), audience="Captain", region="Saronic", **kw):
    yacht = Yacht(departure_time="09:00")
    return assemble(stops, date(2025, 6, 1), yacht, preferences, audience, resolver=resolver, region=region, **kw)


def test_one_card_per_leg_with_consecutive_dates(resolver):
    it = _assemble(resolver, ["Alimos", "Aegina", "Poros", "Alimos"])
    assert [c.day for c in it.days] == [1, 2, 3]
    assert [c.date for c in it.days] == [date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3)]
    assert [(c.leg.from_, c.leg.to) for c in it.days] == [("Alimos", "Aegina"), ("Aegina", "Poros"), ("Poros", "Alimos")]
    assert it.stops == ["Alimos", "Aegina", "Poros", "Alimos"]


def test_repeated_stop_is_a_layover(resolver):
    it = _assemble(resolver, ["Alimos", "Aegina", "Aegina", "Poros"])
    assert it.days[1].leg is None
    assert it.days[0].leg is not None and it.days[2].leg is not None


def test_totals_sum_the_legs(resolver):
    it = _assemble(resolver, ["Alimos", "Aegina", "Aegina", "Poros"])
    legs = [c.leg for c in it.days if c.leg]
    assert it.totals.distance_nm == sum(l.distance_nm for l in legs)
    assert it.totals.fuel_liters == sum(l.fuel_liters for l in legs)
    assert it.totals.cost == sum(l.cost for l in legs)
    assert it.totals.hours == round(sum(l.hours for l in legs), 2)
    assert it.totals.time_label == format_hours_hm(it.totals.hours)


def test_bbox_covers_known_ports(resolver):
    it = _assemble(resolver, ["Alimos", "Aegina", "Poros"])
    bbox = it.bbox_wgs84
    assert (bbox.min_lat, bbox.max_lat) == (37.50, 37.92)
    assert (bbox.min_lon, bbox.max_lon) == (23.43, 23.70)


def test_sailing_totals_are_zero(resolver):
    it = assemble(["Alimos", "Aegina", "Poros"], date(2025, 6, 1), Yacht(type="Sailing", cruise_speed_knots=7),
                  [], "Captain", resolver=resolver, region="Saronic")
    assert it.totals.fuel_liters == 0
    assert it.totals.cost == 0
    assert all(c.leg.fuel_liters == 0 and c.leg.cost == 0 for c in it.days)


def test_captain_and_vip_notes(resolver):
    captain = _assemble(resolver, ["Alimos", "Aegina"], preferences=["family", "gastronomy"])
    note = captain.days[0].notes
    assert note.startswith("Sheltered waters")
    assert "Sandy beaches" in note
    assert "seaside taverna" in note
    assert VIP_NOTES[0] not in note

    vip = _assemble(resolver, ["Alimos", "Aegina"], audience="VIP", region="Cyclades", weather_aware=True)
    note = vip.days[0].notes
    assert all(v in note for v in VIP_NOTES)
    assert "Risk advisory" not in note


def test_captain_gets_risk_advisory():
    note = day_notes("Cyclades", [], "Captain", 12, False)
    assert "Meltemi possible" in note
    assert "Risk advisory: afternoon meltemi exposure." in note


def test_risk_advisory_reasons():
    text = risk_advisory("Dodecanese", 40, True)
    assert text.startswith("Risk advisory: open-water crossings")
    assert "long passage of 40 NM" in text
    assert "check the latest forecast" in text
    assert risk_advisory("Saronic", 10, False) == ""
    assert risk_advisory(None, None, False) == ""


def test_annotations_merge_by_day(resolver):
    it = _assemble(
        resolver,
        ["Alimos", "Aegina", "Poros"],
        annotations=[
            DayAnnotation(day=1, food="Taverna by the quay"),
            DayAnnotation(day=1, marina="Berth 12"),
            DayAnnotation(day=2, beach="Love Bay"),
            DayAnnotation(day=9, food="ignored"),
        ],
    )
    first = it.days[0].user_notes
    assert (first.food, first.marina, first.beach) == ("Taverna by the quay", "Berth 12", None)
    assert it.days[1].user_notes.beach == "Love Bay"


def test_unresolved_stop_becomes_layover(resolver):
    it = _assemble(resolver, ["Alimos", "Nowhere", "Poros"])
    assert it.days[0].leg is None
    assert it.days[1].leg is None
    assert it.totals.distance_nm == 0


def test_format_hours_hm():
    assert format_hours_hm(2.13) == "2h 8m"
    assert format_hours_hm(0) == "0h 0m"
    assert format_hours_hm(1.999) == "2h 0m"


def test_stable_json_sha256_is_order_independent():
    assert stable_json_sha256({"a": 1, "b": [1, 2]}) == stable_json_sha256({"b": [1, 2], "a": 1})
    assert stable_json_sha256({"a": 1}).startswith("sha256:")
