from conftest import build_property

from horsefarm.services.scoring import FACTOR_WEIGHTS, score_breakdown, score_property, select_featured


def _property_a():
    return build_property(
        "A",
        acreage=18,
        stalls=12,
        has_indoor_arena=True,
        has_outdoor_arena=True,
        pastures=4,
        has_tack_room=True,
        has_feed_room=True,
        has_wash_rack=True,
        has_round_pen=True,
        fencing_type=["Board", "Electric"],
        additional_structures=["Hay Barn", "Run-in Shed", "Guest House"],
    )


def test_fully_equipped_farm_outscores_bare_lot():
    a = _property_a()
    b = build_property("B", acreage=1)
    # 24 stalls + 25 + 20 + 4 * 5 + 12 pastures + 18 acres + 10 fencing + 9 structures
    assert score_property(a) == 138
    assert score_property(b) == 1
    assert score_property(a) > score_property(b)


def test_breakdown_sums_to_total_and_covers_every_factor():
    breakdown = score_breakdown(_property_a())
    assert [f.key for f in breakdown.factors] == list(FACTOR_WEIGHTS)
    assert sum(f.points for f in breakdown.factors) == breakdown.total
    stalls = next(f for f in breakdown.factors if f.key == "stalls")
    assert (stalls.value, stalls.points, stalls.cap) == (12, 24, 50)


def test_stalls_monotonic_under_cap_and_capped_above():
    scores = [score_property(build_property(stalls=n, acreage=0)) for n in range(0, 26)]
    assert scores == sorted(scores)
    assert len(set(scores)) == len(scores)
    assert score_property(build_property(stalls=40, acreage=0)) == 50


def test_acreage_and_pasture_caps():
    assert score_property(build_property(acreage=250)) == 50
    assert score_property(build_property(acreage=49.9)) == 49
    assert score_property(build_property(acreage=0, pastures=20)) == 30


def test_fencing_bonus_needs_two_distinct_types():
    one = build_property(acreage=0, fencing_type=["Board", "board"])
    two = build_property(acreage=0, fencing_type=["Board", "Vinyl"])
    assert score_property(one) == 0
    assert score_property(two) == 10


def test_structures_are_uncapped():
    prop = build_property(acreage=0, additional_structures=[f"Barn {i}" for i in range(30)])
    assert score_property(prop) == 90


def test_select_featured_is_stable_and_limited():
    low = build_property("low", acreage=1)
    tie_first = build_property("tie1", acreage=10)
    tie_second = build_property("tie2", acreage=10)
    best = _property_a()
    featured = select_featured([low, tie_first, tie_second, best], limit=3)
    assert [p.id for p in featured] == ["A", "tie1", "tie2"]
    assert select_featured([low, best], limit=0) == []
