# tests/test_recommendation.py
import copy
from concurrent.futures import ThreadPoolExecutor

from runroutes.models.recommendation import RecommendationPreferences
from runroutes.services.geo import haversine_miles, route_start
from runroutes.services.recommendation import recommend

from conftest import USER_LAT, USER_LNG


def test_empty_input_returns_empty_list():
    assert recommend([], RecommendationPreferences(target_distance=4.0), 5) == []


def test_result_bound(mixed_routes):
    prefs = RecommendationPreferences()
    assert len(recommend(mixed_routes, prefs, 2)) == 2
    assert len(recommend(mixed_routes, prefs, 50)) == len(mixed_routes)


def test_sorted_by_score_descending(mixed_routes):
    result = recommend(mixed_routes, RecommendationPreferences(target_distance=4.0), 10)
    scores = [r.score for r in result]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= s <= 100.0 for s in scores)


def test_deterministic(mixed_routes):
    prefs = RecommendationPreferences(
        target_distance=4.0,
        user_lat=USER_LAT,
        user_lng=USER_LNG,
        prefer_hills=False,
    )
    first = recommend(mixed_routes, prefs, 4)
    second = recommend(mixed_routes, prefs, 4)
    assert [r.id for r in first] == [r.id for r in second]
    assert [r.score for r in first] == [r.score for r in second]


def test_input_not_mutated(mixed_routes):
    before = copy.deepcopy(mixed_routes)
    result = recommend(mixed_routes, RecommendationPreferences(preferred_surface="paved"), 1)
    assert mixed_routes == before
    assert result is not mixed_routes


def test_surface_filter(mixed_routes):
    result = recommend(mixed_routes, RecommendationPreferences(preferred_surface="paved"), 10)
    assert result
    assert all(r.surface_type == "paved" for r in result)


def test_surface_any_keeps_everything(mixed_routes):
    result = recommend(mixed_routes, RecommendationPreferences(preferred_surface="any"), 10)
    assert len(result) == len(mixed_routes)


def test_night_mode_filter(mixed_routes):
    result = recommend(mixed_routes, RecommendationPreferences(night_mode=True), 10)
    assert result
    assert all(r.has_lighting for r in result)


def test_proximity_hard_cutoff(mixed_routes):
    prefs = RecommendationPreferences(user_lat=USER_LAT, user_lng=USER_LNG, max_distance_miles=3.0)
    result = recommend(mixed_routes, prefs, 10)

    ids = {r.id for r in result}
    assert "mixed-lit-far" not in ids
    for r in result:
        start = route_start(r)
        if start is not None:
            assert haversine_miles(USER_LAT, USER_LNG, start.lat, start.lon) <= 3.0


def test_route_without_geometry_survives_location_filter(mixed_routes):
    prefs = RecommendationPreferences(user_lat=USER_LAT, user_lng=USER_LNG, max_distance_miles=3.0)
    result = recommend(mixed_routes, prefs, 10)

    no_geometry = [r for r in result if r.id == "no-geometry"]
    assert len(no_geometry) == 1
    assert no_geometry[0].score_breakdown.proximity == 50.0


def test_no_cutoff_without_max_distance(mixed_routes):
    prefs = RecommendationPreferences(user_lat=USER_LAT, user_lng=USER_LNG)
    result = recommend(mixed_routes, prefs, 10)
    far = next(r for r in result if r.id == "mixed-lit-far")
    # About 6.9 miles against the implicit 10 mile cap
    assert 60.0 < far.score_breakdown.proximity < 70.0


def test_all_filtered_out(mixed_routes):
    prefs = RecommendationPreferences(
        preferred_surface="trail",
        night_mode=True,
        user_lat=0.0,
        user_lng=0.0,
        max_distance_miles=1.0,
    )
    assert recommend(mixed_routes, prefs, 5) == []


def test_high_quality_route_ranks_first(make_route):
    a = make_route(
        "A",
        distance=4,
        scenic_score=90,
        safety_score=90,
        has_lighting=True,
        elevation_gain=50,
        popularity=80,
    )
    b = make_route(
        "B",
        distance=4,
        scenic_score=40,
        safety_score=40,
        has_lighting=False,
        elevation_gain=180,
        popularity=30,
    )
    result = recommend([b, a], RecommendationPreferences(target_distance=4, night_mode=False), 2)
    assert [r.id for r in result] == ["A", "B"]
    assert result[0].score > result[1].score


def test_ties_keep_input_order(make_route):
    routes = [make_route("first"), make_route("second"), make_route("third")]
    result = recommend(routes, RecommendationPreferences(), 3)
    assert [r.id for r in result] == ["first", "second", "third"]


def test_zero_limit_returns_nothing(mixed_routes):
    assert recommend(mixed_routes, RecommendationPreferences(), 0) == []


def test_results_can_be_ranked_again(make_route):
    routes = [make_route("a", scenic_score=90), make_route("b", scenic_score=40)]
    first = recommend(routes, RecommendationPreferences(target_distance=4.0), 2)

    reranked_prefs = RecommendationPreferences(scenic_weight=0.0, preferred_surface="paved")
    again = recommend(first, reranked_prefs, 2)

    assert {r.id for r in again} == {"a", "b"}
    assert all(r.score_breakdown.scenic in (90.0, 40.0) for r in again)


def test_concurrent_calls_match_sequential(mixed_routes):
    prefs_list = [
        RecommendationPreferences(target_distance=4.0),
        RecommendationPreferences(preferred_surface="paved"),
        RecommendationPreferences(night_mode=True, prefer_hills=True),
        RecommendationPreferences(user_lat=USER_LAT, user_lng=USER_LNG, max_distance_miles=3.0),
        RecommendationPreferences(preferred_surface="trail", scenic_weight=0.9),
    ] * 4

    expected = [
        [(r.id, r.score) for r in recommend(mixed_routes, prefs, 10)]
        for prefs in prefs_list
    ]

    def run(prefs):
        return [(r.id, r.score) for r in recommend(mixed_routes, prefs, 10)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        actual = list(pool.map(run, prefs_list))

    assert actual == expected
