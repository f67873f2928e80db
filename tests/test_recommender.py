import os
import sys
import types

# Ensure the backend package is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from collabhub.utils.recommender import calculate_recommendation_scores, normalize_skills


def make_item(item_id, skill_names, tiebreaker=0):
    return {
        "item_id": item_id,
        "skill_names": set(skill_names),
        "item_object": types.SimpleNamespace(id=item_id),
        "tiebreaker": tiebreaker,
    }


def test_empty_source_returns_empty():
    res = calculate_recommendation_scores(set(), [make_item("1", ["python"])])
    assert res == []


def test_exact_matches_score():
    source = {"python", "django"}
    items = [make_item("1", ["python", "flask"]), make_item("2", ["javascript"])]
    scored = calculate_recommendation_scores(source, items)
    assert [item["item_id"] for item in scored] == ["1"]
    assert scored[0]["score"] >= 1.0


def test_fuzzy_matches_score():
    source = {"reactjs"}
    # 'react' is close enough to 'reactjs', 'angular' is not
    items = [make_item("1", ["react"]), make_item("2", ["angular"])]
    scored = calculate_recommendation_scores(source, items)
    ids = [s["item_id"] for s in scored]
    assert "1" in ids
    assert "2" not in ids
    assert 0 < scored[0]["score"] < 1.0


def test_items_without_skills_are_skipped():
    scored = calculate_recommendation_scores({"python"}, [make_item("1", [])])
    assert scored == []


def test_sorting_and_tiebreaker():
    source = {"python"}
    # same score, newer item first
    item_a = make_item("a", ["python"], tiebreaker=3.0)
    item_b = make_item("b", ["python"], tiebreaker=5.0)
    item_c = make_item("c", ["python", "django"], tiebreaker=1.0)
    scored = calculate_recommendation_scores({"python", "django"} | source, [item_a, item_b, item_c])
    assert [s["item_id"] for s in scored] == ["c", "b", "a"]


def test_normalize_skills():
    assert normalize_skills(["React", " react ", "", None, "Node"]) == {"react", "node"}
    assert normalize_skills(None) == set()
