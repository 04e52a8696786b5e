from __future__ import annotations

from types import SimpleNamespace

from tirthyatra.core.merging import matches_destination, merge_by_name


def _items(*names):
    return [SimpleNamespace(name=name) for name in names]


def test_first_occurrence_wins_case_insensitively():
    custom = _items("Kashi Vishwanath Temple")
    live = _items("kashi vishwanath temple", "Durga Temple")
    mock = _items("DURGA TEMPLE", "Sankat Mochan")

    merged = merge_by_name([custom, live, mock], cap=10)

    assert [item.name for item in merged] == ["Kashi Vishwanath Temple", "Durga Temple", "Sankat Mochan"]
    assert merged[0] is custom[0]
    assert merged[1] is live[1]


def test_truncates_to_cap():
    merged = merge_by_name([_items(*[f"Temple {i}" for i in range(12)])], cap=8)
    assert len(merged) == 8


def test_unnamed_items_are_dropped():
    merged = merge_by_name([_items("", "  ", "Har Ki Pauri")], cap=6)
    assert [item.name for item in merged] == ["Har Ki Pauri"]


def test_matches_destination_substring():
    assert matches_destination("Varanasi, Uttar Pradesh", "varanasi")
    assert matches_destination("Delhi to Varanasi", "VARANASI")
    assert not matches_destination("Haridwar", "Varanasi")
    assert not matches_destination("Haridwar", "   ")
