from __future__ import annotations

from datetime import date

import pytest

from mutabaah_portal.core.exceptions import ValidationError
from mutabaah_portal.ledger.merge import (
    clean_month,
    count_credits,
    fragment_for,
    mark_activity,
    merge_fragment,
    merge_fragments,
)


def test_clean_month_strips_foreign_keys_and_false_flags():
    dirty = {
        "05": {"subuh": True, "isya": False},
        "reports": {"x": True},
        "5": {"subuh": True},
        "32": {"subuh": True},
        "06": "not-a-map",
        "07": {"jujur": False},
    }

    assert clean_month(dirty) == {"05": {"subuh": True}}


def test_clean_month_drops_lookalike_day_keys():
    dirty = {
        "05\n": {"jujur": True},
        "\u0660\u0665": {"jujur": True},
        " 05": {"jujur": True},
        "05": {"subuh": True},
    }

    assert clean_month(dirty) == {"05": {"subuh": True}}


def test_merge_is_idempotent():
    base = {"01": {"jujur": True}}
    fragment = {"01": {"infaq": True}, "02": {"tadarus": True}}

    once = merge_fragment(base, fragment)
    twice = merge_fragment(once, fragment)

    assert once == twice == {"01": {"jujur": True, "infaq": True}, "02": {"tadarus": True}}


def test_merge_never_clobbers_other_days_or_flags():
    base = {"04": {"jujur": True}, "05": {"subuh": True}}

    merged = merge_fragment(base, {"05": {"doa_bersama": True}})

    assert merged["04"] == {"jujur": True}
    assert merged["05"] == {"subuh": True, "doa_bersama": True}


def test_merge_ignores_foreign_keys_in_fragment_and_does_not_mutate_input():
    base = {"01": {"jujur": True}}
    merged = merge_fragment(base, {"01": {"infaq": True}, "meta": {"x": True}})

    assert "meta" not in merged
    assert base == {"01": {"jujur": True}}


def test_mark_activity_keeps_other_flags_and_can_uncheck():
    day_map = {"05": {"subuh": True}, "junk": {"x": True}}

    marked = mark_activity(day_map, "05", "jujur")
    assert marked == {"05": {"subuh": True, "jujur": True}}

    unmarked = mark_activity(marked, "05", "subuh", False)
    assert unmarked == {"05": {"jujur": True}}

    assert mark_activity(unmarked, "05", "jujur", False) == {}


@pytest.mark.parametrize("bad_key", ["5", "001", "32", "00", "ab", "05\n", "\u0660\u0665", "\uff10\uff15"])
def test_mark_activity_rejects_malformed_day_keys(bad_key):
    with pytest.raises(ValidationError):
        mark_activity({}, bad_key, "jujur")


def test_scenario_prayer_then_team_session_on_same_day():
    ledger = merge_fragments([fragment_for(date(2024, 3, 5), "subuh")])
    assert ledger == {"2024-03": {"05": {"subuh": True}}}

    ledger = merge_fragments([ledger, fragment_for(date(2024, 3, 5), "doa_bersama")])
    assert ledger == {"2024-03": {"05": {"subuh": True, "doa_bersama": True}}}


def test_count_credits_counts_days():
    day_map = {"01": {"tadarus": True}, "02": {"tadarus": True, "jujur": True}, "03": {"jujur": True}}

    assert count_credits(day_map, "tadarus") == 2
    assert count_credits(day_map, "infaq") == 0
