"""Tests for the resource classifier."""

from __future__ import annotations

import pytest

from core.domain.models import ClassificationView, DisplayMeta, ResourceType
from core.services.classification import (
    DISPLAY_META,
    FALLBACK_ICON,
    UNKNOWN_TYPE,
    classify,
    display_meta,
    flatten,
    group_key,
    summarize,
)


class TestClassify:
    def test_groups_in_first_seen_order(self, make_record) -> None:
        u1 = make_record("IMAGE", "u1")
        u2 = make_record("JS", "u2")
        u3 = make_record("IMAGE", "u3")

        view = classify([u1, u2, u3])

        assert view.types == ["IMAGE", "JS"]
        assert view.groups["IMAGE"] == [u1, u3]
        assert view.groups["JS"] == [u2]

    def test_types_are_not_sorted(self, make_record) -> None:
        view = classify([make_record("OTHER", "a"), make_record("CSS", "b"), make_record("API", "c")])
        assert view.types == ["OTHER", "CSS", "API"]

    def test_group_keeps_input_order_regardless_of_validity(self, make_record) -> None:
        records = [
            make_record("JS", "z.js", valid=False),
            make_record("JS", "a.js", valid=True),
            make_record("JS", "m.js", valid=False),
        ]
        assert [r.url for r in classify(records).groups["JS"]] == ["z.js", "a.js", "m.js"]

    def test_empty_input(self) -> None:
        view = classify([])
        assert view.types == []
        assert view.groups == {}
        assert len(view) == 0

    def test_unknown_type_gets_its_own_group(self, make_record) -> None:
        weird = make_record("WEIRD", "w")
        view = classify([make_record("OTHER", "o"), weird])
        assert view.types == ["OTHER", "WEIRD"]
        assert view.groups["WEIRD"] == [weird]

    @pytest.mark.parametrize("kind", [None, "", "  "])
    def test_missing_type_goes_to_unknown(self, make_record, kind) -> None:
        rec = make_record(kind, "x")
        view = classify([rec])
        assert view.types == [UNKNOWN_TYPE]
        assert view.groups[UNKNOWN_TYPE] == [rec]

    def test_accepts_any_iterable(self, make_record) -> None:
        records = (make_record("CSS", str(i)) for i in range(3))
        assert len(classify(records).groups["CSS"]) == 3

    def test_does_not_mutate_input(self, make_record) -> None:
        records = [make_record("JS", "b"), make_record("IMAGE", "a")]
        copy = list(records)
        classify(records)
        assert records == copy

    def test_regrouping_flattened_view_is_idempotent(self, make_record) -> None:
        records = [
            make_record("JS", "1"),
            make_record("IMAGE", "2"),
            make_record("WEIRD", "3"),
            make_record("JS", "4"),
            make_record(None, "5"),
            make_record("IMAGE", "6", valid=False),
        ]
        view = classify(records)
        assert classify(flatten(view)) == view

    def test_deterministic(self, make_record) -> None:
        records = [make_record("API", "a"), make_record("CSS", "b"), make_record("API", "c")]
        assert classify(records) == classify(list(records))


class TestFlatten:
    def test_follows_types_order(self, make_record) -> None:
        a, b, c = make_record("JS", "a"), make_record("IMAGE", "b"), make_record("JS", "c")
        assert flatten(classify([a, b, c])) == [a, c, b]

    def test_ignores_missing_group(self) -> None:
        assert flatten(ClassificationView(types=["JS"], groups={})) == []


class TestDisplayMeta:
    @pytest.mark.parametrize("kind", list(ResourceType))
    def test_known_kinds_use_table(self, kind: ResourceType) -> None:
        assert display_meta(kind.value) == DISPLAY_META[kind]
        assert display_meta(kind.value).icon != FALLBACK_ICON

    def test_unknown_kind_falls_back(self) -> None:
        assert display_meta("WEIRD") == DisplayMeta(icon=FALLBACK_ICON, title="WEIRD Data")

    def test_unknown_group_key(self) -> None:
        assert display_meta(UNKNOWN_TYPE).title == "UNKNOWN Data"

    @pytest.mark.parametrize("kind", [None, ""])
    def test_missing_type_never_fails(self, kind) -> None:
        assert display_meta(kind) == DisplayMeta(icon=FALLBACK_ICON, title="UNKNOWN Data")

    def test_titles(self) -> None:
        assert display_meta("IMAGE").title == "Images"
        assert display_meta("API").title == "API Calls"


def test_group_key(make_record) -> None:
    assert group_key(make_record("CSS", "x")) == "CSS"
    assert group_key(make_record(None, "x")) == UNKNOWN_TYPE


def test_summarize_counts_validity(make_record) -> None:
    view = classify(
        [
            make_record("IMAGE", "a", valid=True),
            make_record("JS", "b", valid=False),
            make_record("IMAGE", "c", valid=False),
        ]
    )
    assert summarize(view) == {"IMAGE": (2, 1, 1), "JS": (1, 0, 1)}
