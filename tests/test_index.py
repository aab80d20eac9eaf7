import dataclasses

import numpy as np
import pytest

from qgen.errors import PartitionInvariantViolation, PercentageSumMismatch, TemplateNotFound
from qgen.loader import build_index
from qgen.templates import KindMix, OperationKind, TemplateIndex, TemplateRecord

SCENARIO_1 = ["50 30 20", "I 60 name", "I 40 email", "M 100 name age", "S 100 name"]


@pytest.fixture
def index():
    return build_index(SCENARIO_1)


def test_roofs_are_cumulative_per_kind(index):
    inserts = index.templates(OperationKind.INSERT)
    assert [tpl.roof for tpl in inserts] == [60.0, 100.0]
    assert [tpl.share for tpl in inserts] == [60.0, 40.0]
    assert len(index) == 4


def test_lookup_boundaries(index):
    assert index.lookup(OperationKind.INSERT, 60.0).attributes == ("name",)
    assert index.lookup(OperationKind.INSERT, 60.1).attributes == ("email",)
    assert index.lookup(OperationKind.INSERT, 0.001).attributes == ("name",)
    assert index.lookup(OperationKind.MODIFY, 42.0).attributes == ("name", "age")


def test_lookup_full_draw_returns_last_declared(index):
    for kind in OperationKind:
        assert index.lookup(kind, 100.0) is index.templates(kind)[-1]


def test_lookup_every_roof_and_just_above(index):
    for kind in index.kinds():
        templates = index.templates(kind)
        for pos, template in enumerate(templates):
            assert index.lookup(kind, template.roof) is template
            above = template.roof + 1e-6
            if pos + 1 < len(templates):
                assert index.lookup(kind, above) is templates[pos + 1]
            else:
                with pytest.raises(TemplateNotFound):
                    index.lookup(kind, above)


def test_lookup_accepts_tags_and_names(index):
    assert index.lookup("I", 10.0) is index.lookup("insert", 10.0)


@pytest.mark.parametrize("draw", [0.0, -1.0, float("nan")])
def test_lookup_rejects_draws_outside_range(index, draw):
    with pytest.raises(ValueError):
        index.lookup(OperationKind.INSERT, draw)


def test_max_roof_is_exactly_full_range(index):
    for kind in OperationKind:
        if index.mix.share(kind) != 0.0:
            assert index.max_roof(kind) == 100.0


def test_unused_kind_is_empty():
    index = build_index(["100 0 0", "I 100 a b c"])
    assert index.templates(OperationKind.MODIFY) == ()
    assert index.templates(OperationKind.SEARCH) == ()
    assert index.kinds() == [OperationKind.INSERT]
    with pytest.raises(TemplateNotFound):
        index.lookup(OperationKind.MODIFY, 50.0)
    with pytest.raises(TemplateNotFound):
        index.lookup(OperationKind.SEARCH, 100.0)


def test_header_sum_mismatch():
    with pytest.raises(PercentageSumMismatch):
        build_index(["50 50 1", "I 100 a"])


def test_partition_not_reaching_full_range():
    with pytest.raises(PartitionInvariantViolation) as excinfo:
        build_index(["100 0 0", "I 90 a"])
    assert "insert" in str(excinfo.value)
    assert "90" in str(excinfo.value)


def test_partition_missing_templates_for_used_kind():
    with pytest.raises(PartitionInvariantViolation):
        build_index(["50 50 0", "I 100 a"])


def test_partition_unused_kind_with_partial_templates():
    with pytest.raises(PartitionInvariantViolation):
        build_index(["100 0 0", "I 100 a", "M 50 b"])


def test_partition_overshooting_full_range():
    with pytest.raises(PartitionInvariantViolation):
        build_index(["100 0 0", "I 60 a", "I 60 b"])


def test_unused_kind_with_complete_templates_is_accepted():
    index = build_index(["100 0 0", "I 100 a", "M 100 b"])
    assert index.lookup(OperationKind.MODIFY, 10.0).attributes == ("b",)
    assert index.pick_kind(100.0) is OperationKind.INSERT


def test_zero_share_keeps_declaration_order():
    index = build_index(["100 0 0", "I 50 a", "I 0 b", "I 50 c"])
    inserts = index.templates(OperationKind.INSERT)
    assert [tpl.attributes for tpl in inserts] == [("a",), ("b",), ("c",)]
    assert [tpl.roof for tpl in inserts] == [50.0, 50.0, 100.0]
    assert index.lookup(OperationKind.INSERT, 50.0).attributes == ("a",)
    assert index.lookup(OperationKind.INSERT, 50.5).attributes == ("c",)


def test_tolerance_snaps_last_roof():
    lines = ["100 0 0", "I 99.9999999999 a"]
    index = build_index(lines)
    assert index.max_roof(OperationKind.INSERT) == 100.0
    assert index.lookup(OperationKind.INSERT, 100.0).attributes == ("a",)
    with pytest.raises(PartitionInvariantViolation):
        build_index(lines, tolerance=0.0)


def test_tolerance_on_header():
    index = build_index(["33.33333333333 33.33333333333 33.33333333334", "I 100 a", "M 100 b", "S 100 c"])
    assert index.pick_kind(100.0) is OperationKind.SEARCH


def test_pick_kind_uses_outer_roofs(index):
    assert index.pick_kind(50.0) is OperationKind.INSERT
    assert index.pick_kind(50.1) is OperationKind.MODIFY
    assert index.pick_kind(80.0) is OperationKind.MODIFY
    assert index.pick_kind(80.5) is OperationKind.SEARCH
    assert index.pick_kind(100.0) is OperationKind.SEARCH


def test_pick_kind_skips_zero_kinds():
    mix = KindMix(0.0, 100.0, 0.0)
    assert mix.pick(0.001) is OperationKind.MODIFY
    assert mix.pick(100.0) is OperationKind.MODIFY


def test_repeated_construction_is_idempotent():
    first = build_index(SCENARIO_1)
    second = build_index(SCENARIO_1)
    for kind in first.kinds():
        for draw in np.linspace(0.25, 100.0, 400):
            assert first.lookup(kind, draw) == second.lookup(kind, draw)


def test_build_from_records():
    records = [
        TemplateRecord(OperationKind.SEARCH, 25.0, ("id",)),
        TemplateRecord(OperationKind.SEARCH, 75.0, ("name", "age")),
    ]
    index = TemplateIndex.build(KindMix(0.0, 0.0, 100.0), records)
    assert index.lookup("S", 25.0).attributes == ("id",)
    assert index.lookup("S", 26.0).line_no is None


def test_templates_are_immutable(index):
    template = index.templates(OperationKind.INSERT)[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        template.roof = 1.0


@pytest.mark.parametrize(
    "lines",
    [
        ["100 0 0", "I 150 a", "I -50 b"],
        ["100 0 0", "I 50 a", "I -20 b", "I 70 c"],
    ],
)
def test_negative_share_is_rejected(lines):
    with pytest.raises(PartitionInvariantViolation) as excinfo:
        build_index(lines)
    assert excinfo.value.line_no == 3
    assert "negative" in str(excinfo.value)


def test_pick_kind_never_lands_on_trailing_unused_kind():
    index = build_index(["50 49.9999999999 0", "I 100 a", "M 100 b"])
    assert list(index.mix.roofs()) == [50.0, 100.0, 100.0]
    assert index.pick_kind(100.0) is OperationKind.MODIFY
    assert index.pick_kind(99.99999999999) is OperationKind.MODIFY
