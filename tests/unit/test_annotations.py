"""Tests for total annotations built from list totals."""

from autosum.aggregator import find_all_list_totals
from autosum.annotations import (
    PartKind,
    create_total_annotation,
    create_total_annotations,
)
from autosum.config import LabelConfig
from autosum.tree.builders import bullet_list, check_item, check_list, doc


class TestCreateTotalAnnotation:
    def test_simple_total(self):
        (total,) = find_all_list_totals(doc(bullet_list("100", "200")))
        annotation = create_total_annotation(total)
        assert annotation.position == 16
        assert annotation.side == 1
        assert annotation.key == "autosum-16"
        assert annotation.text == "Auto total: 300"
        assert [p.kind for p in annotation.parts] == [PartKind.LABEL, PartKind.VALUE]

    def test_checklist_breakdown(self):
        tree = doc(check_list(
            check_item(True, "100"),
            check_item(False, "50"),
            check_item(True, "25"),
        ))
        (total,) = find_all_list_totals(tree)
        annotation = create_total_annotation(total)
        assert annotation.text == "Auto total: 175. Checked: 125. Unchecked: 50"
        assert annotation.values() == ["175", "125", "50"]

    def test_checklist_without_checked_items_is_simple(self):
        tree = doc(check_list(check_item(False, "1k"), check_item(False, "2k")))
        (total,) = find_all_list_totals(tree)
        assert create_total_annotation(total).text == "Auto total: 3k"

    def test_custom_labels(self):
        (total,) = find_all_list_totals(doc(bullet_list("1.5m", "500k")))
        labels = LabelConfig(total="Σ ")
        assert create_total_annotation(total, labels).text == "Σ 2m"

    def test_one_annotation_per_total(self):
        tree = doc(bullet_list("1", "2"), bullet_list("3"), bullet_list("4", "5"))
        annotations = create_total_annotations(find_all_list_totals(tree))
        assert [a.text for a in annotations] == ["Auto total: 3", "Auto total: 9"]
        assert len({a.key for a in annotations}) == 2
