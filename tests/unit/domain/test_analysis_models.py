from __future__ import annotations

"""
Unit tests for the analysis result factories and graph models.
"""

from classdeps.domain.analysis_models import create_error_result, create_success_result
from classdeps.domain.class_models import ClassRecord, DecodeFailure, Group


def test_success_result_summary_counts() -> None:
    records = [
        ClassRecord(index=0, file_name="A.class", class_name="A", class_path="A"),
        ClassRecord(index=1, file_name="B.class", class_name="B", class_path="B"),
        ClassRecord(index=2, file_name="C.class", class_name="C", class_path="C"),
    ]
    groups = [Group(index=0, members=[2]), Group(index=1, members=[0, 1])]
    failures = [DecodeFailure(file_name="Bad.class", error="boom")]

    result = create_success_result("/tmp/x", records, groups, failures=failures,
                                   summary_extra={"files": 4})

    assert result.ok is True
    assert result.error == ""
    assert result.summary == {
        "classes": 3, "groups": 2, "cyclic_groups": 1, "skipped": 1, "files": 4,
    }
    assert result.cyclic_groups == [groups[1]]


def test_error_result() -> None:
    result = create_error_result("nope", "/tmp/x")

    assert result.ok is False
    assert result.error == "nope"
    assert result.records == []
    assert result.groups == []


def test_record_str_is_display_name() -> None:
    record = ClassRecord(index=0, file_name="A.class", class_name="A", class_path="p/A")
    assert str(record) == "A"
