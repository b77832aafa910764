from __future__ import annotations

"""
Integration tests for the Analysis Engine.

Runs the whole pipeline over directories of generated class files and checks
the observable properties: ordering, grouping, skip/abort policies,
idempotence and worker-count independence.
"""

from pathlib import Path
from typing import List

import pytest

from classdeps.core.pipeline.engine import run_analysis
from classdeps.core.report.render import render_report
from classdeps.domain.analysis_models import AnalysisResult


def report(result: AnalysisResult) -> List[str]:
    return render_report(result.records, result.groups)


def test_chain_scenario(write_classes, chain_classes) -> None:
    result = run_analysis({"input_path": str(write_classes(chain_classes))})

    assert result.ok, result.error
    assert report(result) == ["C -> []", "B -> [C]", "A -> [B]"]


def test_mutual_scenario(write_classes, mutual_classes) -> None:
    result = run_analysis({"input_path": str(write_classes(mutual_classes))})

    assert result.ok, result.error
    assert report(result) == ["[A, B]", "    A -> [B]", "    B -> [A]"]
    assert result.summary["cyclic_groups"] == 1


def test_packaged_classes_resolve_by_class_path(write_classes, class_builder) -> None:
    service = class_builder("com/acme/Service")
    service.field("Lcom/acme/Repository;")
    repository = class_builder("com/acme/Repository")
    repository.method("()Ljava/util/List;", signature="()Ljava/util/List<Lcom/acme/Entity;>;")
    entity = class_builder("com/acme/Entity")

    directory = write_classes({
        "Service.class": service.build(),
        "Repository.class": repository.build(),
        "Entity.class": entity.build(),
    })
    result = run_analysis({"input_path": str(directory)})

    assert report(result) == [
        "Entity -> []",
        "Repository -> [Entity]",
        "Service -> [Repository]",
    ]


def test_malformed_file_is_skipped_by_default(write_classes, chain_classes, class_builder, caplog) -> None:
    bad = class_builder("Bad", super_class=None)
    bad.raw_tag(99)
    files = dict(chain_classes)
    files["Bad.class"] = bad.build()

    with caplog.at_level("ERROR"):
        result = run_analysis({"input_path": str(write_classes(files))})

    assert result.ok
    assert [f.file_name for f in result.failures] == ["Bad.class"]
    assert "tag 99" in result.failures[0].error
    assert "Skipping Bad.class" in caplog.text
    assert report(result) == ["C -> []", "B -> [C]", "A -> [B]"]
    assert result.summary["skipped"] == 1


def test_unpaired_surrogate_constant_keeps_class_in_report(write_classes, class_builder, make_class) -> None:
    holder = class_builder("A")
    holder.class_ref("B")
    holder.raw_utf8(b"\xed\xa0\x80")
    directory = write_classes({"A.class": holder.build(), "B.class": make_class("B")})

    result = run_analysis({"input_path": str(directory)})

    assert result.ok, result.error
    assert result.failures == []
    assert report(result) == ["B -> []", "A -> [B]"]


def test_malformed_file_aborts_when_not_skipping(write_classes, chain_classes) -> None:
    files = dict(chain_classes)
    files["Bad.class"] = b"\xca\xfe\xba\xbe"

    result = run_analysis({"input_path": str(write_classes(files)), "skip_malformed": False})

    assert not result.ok
    assert "Bad.class" in result.error
    assert result.records == []


def test_nested_class_files_are_ignored(write_classes, make_class) -> None:
    directory = write_classes({
        "Outer.class": make_class("Outer", ["Outer$Inner"]),
        "Outer$Inner.class": make_class("Outer$Inner", ["Outer"]),
    })
    result = run_analysis({"input_path": str(directory)})

    assert report(result) == ["Outer -> []"]


def test_external_references_are_not_reported(write_classes, make_class) -> None:
    directory = write_classes({
        "App.class": make_class("App", ["java/util/List", "org/lib/Thing"]),
    })
    result = run_analysis({"input_path": str(directory)})

    assert report(result) == ["App -> []"]
    assert result.records[0].reference_names == ["java/lang/Object", "java/util/List", "org/lib/Thing"]


def test_missing_directory_is_an_error(tmp_path: Path) -> None:
    result = run_analysis({"input_path": str(tmp_path / "absent")})

    assert not result.ok
    assert "does not exist" in result.error


def test_empty_directory_reports_nothing(tmp_path: Path) -> None:
    result = run_analysis({"input_path": str(tmp_path)})

    assert result.ok
    assert report(result) == []


def test_analysis_is_idempotent(write_classes, class_builder, make_class) -> None:
    hub = class_builder("Hub")
    hub.field("LSpokeA;")
    hub.method("(LSpokeB;)V")
    directory = write_classes({
        "Hub.class": hub.build(),
        "SpokeA.class": make_class("SpokeA", ["Hub", "Leaf"]),
        "SpokeB.class": make_class("SpokeB", ["Leaf"]),
        "Leaf.class": make_class("Leaf"),
        "Lonely.class": make_class("Lonely"),
    })

    first = report(run_analysis({"input_path": str(directory)}))
    second = report(run_analysis({"input_path": str(directory)}))

    assert first == second
    assert first[0] == "Leaf -> []"


@pytest.mark.parametrize("workers", [2, 8])
def test_worker_count_does_not_change_output(write_classes, chain_classes, make_class, workers) -> None:
    files = dict(chain_classes)
    files.update({"X.class": make_class("X", ["Y", "A"]), "Y.class": make_class("Y", ["X"])})
    directory = write_classes(files)

    sequential = report(run_analysis({"input_path": str(directory)}))
    parallel = report(run_analysis({"input_path": str(directory), "decode_workers": workers}))

    assert parallel == sequential


def test_no_forward_dependency_in_output(write_classes, make_class) -> None:
    directory = write_classes({
        "A.class": make_class("A", ["B", "D"]),
        "B.class": make_class("B", ["C"]),
        "C.class": make_class("C", ["B", "E"]),
        "D.class": make_class("D", ["E"]),
        "E.class": make_class("E"),
        "F.class": make_class("F", ["A"]),
    })
    result = run_analysis({"input_path": str(directory)})

    for record in result.records:
        for target in record.outgoing:
            assert result.records[target].group <= record.group
    by_name = {r.class_name: r.group for r in result.records}
    assert by_name["B"] == by_name["C"]
