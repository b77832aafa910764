from __future__ import annotations

"""
Analysis Result Models.

Defines the immutable result object handed from the analysis engine to the
interface layer, plus the factory functions that build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from classdeps.domain.class_models import ClassRecord, DecodeFailure, Group

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisResult:
    """
    Unified result of one analysis run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        base_path: Normalized directory that was analysed.
        records: Arena of decoded class records.
        groups: Strongly connected components in reverse dependency order.
        failures: Files skipped because they could not be decoded.
        summary: Execution statistics.
    """
    ok: bool
    error: str
    base_path: str

    records: List[ClassRecord] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    failures: List[DecodeFailure] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def cyclic_groups(self) -> List[Group]:
        return [g for g in self.groups if g.is_cyclic]

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        base_path: str,
        failures: Optional[List[DecodeFailure]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> AnalysisResult:
    """
    Create a failed analysis result.

    Args:
        error: Detailed error description.
        base_path: The target input directory.
        failures: Files that failed before the run was aborted.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        AnalysisResult: An immutable error result object.
    """
    return AnalysisResult(
        ok=False,
        error=error,
        base_path=base_path,
        failures=failures or [],
        summary=summary_extra or {},
    )


def create_success_result(
        base_path: str,
        records: List[ClassRecord],
        groups: List[Group],
        failures: Optional[List[DecodeFailure]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> AnalysisResult:
    """
    Create a successful analysis result.

    Args:
        base_path: Normalized input directory.
        records: Arena of decoded records, edges resolved.
        groups: Groups in reverse dependency order.
        failures: Files skipped under the lenient policy.
        summary_extra: Execution metrics.

    Returns:
        AnalysisResult: An immutable success result object.
    """
    summary: Dict[str, Any] = {
        "classes": len(records),
        "groups": len(groups),
        "cyclic_groups": sum(1 for g in groups if g.is_cyclic),
        "skipped": len(failures or []),
    }
    summary.update(summary_extra or {})

    return AnalysisResult(
        ok=True,
        error="",
        base_path=base_path,
        records=records,
        groups=groups,
        failures=failures or [],
        summary=summary,
    )
