from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the entire analysis workflow:
1. Validates configuration and the input directory.
2. Lists the class files of the directory.
3. Decodes every file (optionally on a worker pool).
4. Applies the malformed-file policy (skip or abort).
5. Resolves references into the record graph.
6. Computes the cyclic groups in reverse dependency order.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple, Union

from classdeps.core.classfile.reader import read_class_file
from classdeps.core.graph.builder import build_reference_graph
from classdeps.core.graph.components import find_groups
from classdeps.core.pipeline.validator import validate_config
from classdeps.core.services.scanner import display_name, list_class_files
from classdeps.domain.analysis_models import (
    AnalysisResult,
    create_error_result,
    create_success_result,
)
from classdeps.domain.class_models import ClassRecord, DecodedClass, DecodeFailure
from classdeps.domain.errors import MalformedClassFileError

logger = logging.getLogger(__name__)

DecodeOutcome = Union[DecodedClass, DecodeFailure]


def run_analysis(config: Optional[Dict[str, Any]] = None) -> AnalysisResult:
    """
    Execute the full analysis over one directory.

    Args:
        config: The configuration dictionary (raw or partial).

    Returns:
        AnalysisResult: Records, groups and statistics, or an error result.
    """
    logger.info("Analysis started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    base_path = os.path.abspath(os.path.expanduser(cfg["input_path"]))
    if not os.path.isdir(base_path):
        msg = f"Input directory does not exist: {base_path}"
        logger.error(msg)
        return create_error_result(msg, base_path)

    # -------------------------------------------------------------------------
    # 2) Discovery
    # -------------------------------------------------------------------------
    try:
        file_names = list_class_files(base_path)
    except OSError as e:
        msg = f"Failed to list directory {base_path}: {e}"
        logger.error(msg)
        return create_error_result(msg, base_path)

    # -------------------------------------------------------------------------
    # 3) Decoding
    # -------------------------------------------------------------------------
    outcomes = decode_files(base_path, file_names, workers=cfg["decode_workers"])

    records: List[ClassRecord] = []
    failures: List[DecodeFailure] = []

    for file_name, outcome in outcomes:
        if isinstance(outcome, DecodeFailure):
            if not cfg["skip_malformed"]:
                msg = f"Failed to decode {file_name}: {outcome.error}"
                logger.error(msg)
                return create_error_result(msg, base_path, failures=[outcome])
            logger.error(f"Skipping {file_name}: {outcome.error}")
            failures.append(outcome)
            continue

        records.append(ClassRecord(
            index=len(records),
            file_name=file_name,
            class_name=display_name(file_name),
            class_path=outcome.class_path,
            reference_names=list(outcome.reference_names),
        ))

    # -------------------------------------------------------------------------
    # 4) Graph & Components
    # -------------------------------------------------------------------------
    build_reference_graph(records)
    groups = find_groups(records)

    logger.info(f"Analysis finished: {len(records)} class(es), {len(groups)} group(s).")
    return create_success_result(
        base_path,
        records,
        groups,
        failures=failures,
        summary_extra={"files": len(file_names)},
    )


def decode_files(
        base_path: str,
        file_names: List[str],
        *,
        workers: int = 1,
) -> List[Tuple[str, DecodeOutcome]]:
    """
    Decode each file, keeping the listing order in the result.

    Args:
        base_path: Directory holding the files.
        file_names: Names to decode.
        workers: Thread count; 1 decodes in the calling thread.

    Returns:
        List[Tuple[str, DecodeOutcome]]: ``(file_name, outcome)`` pairs.
    """
    if workers <= 1 or len(file_names) <= 1:
        return [(name, _decode_one(base_path, name)) for name in file_names]

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ClassDecoder") as executor:
        outcomes = executor.map(lambda name: _decode_one(base_path, name), file_names)
        return list(zip(file_names, outcomes))


def _decode_one(base_path: str, file_name: str) -> DecodeOutcome:
    try:
        return read_class_file(os.path.join(base_path, file_name))
    except (MalformedClassFileError, OSError) as e:
        return DecodeFailure(file_name=file_name, error=str(e))
