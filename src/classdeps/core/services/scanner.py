from __future__ import annotations

"""
Class File Discovery Service.

Lists the class files of a single directory (no recursion, no archives).
Inner-class files, whose names contain the nested-class separator, are left
out at discovery time.
"""

import logging
import os
from typing import List

from classdeps.domain.constants import CLASS_FILE_SUFFIX, NESTED_CLASS_SEPARATOR

logger = logging.getLogger(__name__)


def list_class_files(directory: str) -> List[str]:
    """
    Return the names of the class files directly inside ``directory``.

    Names are sorted so that repeated runs see the same listing order.

    Args:
        directory: Directory to list.

    Returns:
        List[str]: Bare file names (not paths).

    Raises:
        OSError: If the directory cannot be listed.
    """
    names: List[str] = []
    for entry in sorted(os.listdir(directory)):
        if not is_class_file_name(entry):
            continue
        if not os.path.isfile(os.path.join(directory, entry)):
            continue
        names.append(entry)

    logger.debug(f"Found {len(names)} class file(s) in {directory}")
    return names


def is_class_file_name(file_name: str) -> bool:
    """Check whether a name denotes a top-level class file."""
    return file_name.endswith(CLASS_FILE_SUFFIX) and NESTED_CLASS_SEPARATOR not in file_name


def display_name(file_name: str) -> str:
    """Strip the class file suffix from a file name."""
    return file_name[:-len(CLASS_FILE_SUFFIX)]
