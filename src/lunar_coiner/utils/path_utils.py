from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QFileInfo


class PathUtils:
    """
    Qt-friendly path helpers.
    - Normalization with forward slashes
    - File and directory checks via QFileInfo
    - Canonical keys for de-duplicating candidate directories
    """

    @staticmethod
    def normalize(path_str: str) -> str:
        if not path_str:
            return ""
        return str(Path(path_str)).replace("\\", "/")

    @staticmethod
    def is_file(path_str: str) -> bool:
        info = QFileInfo(path_str)
        return info.isFile()

    @staticmethod
    def is_dir(path_str: str) -> bool:
        info = QFileInfo(path_str)
        return info.isDir()

    @staticmethod
    def canonical_key(path: Path) -> str:
        """
        Key used to compare two directory candidates.
        Resolved, case-normalized form when the path exists; the literal path
        string otherwise.
        """
        try:
            return os.path.normcase(str(path.resolve(strict=True)))
        except (OSError, RuntimeError):
            return str(path)
