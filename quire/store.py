"""
Template stores - where template sources come from.

A store answers two questions: which files live under a directory and
match a pattern, and what a given file contains. Paths are store-relative
and use "/" separators. A missing file is signalled with FileNotFoundError;
any other OSError means the store itself failed.
"""

import os
import re
from abc import ABC, abstractmethod
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Union

from .paths import normalize_path, strip_root


class FileStore(ABC):
    """Abstract template store."""

    @abstractmethod
    def lookup(self, root: str, pattern: str) -> List[str]:
        """
        List files under `root` whose path matches `pattern`.

        Args:
            root: Store-relative directory ("" for the whole store)
            pattern: Regular expression searched in each store-relative path

        Returns:
            Sorted store-relative paths
        """

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """
        Read file content.

        Raises:
            FileNotFoundError: If no file exists at `path`
        """


class DirectoryStore(FileStore):
    """
    Filesystem store rooted at a base directory.

    Args:
        base_dir: Directory all store paths are relative to
    """

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir).resolve()

    def lookup(self, root: str, pattern: str) -> List[str]:
        regex = re.compile(pattern)
        root = normalize_path(root)
        start = self.base_dir / root if root else self.base_dir
        if not start.is_dir():
            return []

        files = []
        for dirpath, _dirs, filenames in os.walk(start):
            for filename in filenames:
                relative = (Path(dirpath) / filename).relative_to(self.base_dir)
                path = relative.as_posix()
                if regex.search(path):
                    files.append(path)
        return sorted(files)

    def read_file(self, path: str) -> bytes:
        target = (self.base_dir / normalize_path(path)).resolve()
        if target != self.base_dir and self.base_dir not in target.parents:
            raise FileNotFoundError(path)
        return target.read_bytes()

    def __repr__(self) -> str:
        return f"DirectoryStore({str(self.base_dir)!r})"


class MemoryStore(FileStore):
    """
    In-memory store.

    Keeps a read counter per path, which makes it handy for observing
    what a render actually fetched.

    Args:
        files: Mapping of store path to content (str is UTF-8 encoded)
    """

    def __init__(self, files: Optional[Dict[str, Union[str, bytes]]] = None):
        self._files: Dict[str, bytes] = {}
        self.reads: Counter = Counter()
        for path, content in (files or {}).items():
            self.write(path, content)

    def write(self, path: str, content: Union[str, bytes]) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._files[normalize_path(path)] = content

    def remove(self, path: str) -> None:
        self._files.pop(normalize_path(path), None)

    def lookup(self, root: str, pattern: str) -> List[str]:
        regex = re.compile(pattern)
        root = normalize_path(root)
        return sorted(
            path for path in self._files
            if (not root or strip_root(path, root) != path) and regex.search(path)
        )

    def read_file(self, path: str) -> bytes:
        path = normalize_path(path)
        self.reads[path] += 1
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def __len__(self) -> int:
        return len(self._files)
