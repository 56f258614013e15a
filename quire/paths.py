"""
Path resolution - template names, store paths and identifiers.

A template is addressed three ways:

    name        what callers pass:   "pages/home", "views/pages/home.tpl"
    path        where the store has it:  "views/pages/home.tpl"
    identifier  how a unit registers it: "pages/home"

All paths are store-relative and use "/" separators. An empty name maps to
an empty path and identifier, which stands for "no layout".
"""

import posixpath
import re


def normalize_path(*parts: str) -> str:
    """
    Join and clean path segments with "/" separators.

    Leading slashes are dropped (store paths are always relative) and a
    path that cleans down to "." becomes "".
    """
    joined = "/".join(part.replace("\\", "/") for part in parts if part)
    if not joined:
        return ""

    path = posixpath.normpath(joined).lstrip("/")
    return "" if path == "." else path


def strip_root(path: str, root: str) -> str:
    """Remove `root` from the front of `path` when path lies under it."""
    if not root:
        return path
    if path == root:
        return ""
    if path.startswith(root + "/"):
        return path[len(root) + 1:]
    return path


def to_name(path: str, root: str, ext: str) -> str:
    """
    Convert a template name or path to its canonical identifier.

    Args:
        path: Template name or store path
        root: Normalized root directory ("" for the store root)
        ext: File extension including the leading dot

    Returns:
        Identifier without root prefix and extension, or "" for ""

    Raises:
        ValueError: If the name climbs out of the store with ".."
    """
    if not path:
        return ""

    path = normalize_path(path)
    if path == ".." or path.startswith("../"):
        raise ValueError(f"template name {path!r} leaves the store root")

    path = strip_root(path, root)
    if ext and path.endswith(ext):
        path = path[:-len(ext)]
    return normalize_path(path)


def to_path(name: str, root: str, ext: str) -> str:
    """
    Convert a template name to its canonical store path.

    Any root prefix or extension already present is stripped before the
    root and extension are applied again, so this is idempotent. Names
    that climb out of the store are rejected rather than clamped, so
    `to_name(to_path(n)) == to_name(n)` holds for every accepted name.

    Raises:
        ValueError: If the name climbs out of the store with ".."
    """
    name = to_name(name, root, ext)
    if not name:
        return ""
    return normalize_path(root, name + ext)


def ext_pattern(path: str, ext: str) -> str:
    """
    Build a regular expression matching files with `ext`.

    With a `path`, matches only files under that directory.
    """
    suffix = re.escape(ext) + "$"
    if not path:
        return ".*" + suffix
    return "^" + re.escape(path.rstrip("/") + "/") + ".*" + suffix
