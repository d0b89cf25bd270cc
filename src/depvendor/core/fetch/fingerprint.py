"""Marker fingerprint computation.

A marker captures the effective inputs of one fetch: the rule name, its
attributes, and the content of the source tree. Two fetches with identical
inputs produce byte-identical markers.
"""
from __future__ import annotations

import hashlib
import json
import os
from collections.abc import Iterator
from pathlib import Path

from depvendor.core.fetch.models import RepositoryRule

_CHUNK_SIZE = 1 << 16


def _iter_tree(root: Path, prefix: str = "") -> Iterator[tuple[str, str, Path]]:
    """Yield (relative path, kind, absolute path) in a stable order.

    Symlinks are reported as links and never followed.
    """
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        rel = f"{prefix}{entry.name}"
        path = Path(entry.path)
        if entry.is_symlink():
            yield rel, "link", path
        elif entry.is_dir(follow_symlinks=False):
            yield rel, "dir", path
            yield from _iter_tree(path, f"{rel}/")
        else:
            yield rel, "file", path


def compute_marker(rule: RepositoryRule) -> bytes:
    """Compute the marker content for a repository rule.

    Args:
        rule: Repository rule whose source tree is hashed

    Returns:
        Marker file content

    Raises:
        OSError: If the source tree cannot be read
    """
    if not rule.path.is_dir():
        raise FileNotFoundError(f"Repository source not found: {rule.path}")

    digest = hashlib.sha256()
    inputs = {"name": rule.name.name, "attributes": rule.attributes}
    digest.update(json.dumps(inputs, sort_keys=True, default=str).encode("utf-8"))

    for rel, kind, path in _iter_tree(rule.path):
        digest.update(f"\0{kind}\0{rel}\0".encode("utf-8"))
        if kind == "link":
            digest.update(os.readlink(path).encode("utf-8"))
        elif kind == "file":
            with open(path, "rb") as f:
                for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                    digest.update(chunk)

    lines = [digest.hexdigest(), f"NAME {rule.name.name}"]
    for key in sorted(rule.attributes):
        value = json.dumps(rule.attributes[key], sort_keys=True, default=str)
        lines.append(f"ATTR {key} {value}")
    return ("\n".join(lines) + "\n").encode("utf-8")


__all__ = ["compute_marker"]
