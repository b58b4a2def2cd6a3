# src/numpart/workspace.py
from __future__ import annotations

import os
from importlib.resources import files as pkg_files
from importlib.resources.abc import Traversable
from pathlib import Path


def workspace_dir() -> Path:
    env = os.environ.get("NUMPART_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / "Documents" / "Numpart").resolve()


def profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def packaged_profile(name: str) -> Traversable | None:
    """Profile shipped with the package as a resource (readable from zips too), or None."""
    ref = pkg_files("numpart") / "profiles" / f"{name}.toml"
    return ref if ref.is_file() else None


def seed_workspace(*, overwrite: bool = False) -> tuple[Path, int]:
    """
    Copy packaged profiles into the user's workspace.

    overwrite=False → copy-if-missing (normal users)
    overwrite=True  → force replace

    Returns: (workspace_path, files_copied)
    """
    dst = profiles_dir()
    dst.mkdir(parents=True, exist_ok=True)

    count = 0
    refs = sorted((pkg_files("numpart") / "profiles").iterdir(), key=lambda r: r.name)
    for ref in refs:
        if not (ref.is_file() and ref.name.endswith(".toml")):
            continue
        target = dst / ref.name
        if overwrite or not target.exists():
            target.write_bytes(ref.read_bytes())
            count += 1
    return workspace_dir(), count
