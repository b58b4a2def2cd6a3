# src/numpart/config.py
from __future__ import annotations

import tomllib as toml
from dataclasses import dataclass
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

from numpart.utility import UserInputError
from numpart.workspace import packaged_profile, profiles_dir

BACKENDS = ("int", "gmpy2")


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | Traversable | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------

def _load_toml(path: Path | Traversable) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None
    except OSError as e:
        raise UserInputError(f"reading {path.name}: {e.strerror or e}.") from None


# --- Metadata handling -----------------------------------------------------

def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    data = {k: v for k, v in raw.items() if k != "PROFILE"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def _check_engine(data: dict[str, Any], source: Path | Traversable) -> None:
    engine = data.get("ENGINE", {}) or {}
    backend = engine.get("BACKEND", "int")
    if not isinstance(backend, str) or backend.strip().lower() not in BACKENDS:
        raise UserInputError(
            f"{source.name}: ENGINE.BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}."
        )
    engine["BACKEND"] = backend.strip().lower()
    data["ENGINE"] = engine


# --- Public API ------------------------------------------------------------

def profile_path(name: str) -> Path | Traversable | None:
    """Workspace profile first, then the packaged copy; None if neither exists."""
    p = profiles_dir() / f"{name}.toml"
    if p.exists():
        return p
    return packaged_profile(name)


def has_profile(name: str) -> bool:
    return profile_path(name) is not None


def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """
    Return [(name, description), ...] for all workspace profiles.
    Profiles lacking [PROFILE] get "(no description)".
    """
    items: list[tuple[str, str]] = []
    pdir = profiles_dir()
    if not pdir.exists():
        return items
    for p in pdir.glob("*.toml"):
        try:
            _, nm, desc = _split_profile_data(_load_toml(p), p.stem)
        except UserInputError:
            # Best-effort listing; fall back to filename
            nm, desc = p.stem, "(unreadable)"
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def load_settings(name: str | None = None) -> Settings:
    """
    Load a profile by name (default 'default'), strip the [PROFILE] metadata,
    normalize ENGINE.BACKEND and return Settings(data, name, description, _source).
    """
    if not name:
        name = "default"

    path = profile_path(name)
    if path is None:
        raise UserInputError(f"profile '{name}' not found in {profiles_dir()}.")

    data, resolved_name, description = _split_profile_data(_load_toml(path), path.stem)
    _check_engine(data, path)

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
