"""Locate and read ``xrdctl.toml``.

Lookup order: the ``--config`` flag, then ``XRDCTL_CONFIG``, then a walk up
from the working directory the way git finds ``.git/``. A single file at the
top of a tree of host-meta and WebFinger documents thus sets the ``[output]``
layout and ``[convert]`` target for every run below it.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import click

from xrdctl.config.models import XrdConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "xrdctl.toml"
CONFIG_ENV_VAR = "XRDCTL_CONFIG"
KNOWN_SECTIONS = frozenset(XrdConfig.model_fields)


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for xrdctl.toml.

    ``XRDCTL_CONFIG`` wins when set; if it names a missing file there is no
    config at all rather than a fallback to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse *path*, keeping only the ``[output]`` and ``[convert]`` tables.

    Malformed TOML raises :class:`click.ClickException` naming the file.
    Other top-level keys are dropped with a warning, so a typo such as
    ``[ouptut]`` is reported instead of failing settings validation.
    """
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc

    unknown = sorted(set(data) - KNOWN_SECTIONS)
    if unknown:
        logger.warning(
            "Ignoring unknown keys in %s: %s (known sections: %s)",
            path,
            ", ".join(unknown),
            ", ".join(sorted(KNOWN_SECTIONS)),
        )
    return {key: value for key, value in data.items() if key in KNOWN_SECTIONS}


def load_config(path: Path | None = None, cwd: Path | None = None) -> XrdConfig:
    """Load the TOML sections alone, without env vars or CLI flags.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default XrdConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return XrdConfig()
    return XrdConfig.model_validate(read_config_file(path))
