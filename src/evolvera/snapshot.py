"""
snapshot.py — JSON snapshot of the full civilization for saves and the dashboard.

Uses an atomic rename-swap so the dashboard process never reads a
half-written file.  Field names mirror Civilization / AgeRecord exactly,
so load_snapshot(write_snapshot(civ)) rebuilds an equal object.
"""

import json
import os
import pathlib

from . import config
from .civilization import Civilization

DEFAULT_PATH: pathlib.Path = pathlib.Path(config.SAVES_DIR) / config.SNAPSHOT_NAME


def dumps(civ: Civilization, indent: int = 2) -> str:
    return json.dumps(civ.to_dict(), indent=indent, ensure_ascii=False)


def write_snapshot(civ: Civilization, path=DEFAULT_PATH) -> pathlib.Path:
    """Serialise *civ* to *path*.  Writes a .tmp file first, then os.replace()."""
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix('.tmp')
    tmp.write_text(dumps(civ), encoding='utf-8')
    os.replace(tmp, path)
    return path


def loads(text: str) -> Civilization:
    return Civilization.from_dict(json.loads(text))


def load_snapshot(path=DEFAULT_PATH) -> Civilization:
    return loads(pathlib.Path(path).read_text(encoding='utf-8'))
