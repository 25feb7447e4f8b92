"""Filesystem helpers for presets, sample files and previews.

Usage:
    from inkstroke.utils import fs
    data = fs.load_yaml("configs/stroke_presets.v1.yaml")
    fs.atomic_write_text(out_dir / "stroke.svg", svg)

Note: Module named `fs.py` to avoid shadowing stdlib `io`.
"""

import os
from pathlib import Path
from typing import Any, Union

import yaml


def atomic_write_text(path: Union[str, Path], text: str) -> Path:
    """Write a UTF-8 text file so readers never see partial content.

    Missing parent directories are created. The text goes to a sibling
    `<name>.tmp` file which is fsynced and then renamed over `path`.

    Returns
    -------
    Path
        The written path

    Raises
    ------
    OSError
        If the file cannot be written; the tmp file is removed first
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")

    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise

    return path


def load_yaml(path: Union[str, Path]) -> Any:
    """Load a YAML file with safe_load.

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If parsing fails; the message names the file
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
