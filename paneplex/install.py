"""Installs the default assets into the data directory on first run or upgrade."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

VERSION_FILE = "VERSION"


def populate_data_dir(
    data_dir: str | os.PathLike[str], assets: Mapping[str, bytes], version: str
) -> list[Path]:
    """Write the assets under data_dir, with the version in a VERSION file.

    When the recorded version differs from version every asset is rewritten;
    otherwise only the missing ones are. Returns the paths written.
    """
    root = Path(data_dir)
    files = dict(assets)
    files[VERSION_FILE] = version.encode()

    try:
        last_version = (root / VERSION_FILE).read_text()
    except (OSError, UnicodeDecodeError):
        last_version = ""
    out_of_date = last_version != version

    written = []
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if out_of_date or not path.exists():
            path.write_bytes(content)
            written.append(path)
    return written