"""Artifact store: named JSON documents on the local filesystem.

Each category is a flat directory mapping a caller-chosen name to one JSON
document (``<root>/<category dir>/<name>.json``). Saving an existing name
replaces it; nothing is versioned or auto-deleted.

Writes go to a temporary file in the target directory and are moved into
place with ``os.replace``, so readers never see a partial document. There is
no durability guarantee across a crash mid-write.
"""

import json
import logging
import os
import tempfile
from enum import StrEnum
from pathlib import Path
from typing import Any

from reopt_client.errors import NotFoundError

logger = logging.getLogger(__name__)


def _file_mode() -> int:
    """Mode a plain open() would create: 0o666 masked by the process umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ArtifactCategory(StrEnum):
    """Logical artifact categories, valued by their directory name."""

    REQUEST = "inputs"
    OUTPUT = "outputs"
    LOAD_PROFILE = "load_profiles"
    RATE = "electric_rates"


class ArtifactStore:
    """Local filesystem-backed JSON artifact store."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        for category in ArtifactCategory:
            (self._root / category.value).mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, category: ArtifactCategory, name: str) -> Path:
        """Return the file path for an artifact name.

        Raises:
            ValueError: If the name is empty or contains a path separator.
        """
        if not name or not name.strip():
            msg = "Artifact name must not be empty."
            raise ValueError(msg)
        if "/" in name or "\\" in name or name in (".", ".."):
            msg = f"Artifact name must not contain path separators: {name!r}"
            raise ValueError(msg)
        return self._root / ArtifactCategory(category).value / f"{name}.json"

    def save(self, category: ArtifactCategory, name: str, document: Any) -> Path:
        """Write ``document`` as pretty-printed JSON, replacing any previous one."""
        dest = self.path_for(category, name)
        payload = json.dumps(document, indent=2)

        fd, tmp_name = tempfile.mkstemp(
            dir=dest.parent, prefix=f".{dest.stem}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.chmod(tmp_name, _file_mode())
            os.replace(tmp_name, dest)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("Saved %s artifact to %s", category, dest)
        return dest

    def load(self, category: ArtifactCategory, name: str) -> Any:
        """Read a stored document.

        Raises:
            NotFoundError: If nothing was saved under this name.
        """
        path = self.path_for(category, name)
        if not path.exists():
            raise NotFoundError(str(category), name)
        return json.loads(path.read_text(encoding="utf-8"))

    def exists(self, category: ArtifactCategory, name: str) -> bool:
        return self.path_for(category, name).exists()
