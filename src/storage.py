"""Persistence helpers (read/write) for the task file.

The file holds a single JSON object: {"tasks": [...], "next_id": N}.
Storage only moves text in and out of the file; turning that object into
a repository (and rejecting malformed shapes) is the repository's job.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path('tasks.json')

RepositoryDict = Dict[str, Any]


class Storage:
    def __init__(self, path: Union[str, Path] = DEFAULT_TASKS_FILE):
        self.path: Path = Path(path)

    def read(self) -> Optional[RepositoryDict]:
        """Load the raw JSON object from disk.

        Returns None when the file does not exist. Unreadable files and
        invalid JSON propagate (OSError, UnicodeDecodeError, ValueError).
        """
        if not self.path.exists():
            return None
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def write(self, data: RepositoryDict) -> None:
        """Persist data to disk (pretty-printed), replacing the file.

        The text is encoded up front and written to a temp file beside the
        target, then moved into place, so a failed write leaves the previous
        file intact. UnicodeEncodeError (a ValueError) and OSError propagate.
        """
        payload = json.dumps(data, indent=4, ensure_ascii=False).encode('utf-8')
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=self.path.name + '.', suffix='.tmp', dir=self.path.parent)
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise
        logger.debug("wrote %d bytes to %s", len(payload), self.path)
