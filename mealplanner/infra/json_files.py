"""JSON file helpers shared by the repositories."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from mealplanner.domain.errors import PersistenceError

logger = logging.getLogger(__name__)

_MISSING = object()


def read_json(path: Path, default):
    '''Returns the decoded file content, or default when the file is missing or malformed.'''
    if not os.path.exists(path):
        return default
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError both land here
        logger.warning(f"Invalid JSON in {path}: {e}. Falling back to empty data.")
        return default
    except OSError as e:
        logger.error(f"Could not read {path}: {e}. Falling back to empty data.")
        return default


def atomic_write(path: Path, data):
    '''Writes data as JSON through a temp file in the same directory; raises PersistenceError.'''
    path = Path(path)
    tmp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, str(path))
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(f"Could not write {path}: {e}") from e
    finally:
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                logger.debug("Temp file %s already gone", tmp_path)
