from pathlib import Path

from mealplanner.utilities.config import DATA_DIR

# Data files live under DATA_DIR unless a repository is given another directory.


def data_file(data_dir, name: str) -> Path:
    return Path(data_dir) / name

__all__ = ['DATA_DIR', 'data_file']
