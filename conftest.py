"""Root conftest — adds repo root to sys.path so checkepub is importable uninstalled."""

import sys
from pathlib import Path

repo_root = str(Path(__file__).resolve().parent)
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)
