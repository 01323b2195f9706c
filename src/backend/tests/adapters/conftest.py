import os
import sys
from pathlib import Path

import pytest

# Ensure `src/backend` is on sys.path so imports like `import fiscal_audit...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)


@pytest.fixture
def cases_root() -> Path:
    return Path(__file__).resolve().parents[1] / "fixtures" / "cases"
