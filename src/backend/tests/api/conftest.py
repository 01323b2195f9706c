import json
import os
import sys
from pathlib import Path

import pytest

# Ensure `src/backend` is on sys.path so imports like `import fiscal_audit...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from fastapi.testclient import TestClient

from fiscal_audit.api import create_app


@pytest.fixture
def client(monkeypatch) -> TestClient:
    monkeypatch.delenv("FISCAL_AUDIT_RULES_CONFIG", raising=False)
    return TestClient(create_app())


@pytest.fixture
def material_payload() -> dict:
    path = Path(__file__).resolve().parents[1] / "fixtures" / "cases" / "material_purchase" / "extraction.json"
    return json.loads(path.read_text(encoding="utf-8"))
