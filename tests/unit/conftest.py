"""
Pytest configuration - no database or network required
"""
import os
import tempfile
from pathlib import Path

import pytest

# Keep log files out of the working tree; must run before src.core.config is imported
_LOG_DIR = Path(tempfile.mkdtemp(prefix="querygate-tests-"))
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("GATE_AUDIT_LOG_PATH", str(_LOG_DIR / "gate_audit.log"))
os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture
def rows() -> list[dict]:
    """Rows an executor might return for a users table"""
    return [
        {"id": 1, "name": "Ada", "city": "London"},
        {"id": 2, "name": "Grace", "city": "Arlington"},
        {"id": 3, "name": "Edsger", "city": "Rotterdam"},
    ]


@pytest.fixture
def executor(rows):
    """Executor stub that records every query it receives"""

    class RecordingExecutor:
        def __init__(self):
            self.calls: list[str] = []

        def __call__(self, sql: str) -> list[dict]:
            self.calls.append(sql)
            return rows

    return RecordingExecutor()
