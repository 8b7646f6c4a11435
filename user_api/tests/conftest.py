import sys
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가 (…/<project-root>)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from unittest.mock import MagicMock


@pytest.fixture
def user_source():
    """users 인덱스에 저장된 정상 문서 1건"""
    return {
        "id": "6f1c2b0e-3d7a-4c55-9a43-0e1b2c3d4e5f",
        "name": "kim",
        "age": 31,
        "job": "engineer",
        "relationship_status": "single",
    }


@pytest.fixture
def mock_store():
    return MagicMock()
