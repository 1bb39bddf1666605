from typing import List

import pytest


@pytest.fixture
def log() -> List[str]:
    return []
