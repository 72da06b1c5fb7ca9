from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest


@pytest.fixture()
def mock_db():
    """A provider handing out one mocked connection whose cursors share one mock."""
    provider = MagicMock()
    conn = MagicMock()
    provider.acquire.return_value = conn
    cur = conn.cursor.return_value.__enter__.return_value
    return SimpleNamespace(provider=provider, conn=conn, cur=cur)
