import json
from typing import Any, Dict, Optional

import pytest
import requests


def make_response(
    status_code: int = 200,
    payload: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a real requests.Response carrying a JSON payload."""
    r = requests.Response()
    r.status_code = status_code
    r._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    r.headers.update(headers or {})
    r.url = "https://example.test/"
    return r


@pytest.fixture
def no_sleep():
    """Sleep replacement that records the requested delays."""
    delays = []

    def sleep(seconds: float) -> None:
        delays.append(seconds)

    sleep.delays = delays
    return sleep
