import json

import pytest

from lottofreq.net.client import DrawResult


class FakeFetcher:
    """회차 번호 → 당첨 번호 매핑으로 응답하는 조회기 (호출 기록 유지)"""

    def __init__(self, draws=None, cancel_at=None):
        self.draws = draws or {}
        self.cancel_at = cancel_at
        self.calls = []

    def fetch_draw(self, round_no):
        self.calls.append(round_no)
        if self.cancel_at is not None and round_no >= self.cancel_at:
            return DrawResult.cancel(round_no)
        numbers = self.draws.get(round_no)
        if numbers is None:
            return DrawResult.absent(round_no)
        return DrawResult.success(round_no, numbers)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FakeSession:
    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.urls = []

    def get(self, url, headers=None, timeout=None):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.responses[url]

    def close(self):
        self.closed = True


def draw_numbers(round_no):
    """회차마다 다른 유효한 6개 번호"""
    start = (round_no * 7) % 40
    return [start + i + 1 for i in range(6)]


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "cache" / "lotto_frequency_cache.json"
