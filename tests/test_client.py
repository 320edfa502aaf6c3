import threading

import pytest
import requests

from conftest import FakeResponse, FakeSession
from lottofreq.config import DHLOTTERY_API_URL
from lottofreq.net.client import DrawFetcher, DrawResult, DrawStatus


def current_payload(numbers, draw_no=1):
    item = {'ltEpsd': draw_no, 'ltRflYmd': '20021207', 'bnsWnNo': 45}
    item.update({f"tm{i}WnNo": n for i, n in enumerate(numbers, 1)})
    return {'data': {'list': [item]}}


def legacy_payload(numbers, draw_no=1):
    payload = {'returnValue': 'success', 'drwNo': draw_no, 'bnusNo': 45}
    payload.update({f"drwtNo{i}": n for i, n in enumerate(numbers, 1)})
    return payload


def make_fetcher(response=None, error=None, round_no=1):
    session = FakeSession({DHLOTTERY_API_URL.format(round_no): response}, error=error)
    return DrawFetcher(session=session, delay=0), session


def test_current_format_success():
    fetcher, session = make_fetcher(FakeResponse(current_payload([10, 23, 29, 33, 37, 40])))

    result = fetcher.fetch_draw(1)

    assert result == DrawResult(1, DrawStatus.SUCCESS, (10, 23, 29, 33, 37, 40))
    assert result.ok
    assert session.urls == [DHLOTTERY_API_URL.format(1)]


def test_legacy_format_success():
    fetcher, _ = make_fetcher(FakeResponse(legacy_payload([1, 2, 3, 4, 5, 6])))
    assert fetcher.fetch_draw(1).numbers == (1, 2, 3, 4, 5, 6)


def test_legacy_fail_value_is_absent():
    fetcher, _ = make_fetcher(FakeResponse({'returnValue': 'fail'}))
    result = fetcher.fetch_draw(1)
    assert result.status is DrawStatus.ABSENT
    assert result.numbers == ()


def test_empty_list_is_absent():
    fetcher, _ = make_fetcher(FakeResponse({'data': {'list': []}}))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


def test_http_error_status_is_absent():
    fetcher, _ = make_fetcher(FakeResponse({}, status_code=503))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


def test_html_response_is_absent():
    fetcher, _ = make_fetcher(FakeResponse(text="<html>점검 중</html>"))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


def test_broken_json_is_absent():
    fetcher, _ = make_fetcher(FakeResponse(text="{broken"))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


def test_network_error_is_absent():
    fetcher, _ = make_fetcher(error=requests.ConnectionError("boom"))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


def test_unexpected_error_is_absent():
    fetcher, _ = make_fetcher(error=RuntimeError("boom"))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


@pytest.mark.parametrize("numbers", [
    [1, 2, 3, 4, 5, 5],
    [0, 2, 3, 4, 5, 6],
    [1, 2, 3, 4, 5, 46],
    [1, 2, 3, 4, 5, None],
    [1, 2, 3, 4, 5, "x"],
    [1, 2, 3, 4, 5, "7"],
    [1, 2, 3, 4, 5, 7.0],
    [1, 2, 3, 4, 5, 6.5],
    [True, 2, 3, 4, 5, 6],
])
def test_invalid_numbers_are_absent(numbers):
    fetcher, _ = make_fetcher(FakeResponse(current_payload(numbers)))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


def test_missing_number_field_is_absent():
    payload = legacy_payload([1, 2, 3, 4, 5, 6])
    del payload['drwtNo6']
    fetcher, _ = make_fetcher(FakeResponse(payload))
    assert fetcher.fetch_draw(1).status is DrawStatus.ABSENT


def test_cancel_before_request_skips_network():
    fetcher, session = make_fetcher(FakeResponse(current_payload([1, 2, 3, 4, 5, 6])))
    fetcher.cancel()

    result = fetcher.fetch_draw(1)

    assert result.cancelled
    assert fetcher.is_cancelled
    assert session.urls == []


def test_cancel_during_delay_wakes_up_immediately():
    event = threading.Event()
    session = FakeSession()
    fetcher = DrawFetcher(session=session, delay=30, cancel_event=event)
    threading.Timer(0.05, event.set).start()

    result = fetcher.fetch_draw(7)

    assert result == DrawResult(7, DrawStatus.CANCELLED)
    assert session.urls == []


def test_parse_numbers_rejects_non_object():
    with pytest.raises(ValueError):
        DrawFetcher.parse_numbers([1, 2, 3])


def test_keyboard_interrupt_during_request_cancels():
    fetcher, session = make_fetcher(error=KeyboardInterrupt())

    result = fetcher.fetch_draw(1)

    assert result.cancelled
    assert fetcher.is_cancelled
    assert fetcher.fetch_draw(2).cancelled
    assert len(session.urls) == 1


def test_keyboard_interrupt_during_delay_cancels():
    class InterruptedEvent(threading.Event):
        def wait(self, timeout=None):
            raise KeyboardInterrupt

    session = FakeSession()
    fetcher = DrawFetcher(session=session, delay=30, cancel_event=InterruptedEvent())

    result = fetcher.fetch_draw(4)

    assert result == DrawResult(4, DrawStatus.CANCELLED)
    assert fetcher.is_cancelled
    assert session.urls == []
