import enum
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests

from lottofreq.config import APP_CONFIG, DHLOTTERY_API_URL, REQUEST_HEADERS
from lottofreq.utils import logger


class DrawStatus(enum.Enum):
    SUCCESS = "success"
    ABSENT = "absent"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class DrawResult:
    """회차 조회 결과 (성공 / 데이터 없음 / 취소)"""
    round_no: int
    status: DrawStatus
    numbers: Tuple[int, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status is DrawStatus.SUCCESS

    @property
    def cancelled(self) -> bool:
        return self.status is DrawStatus.CANCELLED

    @classmethod
    def success(cls, round_no: int, numbers) -> 'DrawResult':
        return cls(round_no, DrawStatus.SUCCESS, tuple(numbers))

    @classmethod
    def absent(cls, round_no: int) -> 'DrawResult':
        return cls(round_no, DrawStatus.ABSENT)

    @classmethod
    def cancel(cls, round_no: int) -> 'DrawResult':
        return cls(round_no, DrawStatus.CANCELLED)


# ============================================================
# 당첨 번호 조회기 (회차 단위, 순차 요청)
# ============================================================
class DrawFetcher:
    """동행복권 API에서 회차별 당첨 번호 6개를 가져오는 조회기

    요청마다 ``delay`` 초를 먼저 대기한다 (서버 부하 방지).
    대기 중 ``cancel()`` 이 호출되거나 Ctrl+C (KeyboardInterrupt) 가 들어오면
    요청 없이 CANCELLED 결과를 돌려준다.
    """

    LEGACY_KEYS = tuple(f"drwtNo{i}" for i in range(1, 7))
    CURRENT_KEYS = tuple(f"tm{i}WnNo" for i in range(1, 7))

    def __init__(self, session: Optional[requests.Session] = None,
                 api_url: str = DHLOTTERY_API_URL,
                 delay: Optional[float] = None,
                 timeout: Optional[float] = None,
                 cancel_event: Optional[threading.Event] = None):
        self.session = session if session is not None else requests.Session()
        self.api_url = api_url
        self.delay = APP_CONFIG['REQUEST_DELAY'] if delay is None else delay
        self.timeout = APP_CONFIG['API_TIMEOUT'] if timeout is None else timeout
        self._cancel_event = cancel_event or threading.Event()

    def cancel(self):
        self._cancel_event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def fetch_draw(self, round_no: int) -> DrawResult:
        """단일 회차 당첨 번호 조회"""
        # Event.wait 는 신호가 오면 즉시 True 반환, Ctrl+C 는 KeyboardInterrupt 로 깨어남
        try:
            cancelled = self._cancel_event.wait(self.delay)
        except KeyboardInterrupt:
            self.cancel()
            cancelled = True
        if cancelled:
            logger.warning(f"Fetch cancelled before draw #{round_no}")
            return DrawResult.cancel(round_no)

        url = self.api_url.format(round_no)
        try:
            response = self.session.get(url, headers=REQUEST_HEADERS, timeout=self.timeout)
            if not response.ok:
                logger.error(f"Draw #{round_no} request failed: HTTP {response.status_code}")
                return DrawResult.absent(round_no)

            raw_data = response.text
            # 점검 페이지 등 HTML 응답
            if not raw_data.strip().startswith('{'):
                logger.error(f"Draw #{round_no} response is not JSON: {raw_data[:200]}")
                return DrawResult.absent(round_no)

            numbers = self.parse_numbers(response.json())
        except requests.RequestException as e:
            logger.error(f"Network error for draw #{round_no}: {e}")
            return DrawResult.absent(round_no)
        except ValueError as e:
            logger.error(f"Parse error for draw #{round_no}: {e}")
            return DrawResult.absent(round_no)
        except KeyboardInterrupt:
            self.cancel()
            logger.warning(f"Fetch cancelled during draw #{round_no}")
            return DrawResult.cancel(round_no)
        except Exception as e:
            logger.error(f"Unknown error for draw #{round_no}: {e}")
            return DrawResult.absent(round_no)

        if numbers is None:
            logger.info(f"No data for draw #{round_no}")
            return DrawResult.absent(round_no)
        return DrawResult.success(round_no, numbers)

    @classmethod
    def parse_numbers(cls, payload: Dict[str, Any]) -> Optional[Tuple[int, ...]]:
        """API 응답에서 당첨 번호 6개 추출 (현재 형식과 구 형식 모두 지원)

        현재 형식: ``{"data": {"list": [{"ltEpsd": 1205, "tm1WnNo": 1, ...}]}}``
        구 형식: ``{"returnValue": "success", "drwNo": 1205, "drwtNo1": 1, ...}``

        회차 데이터가 없거나 번호가 유효하지 않으면 None.
        """
        if not isinstance(payload, dict):
            raise ValueError("payload is not a JSON object")

        if 'returnValue' in payload:
            if payload.get('returnValue') != 'success':
                return None
            item, keys = payload, cls.LEGACY_KEYS
        else:
            data = payload.get('data') or {}
            data_list = data.get('list') if isinstance(data, dict) else None
            if not data_list:
                return None
            item, keys = data_list[0], cls.CURRENT_KEYS

        try:
            numbers = tuple(item[key] for key in keys)
        except (KeyError, TypeError):
            return None

        # 문자열, 실수, bool 은 번호로 인정하지 않음
        if not all(isinstance(n, int) and not isinstance(n, bool) for n in numbers):
            return None

        max_number = APP_CONFIG['LOTTO_MAX_NUMBER']
        if len(set(numbers)) != len(keys):
            return None
        if any(n < 1 or n > max_number for n in numbers):
            return None
        return numbers
