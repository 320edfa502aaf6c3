import datetime
from typing import Optional

from lottofreq.config import APP_CONFIG


def estimate_current_round(now: Optional[datetime.datetime] = None) -> int:
    """현재까지 추첨이 끝난 마지막 회차 추정

    1회차(2002-12-07 토요일) 이후 매주 토요일 추첨.
    토요일 추첨 시각 전이면 이번 주 회차는 아직 없으므로 이전 회차.
    """
    now = now or datetime.datetime.now()
    base_date = APP_CONFIG['FIRST_DRAW_DATE']
    today = now.date()
    if today < base_date:
        raise ValueError(f"{today} is before the first draw ({base_date})")

    days_diff = (today - base_date).days
    estimated = days_diff // 7 + 1

    if today.weekday() == base_date.weekday() and now.hour < APP_CONFIG['DRAW_HOUR']:
        estimated -= 1
    return max(estimated, 1)


def draw_date(round_no: int) -> datetime.date:
    """회차 추첨일"""
    return APP_CONFIG['FIRST_DRAW_DATE'] + datetime.timedelta(weeks=round_no - 1)


def next_draw_date(round_no: int) -> datetime.date:
    return draw_date(round_no + 1)
