import datetime
from pathlib import Path

# ============================================================
# 상수 정의
# ============================================================
APP_CONFIG = {
    'APP_NAME': 'Lotto 6/45 Frequency Recommender',
    'VERSION': '1.0',
    'FREQUENCY_CACHE_FILE': Path.home() / ".lotto_generator" / "lotto_frequency_cache.json",
    'API_TIMEOUT': 10,
    'REQUEST_DELAY': 0.1,           # 회차별 요청 전 대기 (초)
    'LOTTO_MAX_NUMBER': 45,
    'NUMBERS_PER_SET': 6,
    'TOP_NUMBERS_COUNT': 10,
    'HIGH_SET_COUNT': 3,
    'LOW_SET_COUNT': 2,
    'FIRST_DRAW_DATE': datetime.date(2002, 12, 7),  # 1회차 (토요일)
    'DRAW_HOUR': 21,                # 추첨 결과 반영 시각
    'PROGRESS_INTERVAL': 10,
}

DHLOTTERY_API_URL = "https://www.dhlottery.co.kr/lt645/selectPstLt645Info.do?srchLtEpsd={}"

REQUEST_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Referer': 'https://www.dhlottery.co.kr/lt645/result',
    'Accept': 'application/json, text/javascript, */*; q=0.01',
    'Accept-Language': 'ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7',
    'X-Requested-With': 'XMLHttpRequest',
}
