import json
import os
from pathlib import Path
from typing import Dict, Optional, cast

from lottofreq.config import APP_CONFIG
from lottofreq.errors import FetchCancelledError
from lottofreq.net.client import DrawFetcher
from lottofreq.utils import logger

FrequencyTally = Dict[int, int]
FrequencyCache = Dict[int, FrequencyTally]


def new_tally() -> FrequencyTally:
    """1~45 모든 번호를 0으로 초기화한 빈도표"""
    return {n: 0 for n in range(1, APP_CONFIG['LOTTO_MAX_NUMBER'] + 1)}


# ============================================================
# 회차별 번호 빈도 캐시 관리
# ============================================================
class FrequencyStore:
    """1~N회차 번호별 출현 빈도를 계산하고 JSON 파일에 캐시

    캐시 키는 집계한 회차 수(N)이며, 한 번 저장된 항목은 완전한 집계 결과다.
    집계 도중 취소되면 아무것도 저장하지 않는다.
    """

    def __init__(self, fetcher: DrawFetcher, cache_file: Optional[Path] = None):
        self.fetcher = fetcher
        self.cache_file: Path = Path(cache_file) if cache_file else cast(Path, APP_CONFIG['FREQUENCY_CACHE_FILE'])

    def get_frequency(self, round_count: int) -> FrequencyTally:
        """round_count 회차까지의 번호별 출현 빈도 (캐시 우선)"""
        if round_count < 1:
            raise ValueError(f"round_count must be >= 1, got {round_count}")

        cached_data = self.load_cache()
        if round_count in cached_data:
            logger.info(f"Using cached frequency for {round_count} draws")
            return cached_data[round_count]

        logger.info(f"Collecting draws 1..{round_count} from API")
        frequency = self._accumulate(round_count)

        cached_data[round_count] = frequency
        self.save_cache(cached_data)
        return frequency

    def _accumulate(self, round_count: int) -> FrequencyTally:
        frequency = new_tally()
        succeeded = 0
        interval = APP_CONFIG['PROGRESS_INTERVAL']

        for round_no in range(1, round_count + 1):
            result = self.fetcher.fetch_draw(round_no)
            if result.cancelled:
                raise FetchCancelledError(round_no)
            if result.ok:
                for number in result.numbers:
                    frequency[number] += 1
                succeeded += 1

            if round_no % interval == 0:
                logger.info(f"Progress: {round_no}/{round_count} draws processed")

        skipped = round_count - succeeded
        if skipped:
            logger.warning(f"Skipped {skipped} of {round_count} draws without data")
        return frequency

    def load_cache(self) -> FrequencyCache:
        """캐시 파일 로드 (없거나 손상되면 빈 캐시)"""
        if not self.cache_file.exists():
            return {}

        try:
            with open(self.cache_file, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load frequency cache, starting empty: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.error("Frequency cache is not a JSON object, starting empty")
            return {}

        cache: FrequencyCache = {}
        invalid_count = 0
        for key, value in raw.items():
            normalized = self._normalize_entry(key, value)
            if normalized is None:
                invalid_count += 1
                continue
            round_count, tally = normalized
            cache[round_count] = tally

        if invalid_count:
            logger.warning(f"Skipped {invalid_count} invalid frequency cache entries")
        return cache

    def _normalize_entry(self, key, value):
        """캐시 항목 정규화 및 검증"""
        try:
            round_count = int(key)
            tally = {int(n): c for n, c in value.items()}
        except (AttributeError, TypeError, ValueError):
            return None

        # 빈도는 정수만 허용 (실수, 문자열, bool 거부)
        if not all(isinstance(c, int) and not isinstance(c, bool) for c in tally.values()):
            return None

        if round_count < 1:
            return None
        if set(tally) != set(new_tally()):
            return None
        if any(c < 0 for c in tally.values()):
            return None

        # 번호 순서로 재구성
        return round_count, {n: tally[n] for n in sorted(tally)}

    def save_cache(self, data: FrequencyCache):
        """캐시 전체를 파일에 저장 (Atomic, 실패 시 로그만 남김)"""
        temp_file: Optional[Path] = None
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self.cache_file.with_suffix('.tmp')
            serializable = {
                str(round_count): {str(n): c for n, c in tally.items()}
                for round_count, tally in sorted(data.items())
            }
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(serializable, f, ensure_ascii=False, indent=2)
            os.replace(temp_file, self.cache_file)
            logger.info(f"Saved frequency cache ({len(data)} entries)")
        except Exception as e:
            logger.error(f"Failed to save frequency cache: {e}")
            try:
                if temp_file and temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
