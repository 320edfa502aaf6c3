import random
from typing import Dict, List, Optional

from lottofreq.config import APP_CONFIG
from lottofreq.core.stats import FrequencyTally, new_tally
from lottofreq.utils import logger


# ============================================================
# 빈도 기반 번호 풀 / 세트 생성기
# ============================================================
class NumberPoolSampler:
    """빈도표에서 상위/하위 번호 풀을 뽑고, 풀에서 6개 번호 세트를 생성

    기본 난수원은 ``random.SystemRandom`` (OS 암호학적 난수).
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.SystemRandom()

    @staticmethod
    def extract_pool(frequency: FrequencyTally, high_frequency: bool,
                     pool_size: Optional[int] = None) -> List[int]:
        """빈도 순 상위(high_frequency=True) 또는 하위 번호 풀 추출

        동률은 빈도표의 순회 순서를 유지한다 (안정 정렬).
        """
        if pool_size is None:
            pool_size = APP_CONFIG['TOP_NUMBERS_COUNT']
        if pool_size < 1:
            raise ValueError(f"pool_size must be >= 1, got {pool_size}")

        sorted_by_count = sorted(frequency.items(), key=lambda x: x[1], reverse=high_frequency)
        return [num for num, _ in sorted_by_count[:pool_size]]

    def draw_set(self, pool: List[int]) -> List[int]:
        """풀에서 비복원 추출로 6개 번호를 뽑아 오름차순 반환"""
        per_set = APP_CONFIG['NUMBERS_PER_SET']
        numbers = list(dict.fromkeys(pool))
        if len(numbers) < per_set:
            raise ValueError(f"Pool needs at least {per_set} distinct numbers, got {len(numbers)}")

        result = []
        for _ in range(per_set):
            index = self.rng.randrange(len(numbers))
            result.append(numbers.pop(index))

        return sorted(result)

    def generate_sets(self, pool: List[int], count: int) -> List[List[int]]:
        return [self.draw_set(pool) for _ in range(count)]

    def recommend(self, frequency: FrequencyTally,
                  high_sets: Optional[int] = None,
                  low_sets: Optional[int] = None,
                  pool_size: Optional[int] = None) -> Dict[str, List[List[int]]]:
        """고빈도 풀 세트와 저빈도 풀 세트 생성"""
        high_sets = APP_CONFIG['HIGH_SET_COUNT'] if high_sets is None else high_sets
        low_sets = APP_CONFIG['LOW_SET_COUNT'] if low_sets is None else low_sets

        top_pool = self.extract_pool(frequency, True, pool_size)
        bottom_pool = self.extract_pool(frequency, False, pool_size)
        logger.debug(f"High pool: {top_pool} / Low pool: {bottom_pool}")

        return {
            'high': self.generate_sets(top_pool, high_sets),
            'low': self.generate_sets(bottom_pool, low_sets),
        }


def simulate_random_frequency(total_rounds: int, rng: Optional[random.Random] = None) -> FrequencyTally:
    """난수 6개 번호 세트를 total_rounds 회 뽑아 만든 시뮬레이션 빈도표"""
    rng = rng if rng is not None else random.SystemRandom()
    per_set = APP_CONFIG['NUMBERS_PER_SET']
    max_number = APP_CONFIG['LOTTO_MAX_NUMBER']

    frequency = new_tally()
    logger.info(f"Random simulation started ({total_rounds} draws)")
    for round_no in range(1, total_rounds + 1):
        numbers = set()
        while len(numbers) < per_set:
            numbers.add(rng.randint(1, max_number))
        for num in numbers:
            frequency[num] += 1

        if round_no % 100 == 0:
            logger.debug(f"Simulation progress: {round_no}/{total_rounds}")

    return frequency
