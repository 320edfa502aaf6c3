import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import APP_CONFIG
from .core.generator import NumberPoolSampler, simulate_random_frequency
from .core.rounds import draw_date, estimate_current_round, next_draw_date
from .core.stats import FrequencyStore, FrequencyTally
from .errors import FetchCancelledError
from .net.client import DrawFetcher
from .utils import logger


def format_set(index: int, numbers: List[int]) -> str:
    return f"세트 {index}: [ " + " ".join(f"{n:02d}" for n in numbers) + " ]"


def format_frequency(frequency: FrequencyTally) -> List[str]:
    """번호별 출현 빈도 (많이 나온 순)"""
    ordered = sorted(frequency.items(), key=lambda x: x[1], reverse=True)
    return [f"{num}번: {count}회" for num, count in ordered]


def print_sets(title: str, sets: List[List[int]]):
    print(f"\n[{title}]")
    for i, numbers in enumerate(sets, 1):
        print(format_set(i, numbers))


def print_recommendations(label: str, sampler: NumberPoolSampler, frequency: FrequencyTally,
                          args: argparse.Namespace):
    result = sampler.recommend(frequency, args.high_sets, args.low_sets, args.pool_size)
    print_sets(f"{label} 고빈도 기반 세트", result['high'])
    print_sets(f"{label} 저빈도 기반 세트", result['low'])


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lottofreq",
        description="로또 6/45 역대 당첨번호 빈도 기반 번호 추천",
    )
    p.add_argument("--round", type=int, default=None,
                   help="집계할 마지막 회차 (기본: 현재 날짜로 추정)")
    p.add_argument("--cache-file", type=Path, default=APP_CONFIG['FREQUENCY_CACHE_FILE'],
                   help=f"빈도 캐시 파일 (기본: {APP_CONFIG['FREQUENCY_CACHE_FILE']})")
    p.add_argument("--high-sets", type=int, default=APP_CONFIG['HIGH_SET_COUNT'],
                   help="고빈도 풀에서 만들 세트 수")
    p.add_argument("--low-sets", type=int, default=APP_CONFIG['LOW_SET_COUNT'],
                   help="저빈도 풀에서 만들 세트 수")
    p.add_argument("--pool-size", type=int, default=APP_CONFIG['TOP_NUMBERS_COUNT'],
                   help="상위/하위 번호 풀 크기 (6 이상)")
    p.add_argument("--simulate", action="store_true",
                   help="난수 시뮬레이션 빈도 기반 세트도 함께 출력")
    p.add_argument("--show-frequency", action="store_true",
                   help="번호별 출현 빈도 출력")
    return p


def run(args: argparse.Namespace, fetcher: DrawFetcher,
        sampler: Optional[NumberPoolSampler] = None) -> int:
    if args.pool_size < APP_CONFIG['NUMBERS_PER_SET']:
        logger.error(f"--pool-size must be at least {APP_CONFIG['NUMBERS_PER_SET']}")
        return 2
    if args.round is not None and args.round < 1:
        logger.error("--round must be a positive draw number")
        return 2

    sampler = sampler or NumberPoolSampler()
    current_round = args.round if args.round is not None else estimate_current_round()
    logger.info(f"Current draw round: {current_round}")
    print(f"마지막 추첨일: {draw_date(current_round)} ({current_round}회)")

    if args.simulate:
        print("\n=== 난수 시뮬레이션 기반 번호 세트 ===")
        random_frequency = simulate_random_frequency(current_round)
        print_recommendations("시뮬레이션", sampler, random_frequency, args)

    store = FrequencyStore(fetcher, args.cache_file)
    try:
        frequency = store.get_frequency(current_round)
    except FetchCancelledError as e:
        logger.warning(f"Frequency collection aborted: {e}")
        return 130

    if args.show_frequency:
        print("\n번호별 출현 빈도:")
        for line in format_frequency(frequency):
            print(line)

    print("\n=== 실제 당첨번호 분석 기반 번호 세트 ===")
    print_recommendations("실제 당첨번호", sampler, frequency, args)
    print(f"\n다음 추첨일: {next_draw_date(current_round)} ({current_round + 1}회)")
    return 0


def main(argv: Optional[List[str]] = None):
    """애플리케이션 진입점"""
    args = build_parser().parse_args(argv)
    logger.info(f"Starting {APP_CONFIG['APP_NAME']} v{APP_CONFIG['VERSION']}")

    # Ctrl+C 는 DrawFetcher 가 KeyboardInterrupt 를 받아 취소 결과로 바꿈
    fetcher = DrawFetcher()
    try:
        code = run(args, fetcher)
    finally:
        fetcher.session.close()
    sys.exit(code)


if __name__ == '__main__':
    main()
