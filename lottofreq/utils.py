import sys
import logging

# ============================================================
# 로깅 설정
# ============================================================
def setup_logging():
    """로깅 시스템 초기화"""
    logger = logging.getLogger("LottoFreq")
    logger.setLevel(logging.DEBUG)

    # 모듈 재로딩 시 핸들러 중복 방지
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 콘솔 핸들러
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger

logger = setup_logging()
