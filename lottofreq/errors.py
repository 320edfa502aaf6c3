class LottoFreqError(Exception):
    """lottofreq 기본 예외"""


class FetchCancelledError(LottoFreqError):
    """요청 대기 중 취소 신호를 받아 빈도 수집 전체가 중단됨"""

    def __init__(self, round_no: int):
        super().__init__(f"Fetch cancelled at draw #{round_no}")
        self.round_no = round_no
