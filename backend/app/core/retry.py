# 재시도 로직 유틸리티
# - 앱 시작 시 MongoDB 연결 확인(ping)에만 사용합니다.
# - 요청 처리 경로(회원가입/로그인/게시글)에는 재시도가 없습니다.

import logging
from typing import Tuple, Type

from pymongo.errors import ConnectionFailure
from tenacity import (
    after_log,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


def create_connect_retry_decorator(
    max_attempts: int = 3,
    initial_wait: float = 1.0,
    max_wait: float = 10.0,
    exceptions: Tuple[Type[Exception], ...] = (ConnectionFailure,),
):
    """
    외부 서비스 연결용 재시도 데코레이터를 생성합니다.

    지수 백오프(Exponential Backoff):
    - 1번째 실패 후: initial_wait 초 대기
    - 이후 매번 2배씩, 최대 max_wait 초까지

    모든 시도가 실패하면 마지막 예외가 그대로 전파됩니다 (reraise=True).

    사용 예시:
        @create_connect_retry_decorator(max_attempts=5)
        async def ping():
            await client.admin.command("ping")
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=2, min=initial_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        after=after_log(logger, logging.ERROR),
        reraise=True,
    )
