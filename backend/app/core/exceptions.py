# 커스텀 예외 클래스 정의
# - 서비스/저장소 레이어는 HTTPException 대신 이 예외들을 던지고,
#   main.py의 예외 핸들러가 {message, code} 응답으로 변환합니다.
# - 외부로는 안정적인 code만 노출하고, 내부 오류 내용은 로그에만 남깁니다.

from fastapi import status


class BoardError(Exception):
    """게시판 서비스 관련 기본 예외 클래스

    Attributes:
        status_code: 응답 HTTP 상태 코드
        code: 클라이언트에 노출되는 고정 에러 코드
        message: 사용자에게 보여줄 메시지
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    message: str = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UsernameAlreadyExists(BoardError):
    """이미 등록된 username으로 회원가입을 시도한 경우"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "username_taken"
    message = "Username already exists"


class InvalidCredentials(BoardError):
    """로그인 실패

    username이 없는 경우와 비밀번호가 틀린 경우를 구분하지 않습니다.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_credentials"
    message = "Invalid username or password"


class Unauthorized(BoardError):
    """토큰 누락/변조/만료"""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    message = "Could not validate credentials"


class TooManyAttachments(BoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "too_many_images"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"At most {limit} images can be attached to a post")


class UnsupportedAttachment(BoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "unsupported_image"

    def __init__(self, filename: str, content_type: str = None):
        self.filename = filename
        self.content_type = content_type
        super().__init__(f"Only image files can be attached: {filename}")
