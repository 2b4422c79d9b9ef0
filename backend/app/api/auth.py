# 인증 라우터
# - 회원가입: POST /api/register
# - 로그인: POST /api/login

from fastapi import APIRouter, Depends, status

from ..schemas.user_schema import LoginRequest, LoginResponse, MessageResponse, UserCreate, UserPublic
from ..services.auth_service import AuthService, get_auth_service

router = APIRouter(tags=["auth"])

@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원가입 (username 중복 체크 포함)",
)
async def register(payload: UserCreate, service: AuthService = Depends(get_auth_service)):
    await service.register(payload.username, payload.password)
    return MessageResponse(message="Registration successful")

@router.post("/login", response_model=LoginResponse, summary="로그인 (세션 토큰 발급)")
async def login(payload: LoginRequest, service: AuthService = Depends(get_auth_service)):
    token, user = await service.login(payload.username, payload.password)
    return LoginResponse(token=token, user=UserPublic.from_user(user))
