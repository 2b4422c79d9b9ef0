# 게시글 라우터
# - POST /api/posts : 로그인 필요, multipart (title, content, type, images 최대 3장)
# - GET  /api/posts : 인증 불필요, ?page=&limit=&type=

from typing import List, Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from ..core.config import Settings, get_app_settings
from ..core.security import get_current_user_id
from ..schemas.post_schema import PostCreated, PostPage, PostPublic
from ..services.post_service import PostService, get_post_service

router = APIRouter(prefix="/posts", tags=["posts"])

@router.post(
    "",
    response_model=PostCreated,
    status_code=status.HTTP_201_CREATED,
    summary="게시글 작성 (로그인 필요, 이미지 최대 3장)",
)
async def create_post(
    title: str = Form(..., min_length=1),
    content: str = Form(..., min_length=1),
    category: str = Form(..., alias="type", min_length=1),
    images: Optional[List[UploadFile]] = File(None),
    user_id: PydanticObjectId = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service),
):
    # 파일명이 빈 파트는 "파일 없음"으로 취급
    files = [f for f in (images or []) if f.filename]
    # 개수 초과는 잘라내지 않고 AttachmentStore.check에서 요청 자체를 거절
    post = await service.create(user_id, title, content, category, files)
    return PostCreated(message="Post created", post=PostPublic.from_post(post))

@router.get("", response_model=PostPage, summary="게시글 목록 (분류 필터, 최신순, 페이지네이션)")
async def list_posts(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    category: Optional[str] = Query(None, alias="type"),
    settings: Settings = Depends(get_app_settings),
    service: PostService = Depends(get_post_service),
):
    return await service.list(category or None, page, limit or settings.DEFAULT_PAGE_SIZE)
