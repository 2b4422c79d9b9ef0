# 게시글 저장소 레이어
# - 생성, 분류 필터 + 최신순 + 페이지네이션 조회

from typing import List, Optional, Tuple
from beanie import PydanticObjectId
from ..models.post import Post

class PostRepository:
    async def create(
        self,
        author_id: PydanticObjectId,
        title: str,
        content: str,
        category: str,
        image_urls: List[str],
    ) -> Post:
        post = Post(
            title=title,
            content=content,
            category=category,
            image_urls=list(image_urls),
            author_id=author_id,
        )
        return await post.insert()

    async def list(
        self,
        category: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Tuple[List[Post], int]:
        """(해당 페이지 게시글, 조건에 맞는 전체 개수)를 반환합니다.

        category가 비어 있으면 전체를 대상으로 합니다.
        범위를 벗어난 page는 에러 없이 빈 목록을 돌려줍니다.
        """
        query = {"category": category} if category else {}
        total = await Post.find(query).count()
        offset = (page - 1) * page_size
        # 범위를 벗어난 offset은 DB에 보내지 않음 (skip은 int64 범위)
        if offset >= total:
            return [], total
        posts = (
            await Post.find(query)
            .sort("-created_at", "-_id")
            .skip(offset)
            .limit(min(page_size, total - offset))
            .to_list()
        )
        return posts, total
