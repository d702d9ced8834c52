"""
Post 도메인 Pydantic Schemas
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from careerpath.src.common.enums import PostType


class PostCreate(BaseModel):
    """
    게시글 생성 요청.

    POST /api/admin/posts
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    post_type: PostType = PostType.JOB
    filter_option_ids: list[int] = Field(..., min_length=1, description="연결할 분류 노드 ID 목록")
    source_url: str | None = Field(None, max_length=1024)
    image_url: str | None = Field(None, max_length=1024)
    location: list[str] | None = None
    experience: str | None = Field(None, max_length=100)
    salary: str | None = Field(None, max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Frontend Engineer (React)",
                "post_type": "job",
                "filter_option_ids": [12],
                "location": ["Bengaluru"],
                "experience": "0-2 years",
            }
        }
    )


class PostResponse(BaseModel):
    """게시글 응답."""

    id: int
    title: str
    description: str | None = None
    post_type: PostType
    filter_option_ids: list[int]
    source_url: str | None = None
    image_url: str | None = None
    location: list[str] | None = None
    experience: str | None = None
    salary: str | None = None
    likes: int = 0
    comments: int = 0
    is_active: bool = True
    created_by: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
