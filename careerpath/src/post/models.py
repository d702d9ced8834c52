"""
Post 도메인 모델

테이블:
    - posts: 분류 노드에 연결된 커리어 게시글 (채용/스킬/강의)
"""

from typing import Any

from sqlalchemy import JSON, Boolean, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from careerpath.src.common.enums import PostType
from careerpath.src.common.models.base import Base, TimestampMixin


class Post(Base, TimestampMixin):
    """
    커리어 게시글 테이블.

    filter_option_ids에 연결된 분류 노드 ID 목록을 JSON 배열로 저장한다.
    사용자가 상위 노드를 선택하면 하위 노드에 연결된 게시글까지 매칭된다.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, comment="제목")
    description: Mapped[str | None] = mapped_column(Text, nullable=True, comment="본문")
    post_type: Mapped[PostType] = mapped_column(
        Enum(PostType, name="post_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PostType.JOB,
        comment="게시글 유형",
    )
    filter_option_ids: Mapped[list[int]] = mapped_column(
        JSON, nullable=False, default=list, comment="연결된 분류 노드 ID 목록"
    )
    source_url: Mapped[str | None] = mapped_column(String(1024), nullable=True, comment="원문 URL")
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    location: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True, comment="근무지 목록")
    experience: Mapped[str | None] = mapped_column(String(100), nullable=True, comment="요구 경력")
    salary: Mapped[str | None] = mapped_column(String(100), nullable=True, comment="급여")
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True, comment="작성 관리자"
    )

    def is_linked_to(self, node_ids: set[int]) -> bool:
        """연결된 분류 노드 중 하나라도 node_ids에 포함되는지."""
        return any(node_id in node_ids for node_id in self.filter_option_ids or [])
