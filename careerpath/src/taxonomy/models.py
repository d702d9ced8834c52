"""
FilterOption (커리어 패스 분류) 모델

qualification → category → sector → subSector → branch → role 6단계의
Self-referencing 트리를 평면 테이블 + parent_id 포인터로 저장한다.
"""

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from careerpath.src.common.enums import FilterType
from careerpath.src.common.models.base import Base, TimestampMixin


class FilterOption(Base, TimestampMixin):
    """
    커리어 패스 분류 노드 테이블.

    - type, parent_id는 생성 시 고정되며 수정되지 않는다.
    - is_active=False는 soft delete를 의미하며, 비활성화 시 모든 하위 노드도 함께 비활성화된다.
    """

    __tablename__ = "filter_options"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="노드 이름 (형제 간 고유)")
    type: Mapped[FilterType] = mapped_column(
        Enum(FilterType, name="filter_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        comment="분류 단계",
    )
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("filter_options.id"), nullable=True, comment="상위 노드 ID (qualification만 Null)"
    )

    # 상세 설명 필드 (선택)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    avg_salary: Mapped[str | None] = mapped_column(String(255), nullable=True)
    relevant_exams: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True, comment="이미지 URL")

    # 참여 카운터
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, comment="활성 여부 (soft delete)")

    __table_args__ = (
        Index("idx_filter_options_parent_id", "parent_id"),
        Index("idx_filter_options_is_active", "is_active"),
        # 동시 생성 경쟁 시 형제 이름 중복 방지 (루트는 parent_id가 NULL이므로 서비스 검증에만 의존)
        UniqueConstraint("parent_id", "name", name="uq_filter_options_parent_name"),
    )

    def __repr__(self):
        return f"<FilterOption(id={self.id}, name={self.name}, type={self.type}, parent_id={self.parent_id})>"
