"""
User 도메인 모델

테이블:
    - users: 통합 계정 (관리자 여부 포함)
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from careerpath.src.common.models.base import Base, TimestampMixin


# ============================================================
# User (통합 계정)
# ============================================================


class User(Base, TimestampMixin):
    """
    통합 사용자 계정 테이블.

    인증은 외부 Identity Provider가 담당하며, external_id에 해당 provider의 subject를 저장한다.
    관리자 권한은 is_admin 플래그로만 판단한다.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False, comment="Identity Provider subject"
    )
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False, comment="이메일")
    username: Mapped[str] = mapped_column(String(100), nullable=False, comment="사용자명")
    fullname: Mapped[str | None] = mapped_column(String(255), nullable=True, comment="이름")
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, comment="관리자 여부")
