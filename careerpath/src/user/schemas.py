"""
User 도메인 Pydantic Schemas

사용자 계정 관련 API 요청/응답 모델.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ============================================================
# User (계정)
# ============================================================
class UserResponse(BaseModel):
    """사용자 계정 응답."""

    id: int
    external_id: str
    email: str
    username: str
    fullname: str | None = None
    is_admin: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# User 생성 (개발/테스트용, 실제 가입은 Identity Provider 웹훅이 담당)
# ============================================================
class UserCreate(BaseModel):
    """사용자 생성 요청 (개발/테스트용)."""

    external_id: str = Field(..., min_length=1, max_length=255, description="Identity Provider subject")
    email: EmailStr = Field(..., description="이메일 주소")
    username: str = Field(..., min_length=1, max_length=100, description="사용자명")
    fullname: str | None = Field(None, max_length=255, description="이름")
    is_admin: bool = Field(default=False, description="관리자 여부")
