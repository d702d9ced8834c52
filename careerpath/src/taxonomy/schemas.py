"""
Taxonomy 도메인 Pydantic Schemas

커리어 패스 분류 노드 관련 API 요청/응답 모델.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from careerpath.src.common.enums import FilterType


# ============================================================
# 요청 (관리자)
# ============================================================
class FilterOptionCreate(BaseModel):
    """
    분류 노드 생성 요청.

    POST /api/admin/filters
    이름 공백 검사, 계층 규칙, 형제 이름 중복은 서비스 계층에서 검증한다.
    """

    name: str = Field(..., max_length=255, description="노드 이름")
    type: FilterType = Field(..., description="분류 단계")
    parent_id: int | None = Field(None, description="상위 노드 ID (qualification은 생략)")
    description: str | None = Field(None, description="설명")
    requirements: str | None = Field(None, description="요구 사항")
    avg_salary: str | None = Field(None, max_length=255, description="평균 연봉")
    relevant_exams: str | None = Field(None, description="관련 시험")
    image: str | None = Field(None, max_length=1024, description="이미지 URL")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Government Jobs", "type": "category", "parent_id": 1, "description": "공공 부문 직무"}
        }
    )


class FilterOptionUpdate(BaseModel):
    """
    분류 노드 수정 요청.

    PATCH /api/admin/filters/{id}
    type, parent_id는 변경할 수 없으므로 받지 않는다 (extra 필드 금지).
    """

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    requirements: str | None = None
    avg_salary: str | None = Field(None, max_length=255)
    relevant_exams: str | None = None
    image: str | None = Field(None, max_length=1024)

    model_config = ConfigDict(extra="forbid", json_schema_extra={"example": {"avg_salary": "6-10 LPA"}})


class ToggleActiveRequest(BaseModel):
    """활성/비활성 전환 요청."""

    is_active: bool = Field(..., description="변경할 활성 상태")


# ============================================================
# 응답
# ============================================================
class FilterOptionResponse(BaseModel):
    """분류 노드 응답."""

    id: int
    name: str
    type: FilterType
    parent_id: int | None = None
    description: str | None = None
    requirements: str | None = None
    avg_salary: str | None = None
    relevant_exams: str | None = None
    image: str | None = None
    likes: int = 0
    comments: int = 0
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class FilterOptionCreated(BaseModel):
    """생성된 노드 ID 응답."""

    id: int


class ToggleActiveResponse(BaseModel):
    """활성 상태 변경 결과."""

    success: bool = True
    deactivated_descendants: int = Field(0, description="함께 비활성화된 하위 노드 수")


class FilterStatsResponse(BaseModel):
    """관리자 트리 상단 통계."""

    total: int
    active: int
    inactive: int


class DescendantIdsResponse(BaseModel):
    """활성 하위 노드 ID 목록."""

    node_id: int
    descendant_ids: list[int]


class FilterTreeNodeResponse(BaseModel):
    """중첩 트리 노드."""

    id: int
    name: str
    type: FilterType
    parent_id: int | None = None
    is_active: bool = True
    children: list[FilterTreeNodeResponse] = Field(default_factory=list)


class FilterTreeResponse(BaseModel):
    """관리자용 트리 응답 (검색어 적용 결과 + 자동 펼침 ID)."""

    search: str | None = None
    roots: list[FilterTreeNodeResponse]
    expanded_ids: list[int] = Field(default_factory=list)
