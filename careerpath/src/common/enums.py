from enum import StrEnum


# ============================================================
# Taxonomy Domain
# ============================================================

class FilterType(StrEnum):
    """커리어 패스 분류 단계 (상위 → 하위 순서로 선언)"""
    QUALIFICATION = "qualification"  # 학력 (루트 전용)
    CATEGORY = "category"            # 분야
    SECTOR = "sector"                # 산업
    SUB_SECTOR = "subSector"         # 세부 산업
    BRANCH = "branch"                # 계열
    ROLE = "role"                    # 직무 (리프)


# ============================================================
# Post Domain
# ============================================================

class PostType(StrEnum):
    """커리어 게시글 유형"""
    JOB = "job"        # 채용
    SKILL = "skill"    # 스킬
    COURSE = "course"  # 강의
