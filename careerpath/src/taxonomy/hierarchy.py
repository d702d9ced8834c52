"""
계층 규칙 (Hierarchy Rules)

분류 단계 간 부모-자식 허용 관계를 정의하는 순수 함수 모음.
I/O와 부수효과가 없으며 FilterType 6개 값 전체에 대해 정의된다.
"""

from careerpath.src.common.enums import FilterType


# 상위 → 하위 전체 순서
TYPE_ORDER: tuple[FilterType, ...] = (
    FilterType.QUALIFICATION,
    FilterType.CATEGORY,
    FilterType.SECTOR,
    FilterType.SUB_SECTOR,
    FilterType.BRANCH,
    FilterType.ROLE,
)

_CHILD_TYPES: dict[FilterType, frozenset[FilterType]] = {
    FilterType.QUALIFICATION: frozenset({FilterType.CATEGORY}),
    FilterType.CATEGORY: frozenset({FilterType.SECTOR}),
    FilterType.SECTOR: frozenset({FilterType.SUB_SECTOR}),
    FilterType.SUB_SECTOR: frozenset({FilterType.BRANCH}),
    FilterType.BRANCH: frozenset({FilterType.ROLE}),
    FilterType.ROLE: frozenset(),  # 리프: 하위 노드 불가
}


def legal_child_types(parent_type: FilterType | str) -> frozenset[FilterType]:
    """부모 타입 아래에 생성할 수 있는 자식 타입 집합을 반환한다."""
    return _CHILD_TYPES[FilterType(parent_type)]


def is_valid_root_type(node_type: FilterType | str) -> bool:
    """루트(parent 없음)로 생성 가능한 타입인지 확인한다. qualification만 허용."""
    return FilterType(node_type) == FilterType.QUALIFICATION


def is_leaf_type(node_type: FilterType | str) -> bool:
    """자식을 가질 수 없는 타입인지 확인한다."""
    return not legal_child_types(node_type)


def type_level(node_type: FilterType | str) -> int:
    """전체 순서에서의 위치 (qualification=0 ... role=5)."""
    return TYPE_ORDER.index(FilterType(node_type))
