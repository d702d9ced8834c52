"""
Client Tree Builder

평면 노드 목록을 중첩 트리로 변환하고, 검색어 기반 가지치기와
펼침/선택 상태를 관리하는 순수 모듈.

모바일/관리자 화면이 공통으로 사용하는 형태를 한 곳에 둔다.
트리는 새 스냅샷(노드 목록)이 들어올 때마다 전체를 다시 계산한다.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Protocol


class TreeItem(Protocol):
    """트리에 올릴 수 있는 노드 (ORM 모델 또는 응답 스키마)."""

    id: Any
    parent_id: Any
    name: str
    type: Any


@dataclass
class TreeNode:
    item: TreeItem
    children: list[TreeNode] = field(default_factory=list)

    @property
    def id(self) -> Any:
        return self.item.id


def name_sort_key(name: str) -> tuple[str, str]:
    # 대소문자 무시 비교, 대소문자만 다르면 소문자가 먼저
    return (name.casefold(), name.swapcase())


def _sort_key(node: TreeNode) -> tuple[str, str]:
    return name_sort_key(node.item.name)


def sort_tree(nodes: list[TreeNode]) -> None:
    """모든 레벨의 children을 이름순으로 정렬한다 (stable)."""
    nodes.sort(key=_sort_key)
    for node in nodes:
        sort_tree(node.children)


def build_tree(items: Iterable[TreeItem]) -> list[TreeNode]:
    """
    평면 노드 목록으로 트리를 만든다.

    1차: id → TreeNode 맵 생성
    2차: 부모의 children에 연결 (parent_id가 없으면 루트)
    3차: 레벨별 이름 정렬

    부모가 목록에 없는 노드는 어느 트리에도 붙지 않는다.
    """
    items = list(items)
    by_id: dict[Any, TreeNode] = {item.id: TreeNode(item) for item in items}

    roots: list[TreeNode] = []
    for item in items:
        node = by_id[item.id]
        if item.parent_id is None:
            roots.append(node)
            continue
        parent = by_id.get(item.parent_id)
        if parent is not None:
            parent.children.append(node)

    sort_tree(roots)
    return roots


def flatten_tree(roots: Sequence[TreeNode]) -> list[tuple[TreeItem, Any]]:
    """트리를 전위 순회하여 (노드, 부모 ID) 목록으로 펼친다."""
    flat: list[tuple[TreeItem, Any]] = []

    def visit(node: TreeNode, parent_id: Any) -> None:
        flat.append((node.item, parent_id))
        for child in node.children:
            visit(child, node.id)

    for root in roots:
        visit(root, None)
    return flat


def collect_ids(roots: Sequence[TreeNode]) -> set[Any]:
    """트리에 포함된 모든 노드 ID."""
    return {item.id for item, _ in flatten_tree(roots)}


def matches_query(item: TreeItem, query: str) -> bool:
    """이름 또는 타입에 검색어가 포함되는지 (대소문자 무시)."""
    needle = query.lower()
    return needle in item.name.lower() or needle in str(item.type).lower()


def prune_tree(roots: Sequence[TreeNode], query: str | None) -> list[TreeNode]:
    """
    검색어로 트리를 가지치기한다.

    노드는 자신이 일치하거나, 하위 노드 중 하나라도 살아남으면 유지된다.
    유지된 노드의 children은 살아남은 자식만 포함한다 (원본 트리는 변경하지 않음).
    """
    if not query or not query.strip():
        return list(roots)

    needle = query.strip()

    def prune(node: TreeNode) -> TreeNode | None:
        children = [kept for kept in (prune(child) for child in node.children) if kept is not None]
        if children or matches_query(node.item, needle):
            return replace(node, children=children)
        return None

    return [kept for kept in (prune(root) for root in roots) if kept is not None]


class TreeViewState:
    """
    트리 화면의 펼침/선택 상태.

    트리 구조와 독립적인 ID 집합 두 개로 관리하며, 모든 전환은 토글이다.
    노드별 상태: {collapsed, expanded} × {unselected, selected}
    """

    def __init__(self, max_selections: int | None = None, selected: Iterable[Any] = ()) -> None:
        self.max_selections = max_selections
        self.expanded: set[Any] = set()
        self.selected: list[Any] = list(dict.fromkeys(selected))
        self.search: str = ""

    # ----- 펼침 -----

    def is_expanded(self, node_id: Any) -> bool:
        return node_id in self.expanded

    def toggle_expand(self, node_id: Any) -> None:
        if node_id in self.expanded:
            self.expanded.discard(node_id)
        else:
            self.expanded.add(node_id)

    def expand_all(self, items: Iterable[TreeItem]) -> None:
        self.expanded = {item.id for item in items}

    def collapse_all(self) -> None:
        self.expanded = set()

    def set_search(self, query: str, items: Iterable[TreeItem]) -> None:
        """
        검색어를 바꾼다. 검색어가 비어 있지 않으면 현재 전체 노드 목록 기준으로 모두 펼친다.
        """
        self.search = query
        if query.strip():
            self.expand_all(items)

    # ----- 선택 -----

    def is_selected(self, node_id: Any) -> bool:
        return node_id in self.selected

    def toggle_selection(self, node_id: Any) -> list[Any]:
        """
        선택을 토글하고 현재 선택 목록을 반환한다.
        최대 선택 수에 도달한 상태에서의 추가는 무시된다.
        """
        if node_id in self.selected:
            self.selected = [selected_id for selected_id in self.selected if selected_id != node_id]
        elif self.max_selections and len(self.selected) >= self.max_selections:
            pass
        else:
            self.selected = [*self.selected, node_id]
        return list(self.selected)

    def selected_descendant_count(self, node: TreeNode) -> int:
        """노드 아래(자신 제외)에서 선택된 노드 수."""
        return sum(
            (1 if self.is_selected(child.id) else 0) + self.selected_descendant_count(child) for child in node.children
        )
