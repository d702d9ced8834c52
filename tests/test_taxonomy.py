"""
Taxonomy 도메인 테스트

분류 노드 생성/수정/활성 전환 규칙(계층, 형제 이름 중복, cascade 비활성화),
하위 노드 해석, 조회 서비스, 관리자 권한 검증, HTTP 엔드포인트를 검증.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.enums import FilterType
from careerpath.src.common.exceptions import InvalidRequest, Unauthenticated, Unauthorized
from careerpath.src.common.repositories.base_repository import DuplicateEntity, EntityNotFound
from careerpath.src.taxonomy.hierarchy import is_valid_root_type, legal_child_types
from careerpath.src.taxonomy.models import FilterOption
from careerpath.src.taxonomy.repositories import FilterOptionRepository
from careerpath.src.taxonomy.services.descendant_resolver import DescendantResolver
from careerpath.src.taxonomy.services.mutation_service import TaxonomyMutationService
from careerpath.src.taxonomy.services.query_service import TaxonomyQueryService
from careerpath.src.taxonomy.tree import collect_ids


ADMIN = "admin-subject"
MEMBER = "member-subject"
ADMIN_HEADERS = {"X-User-Subject": ADMIN}
MEMBER_HEADERS = {"X-User-Subject": MEMBER}


async def _node(session: AsyncSession, node_id: int) -> FilterOption:
    return await session.get(FilterOption, node_id)


# ============================================================
# Mutation Service: 생성
# ============================================================
class TestCreateNode:
    """TaxonomyMutationService.create_node 테스트."""

    async def test_create_root_qualification(self, session: AsyncSession, admin_user):
        """qualification 루트 노드는 parent 없이 생성된다."""
        service = TaxonomyMutationService.from_session(session)

        node_id = await service.create_node(ADMIN, "Graduation", "qualification")

        node = await _node(session, node_id)
        assert node.name == "Graduation"
        assert node.type == FilterType.QUALIFICATION
        assert node.parent_id is None
        assert node.is_active is True
        assert node.likes == 0 and node.comments == 0

    async def test_non_qualification_root_rejected(self, session: AsyncSession, admin_user):
        """qualification이 아닌 타입은 루트로 만들 수 없다."""
        service = TaxonomyMutationService.from_session(session)
        await service.create_node(ADMIN, "Graduation", "qualification")

        with pytest.raises(InvalidRequest, match="Only 'qualification' nodes can be root-level"):
            await service.create_node(ADMIN, "Government Jobs", "category")

    async def test_duplicate_sibling_rejected(self, session: AsyncSession, admin_user):
        """같은 부모 아래에 같은 이름(trim 후)의 노드는 만들 수 없다."""
        service = TaxonomyMutationService.from_session(session)
        root_id = await service.create_node(ADMIN, "Graduation", "qualification")
        await service.create_node(ADMIN, "Government Jobs", "category", root_id)

        with pytest.raises(DuplicateEntity, match="already exists at this level"):
            await service.create_node(ADMIN, "  Government Jobs ", "category", root_id)

    async def test_duplicate_root_rejected(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)
        await service.create_node(ADMIN, "Graduation", "qualification")

        with pytest.raises(DuplicateEntity):
            await service.create_node(ADMIN, "Graduation", "qualification")

    async def test_same_name_under_different_parents(self, session: AsyncSession, career_tree: dict[str, int]):
        """형제가 아니면 이름이 같아도 된다."""
        service = TaxonomyMutationService.from_session(session)

        first = await service.create_node(ADMIN, "Research", "sector", career_tree["Government Jobs"])
        second = await service.create_node(ADMIN, "Research", "sector", career_tree["IT & Software"])

        assert first != second

    async def test_name_is_case_sensitive(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyMutationService.from_session(session)

        node_id = await service.create_node(ADMIN, "government jobs", "category", career_tree["Graduation"])

        assert node_id is not None

    async def test_name_is_trimmed(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)

        node_id = await service.create_node(ADMIN, "  Graduation  ", "qualification")

        assert (await _node(session, node_id)).name == "Graduation"

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_empty_name_rejected(self, session: AsyncSession, admin_user, name: str):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(InvalidRequest, match="Name cannot be empty"):
            await service.create_node(ADMIN, name, "qualification")

    async def test_illegal_child_type_lists_valid_types(self, session: AsyncSession, career_tree: dict[str, int]):
        """허용되지 않는 자식 타입이면 허용 타입 목록을 포함한 메시지로 거부된다."""
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(InvalidRequest) as exc_info:
            await service.create_node(ADMIN, "Web", "subSector", career_tree["IT & Software"])

        message = str(exc_info.value)
        assert "Invalid child type 'subSector' for parent type 'category'" in message
        assert "Valid types: sector" in message

    async def test_role_cannot_have_children(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(InvalidRequest, match="Valid types: none"):
            await service.create_node(ADMIN, "Senior React Developer", "role", career_tree["React Developer"])

    async def test_missing_parent(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(EntityNotFound, match="Parent filter not found"):
            await service.create_node(ADMIN, "Orphan", "category", 99999)

    async def test_unknown_type(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(InvalidRequest, match="Unknown filter type"):
            await service.create_node(ADMIN, "Graduation", "department")

    async def test_descriptive_fields_are_stored(self, session: AsyncSession, career_tree: dict[str, int]):
        """설명 필드는 trim되어 저장되고, 빈 문자열은 None이 된다."""
        service = TaxonomyMutationService.from_session(session)

        node_id = await service.create_node(
            ADMIN,
            "Backend",
            "branch",
            career_tree["Web Development"],
            description=" 서버 개발 ",
            avg_salary="8-12 LPA",
            image="",
        )

        node = await _node(session, node_id)
        assert node.description == "서버 개발"
        assert node.avg_salary == "8-12 LPA"
        assert node.image is None

    async def test_created_nodes_satisfy_hierarchy(self, session: AsyncSession, career_tree: dict[str, int]):
        """생성된 모든 노드는 부모 타입의 허용 자식 타입이거나 qualification 루트이다."""
        nodes = (await session.execute(select(FilterOption))).scalars().all()
        by_id = {node.id: node for node in nodes}

        for node in nodes:
            if node.parent_id is None:
                assert is_valid_root_type(node.type)
            else:
                assert node.type in legal_child_types(by_id[node.parent_id].type)


# ============================================================
# Mutation Service: 수정
# ============================================================
class TestUpdateNode:
    """TaxonomyMutationService.update_node 테스트."""

    async def test_rename(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyMutationService.from_session(session)

        await service.update_node(ADMIN, career_tree["Frontend"], name="  Frontend Engineering ")

        assert (await _node(session, career_tree["Frontend"])).name == "Frontend Engineering"

    async def test_rename_to_sibling_name_rejected(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(DuplicateEntity):
            await service.update_node(ADMIN, career_tree["Government Jobs"], name="IT & Software")

    async def test_rename_to_own_name_allowed(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyMutationService.from_session(session)

        await service.update_node(ADMIN, career_tree["Government Jobs"], name="Government Jobs")

        assert (await _node(session, career_tree["Government Jobs"])).name == "Government Jobs"

    async def test_empty_name_rejected(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(InvalidRequest, match="Name cannot be empty"):
            await service.update_node(ADMIN, career_tree["Frontend"], name="  ")

    async def test_only_given_fields_change(self, session: AsyncSession, career_tree: dict[str, int]):
        """전달된 필드만 바뀌고, 빈 문자열은 값을 지운다."""
        service = TaxonomyMutationService.from_session(session)
        node_id = career_tree["React Developer"]
        await service.update_node(ADMIN, node_id, description="UI 개발", avg_salary="6-10 LPA")

        await service.update_node(ADMIN, node_id, avg_salary="")

        node = await _node(session, node_id)
        assert node.name == "React Developer"
        assert node.description == "UI 개발"
        assert node.avg_salary is None

    @pytest.mark.parametrize("field", ["type", "parent_id", "is_active"])
    async def test_structural_fields_cannot_change(self, session: AsyncSession, career_tree: dict[str, int], field):
        """type, parent_id 등은 수정할 수 없다."""
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(InvalidRequest, match="cannot be updated"):
            await service.update_node(ADMIN, career_tree["Frontend"], **{field: None})

        node = await _node(session, career_tree["Frontend"])
        assert node.type == FilterType.BRANCH
        assert node.parent_id == career_tree["Web Development"]

    async def test_missing_node(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(EntityNotFound, match="Filter node not found"):
            await service.update_node(ADMIN, 99999, name="Nothing")


# ============================================================
# Mutation Service: 활성 전환
# ============================================================
class TestToggleActive:
    """비활성화 cascade 및 재활성화 비대칭 테스트."""

    async def test_deactivate_cascades_to_all_descendants(self, session: AsyncSession, career_tree: dict[str, int]):
        """루트를 비활성화하면 모든 하위 노드가 함께 비활성화된다."""
        service = TaxonomyMutationService.from_session(session)

        deactivated = await service.toggle_active(ADMIN, career_tree["Graduation"], False)

        assert deactivated == len(career_tree) - 1
        for node_id in career_tree.values():
            assert (await _node(session, node_id)).is_active is False

    async def test_reactivate_does_not_cascade(self, session: AsyncSession, career_tree: dict[str, int]):
        """재활성화는 해당 노드만 바꾸고, 하위 노드는 비활성 상태로 남는다."""
        service = TaxonomyMutationService.from_session(session)
        await service.toggle_active(ADMIN, career_tree["IT & Software"], False)

        result = await service.toggle_active(ADMIN, career_tree["IT & Software"], True)

        assert result == 0
        assert (await _node(session, career_tree["IT & Software"])).is_active is True
        for name in ["Software Development", "Web Development", "Frontend", "React Developer"]:
            assert (await _node(session, career_tree[name])).is_active is False

    async def test_deactivate_subtree_leaves_siblings_untouched(
        self, session: AsyncSession, career_tree: dict[str, int]
    ):
        service = TaxonomyMutationService.from_session(session)

        deactivated = await service.toggle_active(ADMIN, career_tree["Government Jobs"], False)

        assert deactivated == 1
        assert (await _node(session, career_tree["Civil Services"])).is_active is False
        assert (await _node(session, career_tree["Graduation"])).is_active is True
        assert (await _node(session, career_tree["IT & Software"])).is_active is True

    async def test_deactivate_reaches_below_inactive_nodes(self, session: AsyncSession, career_tree: dict[str, int]):
        """이미 비활성인 중간 노드 아래도 모두 비활성화된다."""
        service = TaxonomyMutationService.from_session(session)
        await service.toggle_active(ADMIN, career_tree["Frontend"], False)
        await service.toggle_active(ADMIN, career_tree["Frontend"], True)
        assert (await _node(session, career_tree["React Developer"])).is_active is False

        await service.toggle_active(ADMIN, career_tree["React Developer"], True)
        await service.toggle_active(ADMIN, career_tree["Web Development"], False)

        assert (await _node(session, career_tree["Frontend"])).is_active is False
        assert (await _node(session, career_tree["React Developer"])).is_active is False

    async def test_deactivate_leaf(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyMutationService.from_session(session)

        assert await service.toggle_active(ADMIN, career_tree["React Developer"], False) == 0

    async def test_missing_node(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(EntityNotFound):
            await service.toggle_active(ADMIN, 99999, False)

    async def test_child_created_under_inactive_parent_is_active(
        self, session: AsyncSession, career_tree: dict[str, int]
    ):
        """비활성 부모 아래에 생성한 노드는 활성으로 저장되고, 부모는 비활성으로 남는다."""
        service = TaxonomyMutationService.from_session(session)
        await service.toggle_active(ADMIN, career_tree["Government Jobs"], False)

        node_id = await service.create_node(ADMIN, "Banking", "sector", career_tree["Government Jobs"])

        assert (await _node(session, node_id)).is_active is True
        assert (await _node(session, career_tree["Government Jobs"])).is_active is False
        active_ids = {n.id for n in await TaxonomyQueryService.from_session(session).all_active()}
        assert node_id in active_ids
        assert career_tree["Government Jobs"] not in active_ids


# ============================================================
# 관리자 권한 검증
# ============================================================
class TestAdminCapability:
    """모든 변경/관리자 조회는 호출마다 관리자 권한을 확인한다."""

    async def test_missing_subject(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(Unauthenticated):
            await service.create_node(None, "Graduation", "qualification")

    async def test_unknown_subject(self, session: AsyncSession, admin_user):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(Unauthenticated, match="User not found"):
            await service.create_node("ghost", "Graduation", "qualification")

    async def test_member_is_forbidden(self, session: AsyncSession, member_user):
        service = TaxonomyMutationService.from_session(session)

        with pytest.raises(Unauthorized):
            await service.create_node(MEMBER, "Graduation", "qualification")

    async def test_admin_flag_rechecked_every_call(self, session: AsyncSession, career_tree: dict[str, int], admin_user):
        """관리자 권한이 회수되면 바로 다음 호출부터 거부된다."""
        service = TaxonomyMutationService.from_session(session)
        admin_user.is_admin = False
        await session.flush()

        with pytest.raises(Unauthorized):
            await service.toggle_active(ADMIN, career_tree["Graduation"], False)

        assert (await _node(session, career_tree["Graduation"])).is_active is True

    async def test_admin_reads_require_admin(self, session: AsyncSession, member_user):
        service = TaxonomyQueryService.from_session(session)

        with pytest.raises(Unauthorized):
            await service.all_including_inactive(MEMBER)
        with pytest.raises(Unauthorized):
            await service.stats(MEMBER)


# ============================================================
# Descendant Resolver
# ============================================================
class TestDescendantResolver:
    """활성 하위 노드 해석 테스트."""

    async def test_all_active_descendants(self, session: AsyncSession, career_tree: dict[str, int]):
        resolver = DescendantResolver.from_session(session)

        result = await resolver.all_active_descendant_ids(career_tree["IT & Software"])

        expected = {career_tree[n] for n in ["Software Development", "Web Development", "Frontend", "React Developer"]}
        assert result == expected

    async def test_inactive_child_excluded(self, session: AsyncSession, career_tree: dict[str, int]):
        """비활성 자식은 구조상 자식이어도 제외되고, 그 아래도 탐색하지 않는다."""
        await TaxonomyMutationService.from_session(session).toggle_active(ADMIN, career_tree["Government Jobs"], False)
        resolver = DescendantResolver.from_session(session)

        result = await resolver.all_active_descendant_ids(career_tree["Graduation"])

        assert career_tree["Government Jobs"] not in result
        assert career_tree["Civil Services"] not in result
        assert career_tree["IT & Software"] in result
        assert len(result) == 5

    async def test_leaf_has_no_descendants(self, session: AsyncSession, career_tree: dict[str, int]):
        resolver = DescendantResolver.from_session(session)

        assert await resolver.all_active_descendant_ids(career_tree["React Developer"]) == set()

    async def test_career_path_includes_self(self, session: AsyncSession, career_tree: dict[str, int]):
        resolver = DescendantResolver.from_session(session)

        result = await resolver.career_path_ids(career_tree["Frontend"])

        assert result == {career_tree["Frontend"], career_tree["React Developer"]}

    async def test_cycle_is_guarded(self, session: AsyncSession):
        """검증을 우회해 생긴 순환 참조에서도 탐색이 끝난다."""
        a = FilterOption(name="A", type=FilterType.QUALIFICATION)
        b = FilterOption(name="B", type=FilterType.CATEGORY)
        session.add_all([a, b])
        await session.flush()
        a.parent_id = b.id
        b.parent_id = a.id
        await session.flush()

        resolver = DescendantResolver.from_session(session)

        assert await resolver.all_descendant_ids(a.id) == {b.id}

    async def test_depth_limit(self, session: AsyncSession, career_tree: dict[str, int]):
        """최대 깊이에 도달하면 더 내려가지 않는다."""
        resolver = DescendantResolver(FilterOptionRepository(session), max_depth=2)

        result = await resolver.all_active_descendant_ids(career_tree["Graduation"])

        assert result == {career_tree[n] for n in ["Government Jobs", "IT & Software", "Civil Services", "Software Development"]}


# ============================================================
# Query Service
# ============================================================
class TestQueryService:
    """TaxonomyQueryService 조회 테스트."""

    async def test_roots(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyQueryService.from_session(session)

        roots = await service.children_of(None)

        assert [n.name for n in roots] == ["Graduation"]

    async def test_children_sorted_and_active_only(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyQueryService.from_session(session)
        mutation = TaxonomyMutationService.from_session(session)
        await mutation.create_node(ADMIN, "Arts", "category", career_tree["Graduation"])
        await mutation.toggle_active(ADMIN, career_tree["Government Jobs"], False)

        children = await service.children_of(career_tree["Graduation"])

        assert [n.name for n in children] == ["Arts", "IT & Software"]

    async def test_children_limit(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyQueryService.from_session(session)

        children = await service.children_of(career_tree["Graduation"], limit=1)

        assert [n.name for n in children] == ["Government Jobs"]

    async def test_children_including_inactive_for_admin(self, session: AsyncSession, career_tree: dict[str, int]):
        await TaxonomyMutationService.from_session(session).toggle_active(ADMIN, career_tree["Government Jobs"], False)
        service = TaxonomyQueryService.from_session(session)

        children = await service.children_of(career_tree["Graduation"], include_inactive=True, subject=ADMIN)

        assert [(n.name, n.is_active) for n in children] == [("Government Jobs", False), ("IT & Software", True)]

    async def test_children_including_inactive_requires_admin(
        self, session: AsyncSession, career_tree: dict[str, int], member_user
    ):
        await TaxonomyMutationService.from_session(session).toggle_active(ADMIN, career_tree["Government Jobs"], False)
        service = TaxonomyQueryService.from_session(session)

        with pytest.raises(Unauthenticated):
            await service.children_of(career_tree["Graduation"], include_inactive=True)
        with pytest.raises(Unauthorized):
            await service.children_of(career_tree["Graduation"], include_inactive=True, subject=MEMBER)

    async def test_children_case_only_tie_puts_lowercase_first(
        self, session: AsyncSession, career_tree: dict[str, int]
    ):
        mutation = TaxonomyMutationService.from_session(session)
        await mutation.create_node(ADMIN, "Arts", "category", career_tree["Graduation"])
        await mutation.create_node(ADMIN, "arts", "category", career_tree["Graduation"])

        children = await TaxonomyQueryService.from_session(session).children_of(career_tree["Graduation"])

        assert [n.name for n in children] == ["arts", "Arts", "Government Jobs", "IT & Software"]

    async def test_all_active(self, session: AsyncSession, career_tree: dict[str, int]):
        await TaxonomyMutationService.from_session(session).toggle_active(ADMIN, career_tree["Government Jobs"], False)
        service = TaxonomyQueryService.from_session(session)

        nodes = await service.all_active()

        assert {n.id for n in nodes} == set(career_tree.values()) - {
            career_tree["Government Jobs"],
            career_tree["Civil Services"],
        }

    async def test_get_by_ids_keeps_order_and_skips_missing(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyQueryService.from_session(session)
        ids = [career_tree["React Developer"], 99999, career_tree["Graduation"]]

        nodes = await service.get_by_ids(ids)

        assert [n.name for n in nodes] == ["React Developer", "Graduation"]

    async def test_get_by_id_missing(self, session: AsyncSession):
        with pytest.raises(EntityNotFound):
            await TaxonomyQueryService.from_session(session).get_by_id(99999)

    async def test_admin_listing_and_stats(self, session: AsyncSession, career_tree: dict[str, int]):
        await TaxonomyMutationService.from_session(session).toggle_active(ADMIN, career_tree["Government Jobs"], False)
        service = TaxonomyQueryService.from_session(session)

        nodes = await service.all_including_inactive(ADMIN)
        stats = await service.stats(ADMIN)

        assert len(nodes) == len(career_tree)
        assert stats == {"total": 8, "active": 6, "inactive": 2}

    async def test_admin_tree_search(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyQueryService.from_session(session)

        roots, expanded = await service.admin_tree(ADMIN, "react")

        assert collect_ids(roots) == {
            career_tree[n]
            for n in ["Graduation", "IT & Software", "Software Development", "Web Development", "Frontend", "React Developer"]
        }
        assert expanded == set(career_tree.values())

    async def test_admin_tree_without_search(self, session: AsyncSession, career_tree: dict[str, int]):
        service = TaxonomyQueryService.from_session(session)

        roots, expanded = await service.admin_tree(ADMIN)

        assert collect_ids(roots) == set(career_tree.values())
        assert expanded == set()


# ============================================================
# Repository: 형제 이름 유니크 제약
# ============================================================
class TestSiblingConstraint:
    async def test_unique_constraint_blocks_raw_duplicate(self, session: AsyncSession, career_tree: dict[str, int]):
        """서비스 검증을 거치지 않은 중복 삽입도 (parent_id, name) 제약으로 막힌다."""
        repo = FilterOptionRepository(session)

        with pytest.raises(DuplicateEntity):
            await repo.create(
                {"name": "Government Jobs", "type": FilterType.CATEGORY, "parent_id": career_tree["Graduation"]}
            )


# ============================================================
# API 통합 테스트
# ============================================================
class TestTaxonomyAPI:
    """Taxonomy HTTP 엔드포인트 통합 테스트."""

    async def test_create_requires_login(self, client: AsyncClient, admin_user):
        response = await client.post("/api/admin/filters", json={"name": "Graduation", "type": "qualification"})

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthenticated"

    async def test_create_forbidden_for_member(self, client: AsyncClient, member_user):
        response = await client.post(
            "/api/admin/filters", json={"name": "Graduation", "type": "qualification"}, headers=MEMBER_HEADERS
        )

        assert response.status_code == 403
        assert response.json()["status_code"] == 403

    async def test_create_and_read_back(self, client: AsyncClient, admin_user):
        response = await client.post(
            "/api/admin/filters",
            json={"name": "Graduation", "type": "qualification", "description": "학사"},
            headers=ADMIN_HEADERS,
        )

        assert response.status_code == 201
        node_id = response.json()["id"]

        detail = await client.get(f"/api/filters/{node_id}")
        assert detail.status_code == 200
        assert detail.json()["name"] == "Graduation"
        assert detail.json()["type"] == "qualification"
        assert detail.json()["parent_id"] is None
        assert detail.json()["description"] == "학사"

    async def test_create_validation_errors(self, client: AsyncClient, career_tree: dict[str, int]):
        root = career_tree["Graduation"]

        invalid_root = await client.post(
            "/api/admin/filters", json={"name": "Arts", "type": "category"}, headers=ADMIN_HEADERS
        )
        illegal_child = await client.post(
            "/api/admin/filters", json={"name": "X", "type": "role", "parent_id": root}, headers=ADMIN_HEADERS
        )
        duplicate = await client.post(
            "/api/admin/filters",
            json={"name": "Government Jobs", "type": "category", "parent_id": root},
            headers=ADMIN_HEADERS,
        )
        missing_parent = await client.post(
            "/api/admin/filters", json={"name": "X", "type": "category", "parent_id": 99999}, headers=ADMIN_HEADERS
        )
        unknown_type = await client.post(
            "/api/admin/filters", json={"name": "X", "type": "department"}, headers=ADMIN_HEADERS
        )

        assert invalid_root.status_code == 400
        assert illegal_child.status_code == 400
        assert duplicate.status_code == 409
        assert missing_parent.status_code == 404
        assert unknown_type.status_code == 422

    async def test_update(self, client: AsyncClient, career_tree: dict[str, int]):
        node_id = career_tree["Frontend"]

        response = await client.patch(
            f"/api/admin/filters/{node_id}", json={"name": "Frontend Web", "avg_salary": "5 LPA"}, headers=ADMIN_HEADERS
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        detail = (await client.get(f"/api/filters/{node_id}")).json()
        assert detail["name"] == "Frontend Web"
        assert detail["avg_salary"] == "5 LPA"

    async def test_update_rejects_structural_fields(self, client: AsyncClient, career_tree: dict[str, int]):
        response = await client.patch(
            f"/api/admin/filters/{career_tree['Frontend']}", json={"type": "role"}, headers=ADMIN_HEADERS
        )

        assert response.status_code == 422

    async def test_toggle_active(self, client: AsyncClient, career_tree: dict[str, int]):
        node_id = career_tree["IT & Software"]

        off = await client.put(f"/api/admin/filters/{node_id}/active", json={"is_active": False}, headers=ADMIN_HEADERS)
        on = await client.put(f"/api/admin/filters/{node_id}/active", json={"is_active": True}, headers=ADMIN_HEADERS)

        assert off.json() == {"success": True, "deactivated_descendants": 4}
        assert on.json() == {"success": True, "deactivated_descendants": 0}

        children = (await client.get("/api/filters/children", params={"parent_id": node_id})).json()
        assert children == []

    async def test_public_reads(self, client: AsyncClient, career_tree: dict[str, int]):
        roots = (await client.get("/api/filters/children")).json()
        children = (await client.get("/api/filters/children", params={"parent_id": career_tree["Graduation"]})).json()
        limited = (
            await client.get("/api/filters/children", params={"parent_id": career_tree["Graduation"], "limit": 1})
        ).json()
        flat = (await client.get("/api/filters")).json()

        assert [n["name"] for n in roots] == ["Graduation"]
        assert [n["name"] for n in children] == ["Government Jobs", "IT & Software"]
        assert len(limited) == 1
        assert len(flat) == len(career_tree)

    async def test_by_ids_and_descendants(self, client: AsyncClient, career_tree: dict[str, int]):
        ids = [career_tree["Frontend"], career_tree["Graduation"]]

        by_ids = await client.get("/api/filters/by-ids", params={"ids": ids})
        descendants = await client.get(f"/api/filters/{career_tree['Web Development']}/descendants")

        assert [n["id"] for n in by_ids.json()] == ids
        assert descendants.json() == {
            "node_id": career_tree["Web Development"],
            "descendant_ids": sorted([career_tree["Frontend"], career_tree["React Developer"]]),
        }

    async def test_missing_node_returns_404(self, client: AsyncClient):
        response = await client.get("/api/filters/99999")

        assert response.status_code == 404
        assert response.json()["message"] == "Filter node not found"

    async def test_admin_views(self, client: AsyncClient, career_tree: dict[str, int]):
        await client.put(
            f"/api/admin/filters/{career_tree['Government Jobs']}/active", json={"is_active": False}, headers=ADMIN_HEADERS
        )

        all_nodes = await client.get("/api/admin/filters", headers=ADMIN_HEADERS)
        stats = await client.get("/api/admin/filters/stats", headers=ADMIN_HEADERS)
        tree = await client.get("/api/admin/filters/tree", params={"search": "react"}, headers=ADMIN_HEADERS)

        assert len(all_nodes.json()) == len(career_tree)
        assert stats.json() == {"total": 8, "active": 6, "inactive": 2}

        body = tree.json()
        assert body["search"] == "react"
        assert [r["name"] for r in body["roots"]] == ["Graduation"]
        assert [c["name"] for c in body["roots"][0]["children"]] == ["IT & Software"]
        assert len(body["expanded_ids"]) == len(career_tree)

    async def test_admin_views_forbidden_for_member(self, client: AsyncClient, member_user):
        response = await client.get("/api/admin/filters/stats", headers=MEMBER_HEADERS)

        assert response.status_code == 403
