# tests/test_category_permissions.py

"""
Tests for the per-category permission resolver.
"""

import asyncio
import itertools
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from core.category_permissions import (
    evaluate_category_permission,
    fetch_category_leaders,
    resolve_category_permission,
)
from core.permissions import capabilities_for
from models.category import CategoryPermission
from models.enums import CategoryRole


@pytest.mark.parametrize(
    "is_locked, has_role, is_group_leader",
    list(itertools.product([True, False], repeat=3)),
)
def test_can_edit_invariant(is_locked, has_role, is_group_leader):
    perm = evaluate_category_permission(is_locked, has_role, is_group_leader)
    assert perm.can_edit == ((not is_locked) or has_role or is_group_leader)
    assert perm.is_group_leader == is_group_leader
    assert perm.can_view is True


def test_locked_without_role_or_leadership_is_read_only():
    assert evaluate_category_permission(True, False, False).can_edit is False


def test_locked_with_role_is_editable():
    assert evaluate_category_permission(True, True, False).can_edit is True


def test_unlocked_is_editable():
    assert evaluate_category_permission(False, False, False).can_edit is True


def test_view_requires_financial_access_when_capabilities_given(make_member):
    plain = capabilities_for(make_member(role="membro"))
    leader = capabilities_for(make_member(role="presidente"))

    assert evaluate_category_permission(False, False, False, capabilities=plain).can_view is False
    assert evaluate_category_permission(False, True, False, capabilities=plain).can_view is True
    assert evaluate_category_permission(False, False, False, capabilities=leader).can_view is True


# -----------------------------------------------------
# Resolver with Supabase reads
# -----------------------------------------------------
def resolve(*args, **kwargs):
    return asyncio.run(resolve_category_permission(*args, **kwargs))


def build_tables(supabase_table, group=None, role=None, category=None, error_on=None):
    tables = {
        "groups": supabase_table(data=group),
        "category_roles": supabase_table(data=role),
        "financial_categories": supabase_table(data=category),
    }
    if error_on:
        tables[error_on] = supabase_table(error=Exception("connection reset"))
    return tables


def test_resolver_locked_category_with_role(supabase_table, mock_supabase_client):
    tables = build_tables(
        supabase_table,
        group={"president_id": "someone-else", "vice_president_1_id": None, "vice_president_2_id": None},
        role={"role": "secretario"},
        category={"is_locked": True, "group_id": "group-1"},
    )
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-1", "member-1", "group-1")

    assert perm.can_edit is True
    assert perm.role == CategoryRole.secretario
    assert perm.is_group_leader is False


def test_resolver_group_leader_edits_locked_category(supabase_table, mock_supabase_client):
    tables = build_tables(
        supabase_table,
        group={"president_id": "p", "vice_president_1_id": "member-1", "vice_president_2_id": None},
        category={"is_locked": True, "group_id": "group-1"},
    )
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-1", "member-1", "group-1")

    assert perm.is_group_leader is True
    assert perm.can_edit is True
    assert perm.role is None


def test_resolver_locked_category_plain_member(supabase_table, mock_supabase_client):
    tables = build_tables(
        supabase_table,
        group={"president_id": "p", "vice_president_1_id": None, "vice_president_2_id": None},
        category={"is_locked": True, "group_id": "group-1"},
    )
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-1", "member-1", "group-1")

    assert perm.can_edit is False


def test_resolver_null_lock_flag_means_unlocked(supabase_table, mock_supabase_client):
    tables = build_tables(supabase_table, category={"is_locked": None, "group_id": "group-1"})
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-1", "member-1", "group-1")

    assert perm.can_edit is True


def test_resolver_missing_category_is_treated_as_locked(supabase_table, mock_supabase_client):
    tables = build_tables(supabase_table, category=None)
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-1", "member-1", "group-1")

    assert perm.can_edit is False


def test_resolver_denies_locked_category_of_another_group(supabase_table, mock_supabase_client):
    # member-1 leads group-A but the category belongs to group-B
    tables = build_tables(
        supabase_table,
        group={"president_id": "member-1", "vice_president_1_id": None, "vice_president_2_id": None},
        category={"is_locked": True, "group_id": "group-B"},
    )
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-B", "member-1", "group-A")

    assert perm == CategoryPermission.denied()


def test_resolver_denies_unlocked_category_of_another_group(
    supabase_table, mock_supabase_client, make_member
):
    leader = capabilities_for(make_member(role="presidente", group_id="group-A"))
    tables = build_tables(supabase_table, category={"is_locked": False, "group_id": "group-B"})
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-B", "member-1", "group-A", capabilities=leader)

    assert perm.can_view is False
    assert perm.can_edit is False


@pytest.mark.parametrize("failing_table", ["groups", "category_roles", "financial_categories"])
def test_resolver_fails_closed_on_read_error(failing_table, supabase_table, mock_supabase_client):
    tables = build_tables(
        supabase_table,
        group={"president_id": "member-1"},
        role={"role": "presidente"},
        category={"is_locked": False, "group_id": "group-1"},
        error_on=failing_table,
    )
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        perm = resolve("cat-1", "member-1", "group-1")

    assert perm == CategoryPermission.denied()
    assert perm.can_edit is False
    assert perm.is_group_leader is False


def test_resolver_fails_closed_without_client():
    with patch("core.category_permissions.get_supabase_client", return_value=None):
        perm = resolve("cat-1", "member-1", "group-1")

    assert perm.can_edit is False


@pytest.mark.parametrize("args", [
    (None, "member-1", "group-1"),
    ("cat-1", None, "group-1"),
    ("cat-1", "member-1", ""),
])
def test_resolver_missing_ids_skip_reads(args):
    with patch("core.category_permissions.get_supabase_client") as mock_factory:
        perm = resolve(*args)

    mock_factory.assert_not_called()
    assert perm.can_edit is False
    assert perm.is_group_leader is False


# -----------------------------------------------------
# Category leaders
# -----------------------------------------------------
LEADER_ROWS = [
    {"id": "cr-1", "member_id": "member-1", "role": "presidente"},
    {"id": "cr-2", "member_id": "member-2", "role": "tesoureiro_antigo"},
]


def test_fetch_category_leaders_for_own_group(supabase_table, mock_supabase_client):
    tables = {
        "financial_categories": supabase_table(data={"id": "cat-1", "group_id": "group-1"}),
        "category_roles": supabase_table(data=LEADER_ROWS),
    }
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        leaders = fetch_category_leaders("cat-1", group_id="group-1")

    assert [leader.id for leader in leaders] == ["cr-1", "cr-2"]
    assert leaders[0].role == CategoryRole.presidente
    assert leaders[1].role is None


def test_fetch_category_leaders_hides_other_groups(supabase_table, mock_supabase_client):
    tables = {
        "financial_categories": supabase_table(data={"id": "cat-B", "group_id": "group-B"}),
        "category_roles": supabase_table(data=LEADER_ROWS),
    }
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        with pytest.raises(HTTPException) as exc_info:
            fetch_category_leaders("cat-B", group_id="group-A")

    assert exc_info.value.status_code == 404
    tables["category_roles"].execute.assert_not_called()


def test_fetch_category_leaders_store_error(supabase_table, mock_supabase_client):
    tables = {"category_roles": supabase_table(error=Exception("connection reset"))}
    with patch("core.category_permissions.get_supabase_client", return_value=mock_supabase_client(tables)):
        with pytest.raises(HTTPException) as exc_info:
            fetch_category_leaders("cat-1")

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Failed to load category leaders failed"
