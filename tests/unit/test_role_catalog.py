import pytest

from services.errors import InvalidInputError
from services.role_catalog import RoleCatalog, catalog


def test_catalog_contents():
    assert catalog.role_ids() == [
        "software-engineer",
        "product-manager",
        "data-scientist",
        "frontend-engineer",
        "backend-engineer",
        "devops-engineer",
    ]
    assert catalog.level_names() == ["entry", "mid", "senior", "lead"]
    for role in catalog.roles():
        assert role.question_categories
        assert all(0 < category.weight <= 1 for category in role.question_categories)
    for level in catalog.levels():
        assert level.years_max > level.years_min


def test_lookups_are_case_and_space_insensitive():
    assert catalog.role_by_id(" Software-Engineer ").name == "Software Engineer"
    assert catalog.role_by_name("software engineer").id == "software-engineer"
    assert catalog.resolve_role("Data Scientist").id == "data-scientist"
    assert catalog.level("SENIOR").expected_depth == 8


def test_validity_checks():
    assert catalog.is_valid_role_id("devops-engineer")
    assert not catalog.is_valid_role_id("astronaut")
    assert catalog.is_valid_role_name("Product Manager")
    assert catalog.is_valid_level("lead")
    assert not catalog.is_valid_level("principal")
    assert not catalog.is_valid_level(None)


def test_invalid_lookups_list_options():
    with pytest.raises(InvalidInputError) as excinfo:
        catalog.role_by_id("astronaut")
    assert 'Invalid role ID: "astronaut"' in str(excinfo.value)
    assert "software-engineer" in excinfo.value.options

    with pytest.raises(InvalidInputError) as excinfo:
        catalog.level("principal")
    assert excinfo.value.options == ["entry", "mid", "senior", "lead"]


def test_custom_catalog():
    role = catalog.role_by_id("software-engineer")
    custom = RoleCatalog(roles=[role], levels=[catalog.level("entry")])
    assert custom.role_ids() == ["software-engineer"]
    with pytest.raises(InvalidInputError):
        custom.level("mid")
