import json

import pytest

from mealplan.infra.Catalog_Repository import CatalogRepository
from mealplan.infra.User_Repository import UserRepository
from mealplan.utilities.errors import CatalogUnavailableError, UserNotFoundError


def _write(path, document):
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_bundled_catalog_loads():
    catalog = CatalogRepository().get_catalog()
    names = {r.name for r in catalog}
    assert "Pasta Palace" in names
    palace = next(r for r in catalog if r.name == "Pasta Palace")
    assert "APP101" in [item.id for item in palace.items]


def test_catalog_accepts_bare_list(tmp_path):
    path = _write(tmp_path / "catalog.json", [
        {"restaurant_id": 7, "name": "Noodle Bar", "location": "Mong Kok",
         "items": [{"id": 12, "name": "Wonton Noodles", "start_time": 11, "end_time": 15}]},
        "not a restaurant",
    ])
    catalog = CatalogRepository(path).get_catalog()
    assert len(catalog) == 1
    assert catalog[0].restaurant_id == "7"
    assert catalog[0].items[0].id == "12"


def test_missing_catalog_is_empty(tmp_path):
    assert CatalogRepository(tmp_path / "absent.json").get_catalog() == []


def test_invalid_catalog_raises(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("{oops", encoding="utf-8")
    with pytest.raises(CatalogUnavailableError):
        CatalogRepository(path).get_catalog()
    with pytest.raises(CatalogUnavailableError):
        CatalogRepository(_write(tmp_path / "number.json", 42)).get_catalog()


def test_catalog_snapshots_are_independent(tmp_path):
    path = _write(tmp_path / "catalog.json", {"restaurants": [{"name": "Cafe", "location": "TKO", "items": []}]})
    repo = CatalogRepository(path)
    first = repo.get_catalog()
    first[0].name = "Changed"
    assert repo.get_catalog()[0].name == "Cafe"


def test_user_lookup_by_any_id_key(tmp_path):
    path = _write(tmp_path / "users.json", {"users": [
        {"_id": "a", "location": "TKO", "activityLevel": "sedentary"},
        {"id": 2, "location": "Central"},
        {"user_id": "c", "location": ""},
    ]})
    repo = UserRepository(path)
    profile = repo.get_user_profile("a")
    assert profile.user_id == "a"
    assert profile.activity_level == "sedentary"
    assert repo.get_user_profile("2").location == "Central"
    assert repo.get_user_profile("c").location == ""


def test_unknown_user_raises(tmp_path):
    repo = UserRepository(_write(tmp_path / "users.json", [{"_id": "a"}]))
    with pytest.raises(UserNotFoundError) as exc_info:
        repo.get_user_profile("b")
    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "User not found"


def test_unreadable_user_store_finds_nobody(tmp_path):
    broken = tmp_path / "users.json"
    broken.write_text("[", encoding="utf-8")
    with pytest.raises(UserNotFoundError):
        UserRepository(broken).get_user_profile("a")
    with pytest.raises(UserNotFoundError):
        UserRepository(tmp_path / "absent.json").get_user_profile("a")


def test_bundled_users_load():
    profile = UserRepository().get_user_profile("user-tko-001")
    assert profile.location == "TKO"


def test_malformed_menu_items_are_skipped(tmp_path):
    path = _write(tmp_path / "catalog.json", [
        {"name": "Pasta Palace", "location": "TKO", "items": [
            "junk",
            {"id": "A", "name": "Oats", "start_time": "7:00", "end_time": "11"},
            {"id": "B", "name": "Mystery", "start_time": "breakfast", "end_time": 11},
            None,
            {"id": "C", "name": "Soup", "start_time": 11, "end_time": 14},
        ]},
        {"name": "Broken Menu", "location": "TKO", "items": "not a list"},
    ])
    catalog = CatalogRepository(path).get_catalog()

    assert [item.id for item in catalog[0].items] == ["A", "C"]
    assert (catalog[0].items[0].start_time, catalog[0].items[0].end_time) == (7, 11)
    assert catalog[1].items == []
