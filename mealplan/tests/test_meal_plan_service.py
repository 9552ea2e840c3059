import json

import pytest

from mealplan.infra.Catalog_Repository import CatalogRepository
from mealplan.infra.User_Repository import UserRepository
from mealplan.infra.generation_client import GenerationMode, MockGenerationClient
from mealplan.logic.planning.service import MealPlanService
from mealplan.utilities.errors import GenerationRequestError, InvalidRequestError, UserNotFoundError


CATALOG = {
    "restaurants": [
        {
            "restaurant_id": "REST1025",
            "name": "Pasta Palace",
            "location": "TKO",
            "items": [
                {"id": "APP101", "name": "Garlic Breadsticks", "start_time": 7, "end_time": 12,
                 "calories": 300, "price": 38, "health_tags": ["vegetarian"]},
                {"id": "PASTA001", "name": "Spaghetti Carbonara", "start_time": 11, "end_time": 22,
                 "calories": 720, "price": 88, "ingredients": ["spaghetti", "egg"]},
            ],
        },
        {
            "restaurant_id": "REST3300",
            "name": "Ocean Grill",
            "location": "Central",
            "items": [
                {"id": "DIN300", "name": "Salmon & Quinoa", "start_time": 17, "end_time": 23, "calories": 520},
            ],
        },
    ]
}

USERS = [
    {"_id": "u-tko", "location": "tko", "age": 30, "dietaryRestrictions": ["vegetarian"]},
    {"_id": "u-nowhere", "location": "Mong Kok"},
]


class RecordingClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def repos(tmp_path):
    catalog_file = tmp_path / "catalog.json"
    users_file = tmp_path / "users.json"
    catalog_file.write_text(json.dumps(CATALOG), encoding="utf-8")
    users_file.write_text(json.dumps(USERS), encoding="utf-8")
    return CatalogRepository(catalog_file), UserRepository(users_file)


def _service(repos, client):
    catalog_repo, user_repo = repos
    return MealPlanService(catalog_repo, user_repo, client, "INSTRUCTIONS")


@pytest.mark.asyncio
async def test_plan_resolves_generated_ids_against_local_restaurants(repos):
    client = RecordingClient({"breakfast": "APP101", "lunch": "PASTA001", "dinner": "PASTA001",
                              "alternatives": ["DIN300", "APP101"]})
    plan = await _service(repos, client).generate_meal_plan("u-tko")

    assert plan.morn.name == "Garlic Breadsticks"
    assert plan.afternoon.name == "Spaghetti Carbonara"
    assert plan.dinner.restaurant == "Pasta Palace"
    # DIN300 belongs to a restaurant outside the user's location
    assert [m.name for m in plan.alternatives] == ["Garlic Breadsticks"]
    assert plan.llm_error is None


@pytest.mark.asyncio
async def test_prompt_only_contains_local_candidates(repos):
    client = RecordingClient({})
    await _service(repos, client).generate_meal_plan("u-tko")

    prompt = client.prompts[0]
    assert prompt.startswith("INSTRUCTIONS\nUser Info:\nLocation: tko\n")
    candidates = json.loads(prompt[prompt.rfind("\n{") + 1:])
    assert [c["id"] for c in candidates["breakfast"]] == ["APP101"]
    assert [c["id"] for c in candidates["dinner"]] == ["PASTA001"]
    assert "DIN300" not in prompt


@pytest.mark.asyncio
async def test_no_local_restaurants_still_calls_generation(repos):
    client = RecordingClient({"breakfast": "APP101"})
    plan = await _service(repos, client).generate_meal_plan("u-nowhere")

    assert len(client.prompts) == 1
    assert plan.morn.is_empty()
    assert plan.alternatives == []


@pytest.mark.asyncio
async def test_generation_failure_returns_empty_plan_with_error(repos):
    client = RecordingClient(error=GenerationRequestError("Generation service returned HTTP 503"))
    plan = await _service(repos, client).generate_meal_plan("u-tko")

    assert all(meal.is_empty() for meal in plan.primary_meals())
    assert plan.alternatives == []
    assert plan.llm_error == "Generation service returned HTTP 503"


@pytest.mark.asyncio
async def test_raw_text_reply_yields_empty_plan(repos):
    plan = await _service(repos, RecordingClient("I could not decide")).generate_meal_plan("u-tko")
    assert all(meal.is_empty() for meal in plan.primary_meals())
    assert plan.llm_error is None


@pytest.mark.asyncio
async def test_blank_user_id_is_rejected_before_generation(repos):
    client = RecordingClient({})
    with pytest.raises(InvalidRequestError):
        await _service(repos, client).generate_meal_plan("   ")
    assert client.prompts == []


@pytest.mark.asyncio
async def test_unknown_user_is_not_found(repos):
    client = RecordingClient({})
    with pytest.raises(UserNotFoundError):
        await _service(repos, client).generate_meal_plan("ghost")
    assert client.prompts == []


@pytest.mark.asyncio
async def test_unreadable_catalog_is_treated_as_empty(tmp_path, repos):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    _, user_repo = repos
    client = RecordingClient({"breakfast": "APP101"})
    plan = await MealPlanService(CatalogRepository(broken), user_repo, client, "X").generate_meal_plan("u-tko")

    assert plan.morn.is_empty()
    assert len(client.prompts) == 1


@pytest.mark.asyncio
async def test_mock_normal_client_end_to_end(repos):
    plan = await _service(repos, MockGenerationClient(GenerationMode.NORMAL)).generate_meal_plan("u-tko")

    assert plan.morn.name == "Garlic Breadsticks"
    assert plan.afternoon.name == "Spaghetti Carbonara"
    assert plan.dinner.name == "Spaghetti Carbonara"
    assert not any(meal.is_empty() for meal in plan.primary_meals())


@pytest.mark.asyncio
async def test_mock_loading_client_gives_empty_plan(repos):
    plan = await _service(repos, MockGenerationClient(GenerationMode.LOADING)).generate_meal_plan("u-tko")
    assert all(meal.is_empty() for meal in plan.primary_meals())
