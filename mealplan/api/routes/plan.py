from functools import lru_cache
import logging

from fastapi import APIRouter, Depends

from mealplan.domain.PlanResponse import PlanResponse
from mealplan.infra.Catalog_Repository import CatalogRepository
from mealplan.infra.User_Repository import UserRepository
from mealplan.infra.generation_client import create_generation_client
from mealplan.logic.planning.service import MealPlanService
from mealplan.logic.prompting.composer import load_instructions
from mealplan.utilities.config import load_settings
from mealplan.utilities.validators import PlanRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_plan_service() -> MealPlanService:
    """Build the service once from the environment configuration."""
    settings = load_settings()
    return MealPlanService(
        catalog_repo=CatalogRepository(settings.catalog_file),
        user_repo=UserRepository(settings.users_file),
        generation_client=create_generation_client(settings),
        instructions=load_instructions(settings.prompt_file),
    )


async def _get_plan(request: PlanRequest, service: MealPlanService) -> PlanResponse:
    logger.info(f"GetPlan requested for user {request.user_id}")
    return await service.generate_meal_plan(request.user_id)


@router.post("/GetPlan", response_model=PlanResponse, response_model_exclude_none=True)
async def get_plan(request: PlanRequest, service: MealPlanService = Depends(get_plan_service)):
    """Recommend today's breakfast, lunch, dinner and alternatives for a user."""
    return await _get_plan(request, service)


@router.post("/api/plan", response_model=PlanResponse, response_model_exclude_none=True)
async def get_plan_alias(request: PlanRequest, service: MealPlanService = Depends(get_plan_service)):
    return await _get_plan(request, service)
