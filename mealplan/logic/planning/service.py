"""End-to-end plan generation: filter -> slot -> prompt -> generate -> map."""
import logging

from mealplan.domain.PlanResponse import PlanResponse
from mealplan.infra.Catalog_Repository import CatalogRepository
from mealplan.infra.User_Repository import UserRepository
from mealplan.infra.generation_client import GenerationClient
from mealplan.logic.catalog.filtering import filter_by_location
from mealplan.logic.catalog.slots import classify_time_slots
from mealplan.logic.planning.mapper import CatalogIndex, map_generated_plan
from mealplan.logic.prompting.composer import compose_prompt
from mealplan.utilities.errors import CatalogUnavailableError, GenerationRequestError
from mealplan.utilities.validators import require_user_id

logger = logging.getLogger(__name__)


class MealPlanService:
    def __init__(self, catalog_repo: CatalogRepository, user_repo: UserRepository,
                 generation_client: GenerationClient, instructions: str):
        self.catalog_repo = catalog_repo
        self.user_repo = user_repo
        self.generation_client = generation_client
        self.instructions = instructions

    async def generate_meal_plan(self, user_id: str) -> PlanResponse:
        """Recommend breakfast, lunch, dinner and alternatives for one user.

        Raises InvalidRequestError for a blank id and UserNotFoundError for an
        unknown user. Generation failures do not raise: they come back as an
        all-empty plan with llm_error set.
        """
        user_id = require_user_id(user_id)
        profile = self.user_repo.get_user_profile(user_id)

        try:
            catalog = self.catalog_repo.get_catalog()
        except CatalogUnavailableError as e:
            logger.error(f"Catalog unavailable, continuing with no candidates: {e}")
            catalog = []

        restaurants = filter_by_location(catalog, profile.location)
        slots = classify_time_slots(restaurants)
        logger.info(
            f"Plan candidates for {user_id}: {len(restaurants)} restaurants, "
            f"{len(slots.breakfast)}/{len(slots.lunch)}/{len(slots.dinner)} breakfast/lunch/dinner items"
        )

        prompt = compose_prompt(self.instructions, profile, slots)
        logger.debug("Generated prompt:\n%s", prompt)

        error_message = None
        try:
            generated = await self.generation_client.generate(prompt)
        except GenerationRequestError as e:
            logger.warning(f"Generation failed for {user_id}: {e}")
            error_message = str(e) or "LLM call failed"
            generated = None

        return map_generated_plan(generated, CatalogIndex(restaurants), error=error_message)
