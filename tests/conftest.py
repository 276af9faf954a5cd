"""Shared test fixtures."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from whattoeat.api.app import create_app
from whattoeat.config import Settings
from whattoeat.containers import AppContainer
from whattoeat.domain.images import StoredImage
from whattoeat.domain.meals import Meal, MealDraft
from whattoeat.domain.recipes import Ingredient, Recipe, RecipeDraft
from whattoeat.services.analytics import AnalyticsService
from whattoeat.services.identity import IdentityVerifier
from whattoeat.services.images import ImageService, ImageStore
from whattoeat.services.meals import MealRepository, MealService
from whattoeat.services.recipes import RecipeRepository, RecipeService

OWNER_TOKEN = "owner-token"
OTHER_TOKEN = "other-token"


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[UUID, Recipe] = field(default_factory=dict)

    def create_recipe(
        self,
        recipe_id: UUID,
        owner_id: UUID,
        draft: RecipeDraft,
        created_at: datetime,
    ) -> Recipe:
        recipe = Recipe(
            id=recipe_id,
            user_id=owner_id,
            name=draft.name,
            description=draft.description,
            image_url=draft.image_url,
            is_public=draft.is_public,
            created_at=created_at,
            updated_at=created_at,
            prep_time=draft.prep_time,
            cook_time=draft.cook_time,
            servings=draft.servings,
            difficulty=draft.difficulty,
            category=draft.category,
            instructions=list(draft.instructions),
            ingredients=[_with_id(item) for item in draft.ingredients],
            nutrition=draft.nutrition,
        )
        self.recipes[recipe_id] = recipe
        return recipe

    def list_recipes(self, owner_id: UUID) -> list[Recipe]:
        owned = [recipe for recipe in self.recipes.values() if recipe.user_id == owner_id]
        return sorted(owned, key=lambda recipe: recipe.created_at, reverse=True)

    def list_recipes_by_ids(
        self, owner_id: UUID, recipe_ids: list[UUID]
    ) -> list[Recipe]:
        return [
            self.recipes[recipe_id]
            for recipe_id in recipe_ids
            if recipe_id in self.recipes and self.recipes[recipe_id].user_id == owner_id
        ]

    def get_recipe(self, recipe_id: UUID, owner_id: UUID) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or recipe.user_id != owner_id:
            return None
        return recipe

    def update_recipe(
        self,
        recipe_id: UUID,
        owner_id: UUID,
        changes: Mapping[str, object],
        updated_at: datetime,
    ) -> Recipe | None:
        current = self.get_recipe(recipe_id, owner_id)
        if current is None:
            return None
        values = dict(changes)
        if "ingredients" in values:
            values["ingredients"] = [_with_id(item) for item in values["ingredients"] or []]
        updated = replace(current, **values, updated_at=updated_at)
        self.recipes[recipe_id] = updated
        return updated

    def delete_recipe(self, recipe_id: UUID, owner_id: UUID) -> bool:
        if self.get_recipe(recipe_id, owner_id) is None:
            return False
        del self.recipes[recipe_id]
        return True

    def list_public_recipes(self) -> list[Recipe]:
        public = [recipe for recipe in self.recipes.values() if recipe.is_public]
        return sorted(public, key=lambda recipe: recipe.created_at, reverse=True)

    def get_public_recipe(self, recipe_id: UUID) -> Recipe | None:
        recipe = self.recipes.get(recipe_id)
        if recipe is None or not recipe.is_public:
            return None
        return recipe


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)

    def create_meal(
        self,
        meal_id: UUID,
        owner_id: UUID,
        draft: MealDraft,
        created_at: datetime,
    ) -> Meal:
        meal = Meal(
            id=meal_id,
            user_id=owner_id,
            date=draft.date,
            meal_type=draft.meal_type,
            recipe_id=draft.recipe_id,
            custom_food_name=draft.custom_food_name,
            portion=draft.portion,
            notes=draft.notes,
            created_at=created_at,
        )
        self.meals[meal_id] = meal
        return meal

    def list_meals(
        self, owner_id: UUID, start: date | None, end: date | None
    ) -> list[Meal]:
        matching = [
            meal
            for meal in self.meals.values()
            if meal.user_id == owner_id
            and (start is None or meal.date >= start)
            and (end is None or meal.date <= end)
        ]
        return sorted(
            matching, key=lambda meal: (meal.date, meal.created_at), reverse=True
        )

    def get_meal(self, meal_id: UUID, owner_id: UUID) -> Meal | None:
        meal = self.meals.get(meal_id)
        if meal is None or meal.user_id != owner_id:
            return None
        return meal

    def update_meal(
        self, meal_id: UUID, owner_id: UUID, changes: Mapping[str, object]
    ) -> Meal | None:
        current = self.get_meal(meal_id, owner_id)
        if current is None:
            return None
        updated = replace(current, **changes)
        self.meals[meal_id] = updated
        return updated

    def delete_meal(self, meal_id: UUID, owner_id: UUID) -> bool:
        if self.get_meal(meal_id, owner_id) is None:
            return False
        del self.meals[meal_id]
        return True


@dataclass
class InMemoryImageStore(ImageStore):
    """In-memory object store for tests."""

    objects: dict[str, StoredImage] = field(default_factory=dict)

    def put(self, name: str, content: bytes, content_type: str) -> None:
        self.objects[name] = StoredImage(content=content, content_type=content_type)

    def get(self, name: str) -> StoredImage | None:
        return self.objects.get(name)


@dataclass
class FakeIdentityVerifier(IdentityVerifier):
    """Identity verifier backed by a static token table."""

    tokens: dict[str, UUID] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def resolve_owner(self, token: str) -> UUID | None:
        self.calls.append(token)
        return self.tokens.get(token)


def _with_id(ingredient: Ingredient) -> Ingredient:
    return replace(ingredient, id=ingredient.id or uuid4())


def make_recipe(owner_id: UUID, name: str = "Pancakes", **overrides) -> Recipe:
    """Build a recipe without going through a repository."""
    now = datetime.now(tz=UTC)
    values = {
        "id": uuid4(),
        "user_id": owner_id,
        "name": name,
        "description": None,
        "image_url": None,
        "is_public": False,
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return Recipe(**values)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def other_owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def recipe_service(recipe_repository: InMemoryRecipeRepository) -> RecipeService:
    return RecipeService(recipe_repository)


@pytest.fixture
def meal_service(
    meal_repository: InMemoryMealRepository,
    recipe_repository: InMemoryRecipeRepository,
) -> MealService:
    return MealService(repository=meal_repository, recipe_repository=recipe_repository)


@pytest.fixture
def container(
    settings: Settings,
    owner_id: UUID,
    other_owner_id: UUID,
    recipe_service: RecipeService,
    meal_service: MealService,
) -> AppContainer:
    identity_verifier = FakeIdentityVerifier(
        tokens={OWNER_TOKEN: owner_id, OTHER_TOKEN: other_owner_id}
    )
    return AppContainer(
        settings=settings,
        identity_verifier=identity_verifier,
        recipe_service=recipe_service,
        meal_service=meal_service,
        analytics_service=AnalyticsService(meal_service),
        image_service=ImageService(
            store=InMemoryImageStore(),
            max_upload_bytes=settings.max_upload_bytes,
        ),
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {OWNER_TOKEN}"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {OTHER_TOKEN}"}
