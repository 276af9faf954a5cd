"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from whattoeat.adapters.supabase_identity_client import SupabaseIdentityClient
from whattoeat.adapters.supabase_image_store import SupabaseImageStore
from whattoeat.adapters.supabase_meal_repository import SupabaseMealRepository
from whattoeat.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from whattoeat.config import Settings
from whattoeat.services.analytics import AnalyticsService
from whattoeat.services.identity import IdentityVerifier
from whattoeat.services.images import ImageService
from whattoeat.services.meals import MealService
from whattoeat.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_verifier: IdentityVerifier
    recipe_service: RecipeService
    meal_service: MealService
    analytics_service: AnalyticsService
    image_service: ImageService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    image_store = SupabaseImageStore(
        supabase_client,
        bucket=resolved_settings.storage_bucket,
        cache_seconds=resolved_settings.image_cache_seconds,
    )
    identity_verifier = SupabaseIdentityClient(
        supabase_url=resolved_settings.supabase_url,
        api_key=resolved_settings.supabase_service_key,
    )
    recipe_service = RecipeService(recipe_repository)
    meal_service = MealService(
        repository=meal_repository,
        recipe_repository=recipe_repository,
    )
    analytics_service = AnalyticsService(meal_service)
    image_service = ImageService(
        store=image_store,
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )

    return AppContainer(
        settings=resolved_settings,
        identity_verifier=identity_verifier,
        recipe_service=recipe_service,
        meal_service=meal_service,
        analytics_service=analytics_service,
        image_service=image_service,
    )
