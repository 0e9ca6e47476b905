"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import FastAPI, HTTPException, Query, Request, status

from food_search.api.schemas import FoodListResponse, FoodOut, SearchResponse
from food_search.app_logging import configure_logging
from food_search.containers import AppContainer
from food_search.domain.foods import Category

MAX_LIMIT = 200


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        q: Annotated[str, Query()] = "",
        category: Category | None = None,
        limit: Annotated[int | None, Query(ge=1, le=MAX_LIMIT)] = None,
    ) -> SearchResponse:
        """Search foods by free text, optionally within a category."""
        state_container: AppContainer = request.app.state.container
        outcome = await state_container.search_service.search_with_diagnostics(
            q, category=category, limit=limit
        )
        for failure in outcome.failures:
            logger.info(
                "Search tier failure: tier=%s action=%s", failure.tier, failure.action
            )
        return SearchResponse(
            tier=outcome.tier,
            results=[FoodOut.from_result(result) for result in outcome.results],
        )

    @app.get("/foods/suggestions")
    async def food_suggestions(
        request: Request,
        category: Category,
        limit: Annotated[int, Query(ge=1, le=MAX_LIMIT)] = 10,
    ) -> FoodListResponse:
        """Return a random selection of canonical foods in a category."""
        state_container: AppContainer = request.app.state.container
        foods = state_container.catalog_service.suggest(category, limit)
        return FoodListResponse(results=[FoodOut.from_food(food) for food in foods])

    @app.get("/foods/{fdc_id}")
    async def food_detail(fdc_id: int, request: Request) -> FoodOut:
        """Return an indexed food by FDC id."""
        state_container: AppContainer = request.app.state.container
        food = state_container.catalog_service.get_food(fdc_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return FoodOut.from_food(food)

    return app
