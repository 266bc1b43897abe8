"""Remote meal catalog client (httpx)."""
import logging
from typing import List, Optional

import httpx

from mealplanner.domain.Meal import Meal
from mealplanner.utilities.config import REMOTE_CATALOG_TIMEOUT

logger = logging.getLogger(__name__)


async def fetch_meals(url: str, client: Optional[httpx.AsyncClient] = None,
                      timeout: float = REMOTE_CATALOG_TIMEOUT) -> List[Meal]:
    """Fetch meals from a remote /api/meals style endpoint.

    The endpoint may return a list of meal records or {"meals": [...]}.
    Any network, status or decoding failure is logged and yields [] so the
    local catalog keeps working.
    """
    if not url:
        return []
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as ac:
                response = await ac.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Could not load meals from %s, using local data only: %s", url, e)
        return []

    if isinstance(data, dict):
        data = data.get("meals", [])
    if not isinstance(data, list):
        logger.warning("Unexpected payload from %s: %r", url, type(data).__name__)
        return []
    meals = []
    for entry in data:
        meal = Meal.from_dict(entry) if isinstance(entry, dict) else None
        if meal is None or not meal.name or not meal.ingredients:
            logger.warning("Skipping invalid remote meal from %s: %r", url, entry)
            continue
        meals.append(meal)
    return meals
