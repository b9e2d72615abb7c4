# -*- coding: utf-8 -*-
"""REST backend client (meals, health profile, food/recipe search, reports)."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, Optional

import httpx

from .config import settings
from .errors import ApiError
from .periods import PeriodRange

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class ApiClient:
    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token_provider = token_provider
        self.timeout = settings.api_timeout if timeout is None else timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True, transport=self._transport) as client:
            try:
                resp = await client.request(method, url, params=params, json=json_body, headers=self._headers())
            except httpx.HTTPError as exc:
                logger.error("API request failed: %s %s: %s", method, endpoint, exc)
                raise ApiError(f"Request to {endpoint} failed: {exc}") from exc

        text = resp.text
        logger.debug(
            "API response: %s %s -> %s (%d bytes) %s",
            method,
            endpoint,
            resp.status_code,
            len(text),
            text[:200],
        )
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ApiError(
                f"Server returned invalid JSON ({resp.status_code} {resp.reason_phrase}): {text[:100]}",
                status_code=resp.status_code,
            ) from exc

        if resp.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(message or "Something went wrong", status_code=resp.status_code)
        return data

    # ---- auth ----

    async def get_current_user(self) -> Dict[str, Any]:
        return await self.request("GET", "/auth/me")

    async def logout(self) -> Any:
        return await self.request("POST", "/auth/logout")

    async def verify_email(self, token: str) -> Any:
        return await self.request("GET", "/auth/verify-email", params={"token": token})

    # ---- nutrition / food search ----

    async def analyze_food_text(self, food_description: str) -> Dict[str, Any]:
        return await self.request(
            "POST", "/nutrition/analyze-text", json_body={"food_description": food_description}
        )

    async def get_nutrition_info(self, query: str) -> Any:
        return await self.request("GET", "/nutrition-info", params={"query": query})

    async def search_foods(
        self,
        query: str,
        *,
        page_number: Optional[int] = None,
        page_size: Optional[int] = None,
        data_type: Optional[str] = None,
    ) -> Any:
        params: Dict[str, Any] = {"query": query}
        if page_number:
            params["pageNumber"] = page_number
        if page_size:
            params["pageSize"] = page_size
        if data_type:
            params["dataType"] = data_type
        return await self.request("GET", "/food-wiki/search", params=params)

    async def get_food_details(self, fdc_id: int | str) -> Any:
        return await self.request("GET", f"/food-wiki/{fdc_id}")

    async def get_foods(self, fdc_ids: Iterable[int | str]) -> Any:
        return await self.request("POST", "/food-wiki/foods", json_body={"fdcIds": list(fdc_ids)})

    # ---- recipes ----

    async def search_recipes(self, query: str) -> Any:
        return await self.request("GET", "/recipes/search", params={"query": query})

    async def get_recipe_by_id(self, meal_id: str) -> Any:
        return await self.request("GET", f"/recipes/{meal_id}")

    async def get_random_recipes(self, count: int = 6) -> Any:
        return await self.request("GET", "/recipes/random", params={"count": str(count)})

    async def filter_recipes_by_category(self, category: str) -> Any:
        return await self.request("GET", f"/recipes/category/{category}")

    async def filter_recipes_by_area(self, area: str) -> Any:
        return await self.request("GET", f"/recipes/area/{area}")

    # ---- health profile ----

    async def create_health_profile(self, profile: Dict[str, Any]) -> Any:
        return await self.request("POST", "/health/profile", json_body=profile)

    async def get_health_profile(self) -> Dict[str, Any]:
        return await self.request("GET", "/health/profile")

    # ---- meals ----

    async def log_meal(self, meal: Dict[str, Any]) -> Any:
        return await self.request("POST", "/meals/log", json_body=meal)

    async def get_daily_meals(self, date: Optional[str] = None) -> Dict[str, Any]:
        params = {"date": date} if date else None
        return await self.request("GET", "/meals/daily", params=params)

    async def update_meal(self, meal_id: str, meal: Dict[str, Any]) -> Any:
        return await self.request("PUT", f"/meals/{meal_id}", json_body=meal)

    async def delete_meal(self, meal_id: str) -> Any:
        return await self.request("DELETE", f"/meals/{meal_id}")

    async def get_period_stats(self, period: PeriodRange) -> Any:
        return await self.request("GET", "/meals/period-stats", params=period.to_query())

    # ---- reports ----

    async def generate_report(self, report_type: str, period: PeriodRange, *, send_email: bool = False) -> Any:
        params = {
            "report_type": report_type,
            **period.to_query(),
            "send_email": "true" if send_email else "false",
        }
        return await self.request("POST", "/reports/generate", params=params)

    async def get_reports(self, limit: int = 50, skip: int = 0) -> Any:
        return await self.request("GET", "/reports", params={"limit": str(limit), "skip": str(skip)})

    async def get_report_by_id(self, report_id: str) -> Any:
        return await self.request("GET", f"/reports/{report_id}")

    async def delete_report(self, report_id: str) -> Any:
        return await self.request("DELETE", f"/reports/{report_id}")
