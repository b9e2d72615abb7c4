# -*- coding: utf-8 -*-
"""Allergy — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from .checker import check_food_for_allergens, format_allergen_warning
from .models import AllergyCheckRequest, AllergyCheckResponse

router = APIRouter(prefix="/api/allergy", tags=["Allergy"])


@router.post("/check", response_model=AllergyCheckResponse, summary="Check a food name against allergies")
def check(request: AllergyCheckRequest):
    match = check_food_for_allergens(request.food_name, request.allergies)
    return AllergyCheckResponse(**match.model_dump(), warning=format_allergen_warning(match))
