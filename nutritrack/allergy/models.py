# -*- coding: utf-8 -*-
"""Allergy — Pydantic models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class AllergenMatch(BaseModel):
    has_allergen: bool = False
    matched_allergens: List[str] = Field(default_factory=list)
    matched_keywords: List[str] = Field(default_factory=list)


class AllergyCheckRequest(BaseModel):
    food_name: str = Field(..., min_length=1)
    allergies: List[str] = Field(default_factory=list, description="e.g. ['Peanuts', 'Dairy']")


class AllergyCheckResponse(AllergenMatch):
    warning: str = ""
