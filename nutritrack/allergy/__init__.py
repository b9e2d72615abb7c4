# -*- coding: utf-8 -*-
"""Allergen keyword checks for food names."""

from .checker import ALLERGEN_KEYWORDS, check_food_for_allergens, format_allergen_warning

__all__ = [
    'ALLERGEN_KEYWORDS',
    'check_food_for_allergens',
    'format_allergen_warning',
]
