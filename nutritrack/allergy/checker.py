# -*- coding: utf-8 -*-
"""Allergy — keyword matching of food names against declared allergies."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .models import AllergenMatch

ALLERGEN_KEYWORDS: Dict[str, List[str]] = {
    "Peanuts": ["peanut", "groundnut", "arachis", "mandelonas", "satay", "pad thai"],
    "Tree Nuts": [
        "almond", "cashew", "walnut", "pecan", "pistachio", "macadamia", "hazelnut", "brazil nut",
        "chestnut", "pine nut", "praline", "marzipan", "nougat", "gianduja", "nut butter",
    ],
    "Dairy": [
        "milk", "cheese", "butter", "cream", "yogurt", "yoghurt", "whey", "casein", "lactose", "ghee",
        "curd", "paneer", "custard", "ice cream", "milkshake", "latte", "cappuccino", "mocha", "dairy",
    ],
    "Eggs": [
        "egg", "mayonnaise", "mayo", "meringue", "omelette", "omelet", "frittata", "quiche", "custard",
        "eggnog", "albumin",
    ],
    "Soy": ["soy", "soya", "tofu", "tempeh", "edamame", "miso", "tamari", "soybean", "soy sauce", "soy milk"],
    "Shellfish": [
        "shrimp", "prawn", "crab", "lobster", "crayfish", "crawfish", "scallop", "clam", "mussel", "oyster",
        "squid", "calamari", "octopus", "shellfish", "seafood",
    ],
    "Gluten": [
        "wheat", "bread", "pasta", "noodle", "flour", "cake", "cookie", "biscuit", "cracker", "cereal",
        "barley", "rye", "oat", "malt", "seitan", "couscous", "bulgur", "farro", "spelt", "semolina",
        "gluten", "croissant", "bagel", "pizza", "sandwich", "burger bun", "tortilla", "wrap", "pancake",
        "waffle",
    ],
    "Fish": [
        "fish", "salmon", "tuna", "cod", "tilapia", "sardine", "anchovy", "mackerel", "trout", "bass",
        "halibut", "snapper", "swordfish", "catfish", "herring", "haddock", "perch", "flounder",
        "fish sauce", "worcestershire",
    ],
}


def check_food_for_allergens(food_name: str, allergies: Iterable[str]) -> AllergenMatch:
    allergies = list(allergies or [])
    if not food_name or not allergies:
        return AllergenMatch()

    name = food_name.lower()
    matched_allergens: List[str] = []
    matched_keywords: List[str] = []
    for allergy in allergies:
        for keyword in ALLERGEN_KEYWORDS.get(allergy, []):
            if keyword.lower() not in name:
                continue
            if allergy not in matched_allergens:
                matched_allergens.append(allergy)
            if keyword not in matched_keywords:
                matched_keywords.append(keyword)

    return AllergenMatch(
        has_allergen=bool(matched_allergens),
        matched_allergens=matched_allergens,
        matched_keywords=matched_keywords,
    )


def format_allergen_warning(match: AllergenMatch) -> str:
    if not match.matched_allergens:
        return ""
    allergens = ", ".join(match.matched_allergens)
    keywords = ", ".join(match.matched_keywords[:3])
    return (
        f"⚠️ Allergy Warning: This food may contain {allergens}. "
        f"Detected ingredients: {keywords}. Are you sure you want to log this meal?"
    )
