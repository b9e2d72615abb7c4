# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from nutritrack.allergy import check_food_for_allergens, format_allergen_warning


class TestAllergyChecker(unittest.TestCase):
    def test_matches_keywords_case_insensitively(self) -> None:
        match = check_food_for_allergens("Peanut Butter Sandwich", ["Peanuts", "Dairy", "Gluten"])
        self.assertTrue(match.has_allergen)
        self.assertEqual(match.matched_allergens, ["Peanuts", "Dairy", "Gluten"])
        self.assertEqual(match.matched_keywords, ["peanut", "butter", "sandwich"])

    def test_no_allergies_or_unknown_allergy(self) -> None:
        self.assertFalse(check_food_for_allergens("Shrimp pad thai", []).has_allergen)
        self.assertFalse(check_food_for_allergens("Shrimp pad thai", ["Sesame"]).has_allergen)
        self.assertFalse(check_food_for_allergens("", ["Peanuts"]).has_allergen)

    def test_warning_lists_at_most_three_keywords(self) -> None:
        match = check_food_for_allergens("cheese and cream latte with butter", ["Dairy"])
        warning = format_allergen_warning(match)
        self.assertIn("may contain Dairy", warning)
        self.assertIn("Detected ingredients: cheese, butter, cream.", warning)

    def test_no_warning_without_match(self) -> None:
        match = check_food_for_allergens("green salad", ["Fish"])
        self.assertEqual(format_allergen_warning(match), "")


if __name__ == "__main__":
    unittest.main()
