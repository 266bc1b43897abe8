import unittest
from mealplanner.domain.Meal import Meal, parse_ingredients, normalize_name
from mealplanner.domain.errors import ValidationError


class TestParseIngredients(unittest.TestCase):

    def test_splits_lines_trims_and_drops_blanks(self):
        text = "  tomato \n\n pasta\r\n   \ngarlic"
        self.assertEqual(parse_ingredients(text), ["tomato", "pasta", "garlic"])

    def test_accepts_list_input(self):
        self.assertEqual(parse_ingredients([" eggs", "", "milk\ncheese", None]), ["eggs", "milk", "cheese"])

    def test_empty_inputs(self):
        self.assertEqual(parse_ingredients(None), [])
        self.assertEqual(parse_ingredients("   \n  "), [])

    def test_non_text_values_yield_no_lines(self):
        for raw in (5, True, {"a": 1}, 2.5):
            self.assertEqual(parse_ingredients(raw), [], raw)
        self.assertEqual(parse_ingredients(["rice", 3, False]), ["rice"])

    def test_from_dict_with_non_list_ingredients(self):
        meal = Meal.from_dict({"name": "Bad", "ingredients": 5})
        self.assertEqual(meal.name, "Bad")
        self.assertEqual(meal.ingredients, [])


class TestMeal(unittest.TestCase):

    def test_create_trims_name_and_assigns_id(self):
        meal = Meal.create("  Pasta ", "tomato\npasta")
        self.assertEqual(meal.name, "Pasta")
        self.assertEqual(meal.ingredients, ["tomato", "pasta"])
        self.assertTrue(meal.id)

    def test_create_ids_are_unique(self):
        a = Meal.create("A", "x")
        b = Meal.create("B", "x")
        self.assertNotEqual(a.id, b.id)

    def test_create_rejects_empty_name(self):
        with self.assertRaises(ValidationError):
            Meal.create("   ", "tomato")

    def test_create_rejects_empty_ingredients(self):
        with self.assertRaises(ValidationError):
            Meal.create("Pasta", " \n ")

    def test_from_dict_accepts_remote_shape(self):
        meal = Meal.from_dict({"name": "Soup", "ingredients": ["water", " salt "], "prepTime": 30, "extra": 1})
        self.assertEqual(meal.name, "Soup")
        self.assertEqual(meal.ingredients, ["water", "salt"])
        self.assertEqual(meal.prep_time, 30)
        self.assertTrue(meal.id)

    def test_to_dict_omits_unset_metadata(self):
        meal = Meal("Toast", ["bread"], meal_id="t1")
        self.assertEqual(meal.to_dict(), {"id": "t1", "name": "Toast", "ingredients": ["bread"]})
        meal.servings = 2
        self.assertEqual(meal.to_dict()["servings"], 2)

    def test_normalize_name(self):
        self.assertEqual(normalize_name("  PaSta "), "pasta")
        self.assertEqual(normalize_name(None), "")
