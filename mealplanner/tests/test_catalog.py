import unittest
from mealplanner.domain.Catalog import MealCatalog
from mealplanner.domain.Meal import Meal
from mealplanner.domain.Plan import WeeklyPlan
from mealplanner.domain.errors import NotFoundError, ValidationError


class TestMealCatalog(unittest.TestCase):

    def setUp(self):
        self.catalog = MealCatalog()
        self.pasta = self.catalog.add_meal("Pasta", "tomato\npasta")
        self.salad = self.catalog.add_meal("Salad", ["lettuce", "tomato"])

    def test_add_meal(self):
        self.assertEqual(len(self.catalog), 2)
        self.assertIs(self.catalog.find_by_id(self.pasta.id), self.pasta)
        self.assertEqual([m.name for m in self.catalog.get_meals()], ["Pasta", "Salad"])

    def test_add_meal_with_empty_ingredients_leaves_catalog_unchanged(self):
        with self.assertRaises(ValidationError):
            self.catalog.add_meal("Soup", "  \n ")
        self.assertEqual(len(self.catalog), 2)
        self.assertIsNone(self.catalog.find_by_name("Soup"))

    def test_add_meal_rejects_duplicate_name(self):
        with self.assertRaises(ValidationError):
            self.catalog.add_meal(" pasta ", "flour")
        self.assertEqual(self.catalog.find_by_name("Pasta").ingredients, ["tomato", "pasta"])

    def test_find_by_name_is_case_insensitive_and_none_when_absent(self):
        self.assertIs(self.catalog.find_by_name("  SALAD"), self.salad)
        self.assertIsNone(self.catalog.find_by_name("Pizza"))
        self.assertIsNone(self.catalog.find_by_id("missing"))

    def test_edit_ingredients_keeps_identity(self):
        meal = self.catalog.edit_ingredients(self.pasta.id, "penne\n basil ")
        self.assertIs(meal, self.pasta)
        self.assertEqual(meal.ingredients, ["penne", "basil"])
        self.assertEqual(meal.name, "Pasta")

    def test_edit_ingredients_rejects_empty(self):
        with self.assertRaises(ValidationError):
            self.catalog.edit_ingredients(self.pasta.id, ["", "  "])
        self.assertEqual(self.pasta.ingredients, ["tomato", "pasta"])

    def test_edit_ingredients_unknown_id(self):
        with self.assertRaises(NotFoundError):
            self.catalog.edit_ingredients("nope", "x")

    def test_rename_updates_index_without_touching_plan(self):
        plan = WeeklyPlan()
        plan.assign("Monday", "Pasta", self.catalog)
        meal, days = self.catalog.rename_meal(self.pasta.id, "Spaghetti", plan)
        self.assertEqual(meal.name, "Spaghetti")
        self.assertEqual(days, ["Monday"])
        self.assertIsNone(self.catalog.find_by_name("Pasta"))
        self.assertIs(self.catalog.find_by_name("spaghetti"), self.pasta)
        self.assertEqual(plan.get("Monday"), self.pasta.id)

    def test_rename_to_taken_name_fails(self):
        with self.assertRaises(ValidationError):
            self.catalog.rename_meal(self.pasta.id, "salad")
        self.assertEqual(self.pasta.name, "Pasta")

    def test_rename_case_only_is_allowed(self):
        meal, _ = self.catalog.rename_meal(self.pasta.id, "PASTA")
        self.assertEqual(meal.name, "PASTA")

    def test_delete_meal(self):
        meal, cleared = self.catalog.delete_meal(self.salad.id)
        self.assertIs(meal, self.salad)
        self.assertEqual(cleared, [])
        self.assertIsNone(self.catalog.find_by_name("Salad"))
        self.assertNotIn(self.salad.id, self.catalog)

    def test_delete_unknown_meal(self):
        with self.assertRaises(NotFoundError):
            self.catalog.delete_meal("nope")
        self.assertEqual(len(self.catalog), 2)

    def test_merge_remote_skips_existing_names(self):
        added = self.catalog.merge_remote([
            {"name": "pasta", "ingredients": ["other"]},
            {"name": "Curry", "ingredients": ["rice", "chicken"]},
            {"name": "", "ingredients": ["x"]},
            {"name": "Empty", "ingredients": []},
            {"name": "Flag", "ingredients": True},
        ])
        self.assertEqual([m.name for m in added], ["Curry"])
        self.assertEqual(self.catalog.find_by_name("Pasta").ingredients, ["tomato", "pasta"])
        self.assertEqual(len(self.catalog), 3)

    def test_merge_remote_replaces_colliding_id(self):
        added = self.catalog.merge_remote([Meal("Curry", ["rice"], meal_id=self.pasta.id)])
        self.assertNotEqual(added[0].id, self.pasta.id)
        self.assertIs(self.catalog.find_by_id(self.pasta.id), self.pasta)

    def test_from_dict_drops_invalid_and_duplicate_records(self):
        catalog = MealCatalog.from_dict([
            {"id": "1", "name": "Pasta", "ingredients": ["tomato"]},
            {"id": "2", "name": "PASTA", "ingredients": ["x"]},
            {"id": "3", "name": "Broken"},
            {"id": "4", "name": "Numeric", "ingredients": 5},
            {"id": "5", "name": "Flag", "ingredients": True},
            "junk",
        ])
        self.assertEqual([m.id for m in catalog.get_meals()], ["1"])
        self.assertEqual(catalog.to_dict(), [{"id": "1", "name": "Pasta", "ingredients": ["tomato"]}])
