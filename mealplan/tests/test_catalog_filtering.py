import unittest
from mealplan.domain.MenuItem import MenuItem
from mealplan.domain.Restaurant import Restaurant
from mealplan.logic.catalog.filtering import filter_by_location


class TestCatalogFiltering(unittest.TestCase):

    def setUp(self):
        self.tko = Restaurant("R1", "Pasta Palace", "TKO", [MenuItem(id="A1", name="Breadsticks")])
        self.tko_lower = Restaurant("R2", "Morning Glory", "tko ", [])
        self.central = Restaurant("R3", "Ocean Grill", "Central", [])
        self.nowhere = Restaurant("R4", "Pop-up", "", [])
        self.catalog = [self.tko, self.tko_lower, self.central, self.nowhere]

    def test_matches_location_case_insensitively(self):
        result = filter_by_location(self.catalog, "tKo")
        self.assertEqual(result, [self.tko, self.tko_lower])

    def test_every_result_is_in_catalog_and_matches(self):
        for location in ("TKO", "central", "Mong Kok"):
            result = filter_by_location(self.catalog, location)
            for restaurant in result:
                self.assertIn(restaurant, self.catalog)
                self.assertEqual(restaurant.location.strip().lower(), location.lower())

    def test_empty_location_passes_everything_through(self):
        self.assertEqual(filter_by_location(self.catalog, ""), self.catalog)
        self.assertEqual(filter_by_location(self.catalog, None), self.catalog)
        self.assertEqual(filter_by_location(self.catalog, "   "), self.catalog)

    def test_no_match_is_empty_list(self):
        self.assertEqual(filter_by_location(self.catalog, "Mong Kok"), [])

    def test_restaurant_without_location_never_matches(self):
        self.assertNotIn(self.nowhere, filter_by_location(self.catalog, "Central"))

    def test_catalog_is_not_mutated(self):
        filter_by_location(self.catalog, "TKO")
        self.assertEqual(len(self.catalog), 4)


if __name__ == '__main__':
    unittest.main()
