#!/usr/bin/env python3
"""
Unit tests for the Bataan place lookups.
"""
import unittest

from servicematch.geo.bataan import (
    BARANGAYS,
    MUNICIPALITIES,
    barangay_coordinates,
    is_within_bataan,
    municipality_coordinates,
)
from servicematch.matcher.models import GeoPoint


class TestBataanGazetteer(unittest.TestCase):

    def test_twelve_municipalities(self):
        self.assertEqual(len(MUNICIPALITIES), 12)

    def test_municipality_lookup_is_case_insensitive(self):
        point = municipality_coordinates("  balanga ")
        self.assertEqual(point, GeoPoint(14.6757, 120.5360))

    def test_unknown_municipality_is_none(self):
        self.assertIsNone(municipality_coordinates("Quezon City"))
        self.assertIsNone(municipality_coordinates(None))

    def test_barangay_exact_match(self):
        point = barangay_coordinates("Townsite", "Mariveles")
        self.assertEqual(point, GeoPoint(14.4400, 120.4900))

    def test_barangay_in_other_municipality_falls_back_to_municipality(self):
        # Townsite is in Mariveles, not Limay
        point = barangay_coordinates("Townsite", "Limay")
        self.assertEqual(point, municipality_coordinates("Limay"))

    def test_unknown_barangay_falls_back_to_municipality(self):
        self.assertEqual(barangay_coordinates("Nowhere", "Orion"), municipality_coordinates("Orion"))

    def test_unknown_everything_falls_back_to_balanga(self):
        self.assertEqual(barangay_coordinates("Nowhere", "Atlantis"), municipality_coordinates("Balanga"))

    def test_all_gazetteer_points_inside_province(self):
        for lat, lng in MUNICIPALITIES.values():
            self.assertTrue(is_within_bataan(GeoPoint(lat, lng)))
        for lat, lng, _ in BARANGAYS.values():
            self.assertTrue(is_within_bataan(GeoPoint(lat, lng)))

    def test_manila_is_outside(self):
        self.assertFalse(is_within_bataan(GeoPoint(14.5995, 120.9842)))


if __name__ == '__main__':
    unittest.main()
