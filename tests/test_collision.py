import unittest

import numpy as np

from session_layout import Box, Dimensions, PlacementRegistry, collides, overlaps


class TestOverlaps(unittest.TestCase):
    def test_disjoint_boxes_far_apart(self):
        a = Box(0, 0, 100, 100)
        b = Box(500, 500, 600, 600)
        self.assertFalse(overlaps(a, b, padding=40))
        self.assertFalse(overlaps(b, a, padding=40))

    def test_intersecting_boxes(self):
        self.assertTrue(overlaps(Box(0, 0, 100, 100), Box(50, 50, 150, 150)))

    def test_touching_boxes_overlap(self):
        self.assertTrue(overlaps(Box(0, 0, 100, 100), Box(100, 0, 200, 100)))

    def test_padding_boundary(self):
        a = Box(0, 0, 100, 100)
        # Exactly `padding` apart still counts as an overlap, a hair further does not.
        self.assertTrue(overlaps(a, Box(140, 0, 240, 100), padding=40))
        self.assertFalse(overlaps(a, Box(140.001, 0, 240, 100), padding=40))
        self.assertTrue(overlaps(a, Box(0, 140, 100, 240), padding=40))
        self.assertFalse(overlaps(a, Box(0, 140.001, 100, 240), padding=40))

    def test_separated_on_one_axis_is_enough(self):
        a = Box(0, 0, 100, 100)
        b = Box(0, 300, 100, 400)
        self.assertFalse(overlaps(a, b, padding=40))

    def test_box_at(self):
        box = Box.at(10, -20, Dimensions(280, 140))
        self.assertEqual(box, Box(10, -20, 290, 120))


class TestPlacementRegistry(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        np.random.seed(636)
        corners = np.random.uniform(-1_000, 1_000, size=(200, 2))
        sizes = np.random.uniform(10, 300, size=(200, 2))
        cls.boxes = [
            Box(float(x), float(y), float(x + w), float(y + h))
            for (x, y), (w, h) in zip(corners, sizes)
        ]

    def test_empty_registry_never_collides(self):
        registry = PlacementRegistry()
        self.assertEqual(len(registry), 0)
        self.assertFalse(registry.collides(Box(0, 0, 10, 10), padding=1_000))

    def test_matches_pairwise_overlaps(self):
        registry = PlacementRegistry(capacity=4)
        for i, box in enumerate(self.boxes):
            expected = any(overlaps(box, other, 40) for other in self.boxes[:i])
            self.assertEqual(registry.collides(box, 40), expected)
            registry.add(box)
        self.assertEqual(len(registry), len(self.boxes))

    def test_registry_keeps_order_when_growing(self):
        registry = PlacementRegistry(capacity=1)
        for box in self.boxes[:10]:
            registry.add(box)
        self.assertEqual(list(registry), self.boxes[:10])
        np.testing.assert_array_equal(
            registry.boxes, np.array([b.as_array() for b in self.boxes[:10]])
        )

    def test_boxes_view_is_read_only(self):
        registry = PlacementRegistry()
        registry.add(Box(0, 0, 1, 1))
        with self.assertRaises(ValueError):
            registry.boxes[0, 0] = 5

    def test_collides_with_dimensions(self):
        registry = PlacementRegistry()
        registry.add(Box(0, 0, 280, 140))
        dims = Dimensions(220, 100)
        self.assertTrue(collides(0, 150, dims, registry, padding=40))
        self.assertFalse(collides(0, 181, dims, registry, padding=40))
        self.assertFalse(collides(0, 150, dims, registry, padding=0))
