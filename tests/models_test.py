import unittest
from huffcodec.models import Leaf, Internal

class TestLeaf(unittest.TestCase):
    def test_equality_and_hash(self):
        l1 = Leaf(97)
        l2 = Leaf(97)
        l3 = Leaf(98)
        self.assertEqual(l1, l2)
        self.assertNotEqual(l1, l3)
        self.assertEqual(hash(l1), hash(l2))

    def test_symbol_range(self):
        Leaf(0)
        Leaf(255)
        with self.assertRaises(ValueError):
            Leaf(256)
        with self.assertRaises(ValueError):
            Leaf(-1)
        with self.assertRaises(ValueError):
            Leaf("a")

    def test_leaf_shape(self):
        leaf = Leaf(5)
        self.assertTrue(leaf.is_leaf)
        self.assertEqual(leaf.depth(), 0)
        self.assertEqual(leaf.leaf_count(), 1)

class TestInternal(unittest.TestCase):
    def test_requires_two_children(self):
        with self.assertRaises(ValueError):
            Internal(Leaf(1), None)
        with self.assertRaises(ValueError):
            Internal(None, Leaf(1))

    def test_structure(self):
        tree = Internal(Leaf(99), Internal(Leaf(97), Leaf(98)))
        self.assertFalse(tree.is_leaf)
        self.assertEqual(tree.depth(), 2)
        self.assertEqual(tree.leaf_count(), 3)
        self.assertEqual([leaf.symbol for leaf in tree.leaves()], [99, 97, 98])

    def test_structural_equality(self):
        a = Internal(Leaf(1), Leaf(2))
        b = Internal(Leaf(1), Leaf(2))
        c = Internal(Leaf(2), Leaf(1))
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)
        self.assertNotEqual(a, Leaf(1))

class TestDot(unittest.TestCase):
    def test_single_leaf(self):
        self.assertEqual(Leaf(97).to_dot(), 'digraph {\n  "97";\n}')

    def test_edges_labelled_with_bits(self):
        dot = Internal(Leaf(97), Leaf(98)).to_dot()
        self.assertTrue(dot.startswith("digraph {"))
        self.assertTrue(dot.endswith("}"))
        self.assertIn('"n1" -> "97" [label="0"];', dot)
        self.assertIn('"n1" -> "98" [label="1"];', dot)

if __name__ == '__main__':
    unittest.main()
