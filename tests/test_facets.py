import unittest

from spark_lineage_conf.errors import MalformedValueError
from spark_lineage_conf.facets import DEFAULT_DISABLED_FACETS, FacetsConfig, build_facets


class TestFacets(unittest.TestCase):

    def test_default_list(self):
        facets = build_facets({})

        self.assertEqual(facets.disabled, DEFAULT_DISABLED_FACETS)
        self.assertEqual(facets, FacetsConfig())

    def test_explicit_list_replaces_defaults_in_order(self):
        facets = build_facets({"facets.disabled": "[facet2;facet1]"})

        self.assertEqual(facets.disabled, ("facet2", "facet1"))
        self.assertFalse(facets.is_disabled("spark_unknown"))

    def test_empty_list_enables_everything(self):
        self.assertEqual(build_facets({"facets.disabled": "[]"}).disabled, ())

    def test_toggles_apply_on_top_of_list(self):
        facets = build_facets({
            "facets.spark_unknown.disabled": "false",
            "facets.spark.logicalPlan.disabled": "true",
            "facets.debug.disabled": "true",
        })

        self.assertEqual(facets.disabled, ("spark.logicalPlan", "debug"))
        self.assertTrue(facets.is_disabled("debug"))

    def test_toggles_combine_with_explicit_list(self):
        facets = build_facets({
            "facets.disabled": "[a;b]",
            "facets.a.disabled": "false",
            "facets.c.disabled": "true",
        })

        self.assertEqual(facets.disabled, ("b", "c"))

    def test_invalid_toggle_value(self):
        with self.assertRaises(MalformedValueError) as ctx:
            build_facets({"facets.debug.disabled": "maybe"})

        self.assertEqual(ctx.exception.key, "facets.debug.disabled")


if __name__ == '__main__':
    unittest.main()
