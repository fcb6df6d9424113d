"""Unit tests for layered deep merge."""

from conduit.fetch.core import deep_merge


class TestDeepMerge:
    """Test deep_merge precedence and copying semantics."""

    def test_later_layers_take_precedence(self):
        """Test ascending precedence across three layers."""
        assert deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}, {"c": 5}) == {
            "a": 1,
            "b": 3,
            "c": 5,
        }

    def test_nested_mappings_merge_recursively(self):
        """Test overlapping objects recurse instead of replacing."""
        merged = deep_merge(
            {"query_args": {"per_page": 100, "sort": "id"}},
            {"query_args": {"sort": "name"}, "headers": {"X-Org": "1"}},
        )
        assert merged == {
            "query_args": {"per_page": 100, "sort": "name"},
            "headers": {"X-Org": "1"},
        }

    def test_lists_are_replaced_not_concatenated(self):
        """Test arrays from higher layers fully replace lower ones."""
        assert deep_merge({"ids": [1, 2, 3]}, {"ids": [9]}) == {"ids": [9]}

    def test_none_does_not_override(self):
        """Test None in a higher layer leaves the lower value."""
        assert deep_merge({"a": 1, "b": {"c": 2}}, {"a": None, "b": None}) == {
            "a": 1,
            "b": {"c": 2},
        }

    def test_mapping_replaces_scalar(self):
        """Test a mapping over a scalar replaces it."""
        assert deep_merge({"body": "raw"}, {"body": {"k": "v"}}) == {"body": {"k": "v"}}

    def test_inputs_are_not_mutated(self):
        """Test the result shares no containers with the inputs."""
        low = {"q": {"a": 1}, "ids": [1]}
        high = {"q": {"b": 2}}
        merged = deep_merge(low, high)
        merged["q"]["c"] = 3
        merged["ids"].append(2)

        assert low == {"q": {"a": 1}, "ids": [1]}
        assert high == {"q": {"b": 2}}

    def test_empty_and_none_layers_are_skipped(self):
        """Test missing layers are ignored."""
        assert deep_merge(None, {}, {"a": 1}, None) == {"a": 1}
