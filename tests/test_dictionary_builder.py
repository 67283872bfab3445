"""Tests for the key dictionary builder."""

import pytest
from terse_json.engines.dictionary_builder import KeyDictionaryBuilder
from terse_json.tree import collect_keys
from terse_json.types import CompressOptions, NestedHandling, PrefixedPattern


class TestKeyDictionaryBuilder:
    """Tests for KeyDictionaryBuilder class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.builder = KeyDictionaryBuilder()

    def test_array_of_objects(self, users_json):
        dictionary = self.builder.build(users_json)

        assert dict(dictionary.aliases) == {"a": "firstName", "b": "lastName"}
        assert dict(dictionary.inverse) == {"firstName": "a", "lastName": "b"}
        assert dictionary.retained == frozenset()
        assert dictionary.key_pattern == "alpha"

    def test_single_character_key_is_retained(self):
        dictionary = self.builder.build({"id": 1, "a": 2})

        assert dict(dictionary.aliases) == {"b": "id"}
        assert dictionary.retained == frozenset({"a"})

    def test_candidates_skip_every_retained_key(self):
        dictionary = self.builder.build({"b": 1, "a": 2, "id": 3, "name": 4})

        assert dict(dictionary.aliases) == {"c": "id", "d": "name"}
        assert dictionary.retained == frozenset({"a", "b"})

    def test_nested_keys_at_all_depths(self, nested_json):
        dictionary = self.builder.build(nested_json)

        assert dict(dictionary.aliases) == {"a": "address", "b": "streetAddress", "c": "city"}

    def test_tree_without_keys(self):
        assert len(self.builder.build([1, "two", [3, None]])) == 0
        assert not self.builder.build({})
        assert not self.builder.build("scalar")

    def test_aliases_unique_and_disjoint_from_retained(self, large_users_json, sample_mixed_json):
        for tree in (large_users_json, sample_mixed_json):
            dictionary = self.builder.build(tree)
            aliases = list(dictionary.aliases)
            assert len(set(aliases)) == len(aliases)
            assert not set(aliases) & dictionary.retained
            assert set(dictionary.aliases.values()) | dictionary.retained == set(collect_keys(tree))

    def test_deterministic(self, sample_mixed_json):
        first = self.builder.build(sample_mixed_json)
        second = self.builder.build(sample_mixed_json)
        assert list(first.aliases.items()) == list(second.aliases.items())

    def test_statistics(self, users_json):
        stats = self.builder.get_statistics(self.builder.build(users_json))
        assert stats["aliases"] == 2
        assert stats["retained"] == 0
        assert stats["chars_saved_per_occurrence"] == len("firstName") + len("lastName") - 2


class TestNestedHandling:
    """Tests for region selection."""

    def test_shallow_only_aliases_root_keys(self):
        tree = {"user": {"firstName": "x"}, "count": 1}
        dictionary = KeyDictionaryBuilder(CompressOptions(nested_handling="shallow")).build(tree)

        assert dict(dictionary.aliases) == {"a": "user", "b": "count"}
        assert dictionary.retained == frozenset({"firstName"})

    def test_shallow_key_also_used_deeper(self):
        tree = {"name": "x", "child": {"name": "y", "other": 1}}
        options = CompressOptions(nested_handling=NestedHandling.SHALLOW)
        dictionary = KeyDictionaryBuilder(options).build(tree)

        assert dictionary.alias_for("name") == "a"
        assert "other" in dictionary.retained

    def test_arrays_mode(self):
        tree = [{
            "userName": "john",
            "profile": {"displayName": "John Doe", "avatarUrl": "http://example.com"},
            "orders": [{"productName": "Widget", "quantity": 5}],
        }]
        dictionary = KeyDictionaryBuilder(CompressOptions(nested_handling="arrays")).build(tree)

        assert set(dictionary.aliases.values()) == {"userName", "profile", "orders", "productName", "quantity"}
        assert dictionary.retained == frozenset({"displayName", "avatarUrl"})

    def test_depth_limit(self, nested_json):
        dictionary = KeyDictionaryBuilder(CompressOptions(nested_handling=1)).build(nested_json)

        assert dict(dictionary.aliases) == {"a": "address"}
        assert dictionary.retained == frozenset({"streetAddress", "city"})

    def test_invalid_handling(self):
        with pytest.raises(ValueError):
            CompressOptions(nested_handling="everything")
        with pytest.raises(ValueError):
            CompressOptions(nested_handling=-1)


class TestKeyFilters:
    """Tests for include / exclude and length filters."""

    def test_exclude_keys(self, users_json):
        options = CompressOptions(exclude_keys=("lastName",))
        dictionary = KeyDictionaryBuilder(options).build(users_json)

        assert dict(dictionary.aliases) == {"a": "firstName"}
        assert dictionary.retained == frozenset({"lastName"})

    def test_min_key_length(self, users_json):
        dictionary = KeyDictionaryBuilder(CompressOptions(min_key_length=9)).build(users_json)

        assert dict(dictionary.aliases) == {"a": "firstName"}
        assert dictionary.retained == frozenset({"lastName"})

    def test_include_overrides_min_length(self, users_json):
        options = CompressOptions(min_key_length=20, include_keys=("firstName",))
        dictionary = KeyDictionaryBuilder(options).build(users_json)

        assert dict(dictionary.aliases) == {"a": "firstName"}

    def test_min_key_length_never_below_two(self):
        assert CompressOptions(min_key_length=0).min_key_length == 2


class TestRequireShorter:
    """Tests for the alias length rule."""

    def test_longer_alias_is_skipped(self):
        options = CompressOptions(key_pattern=PrefixedPattern(prefix="json"))
        dictionary = KeyDictionaryBuilder(options).build({"id": 1, "description": "x"})

        assert dict(dictionary.aliases) == {"json0": "description"}
        assert "id" in dictionary.retained

    def test_disabled(self):
        options = CompressOptions(key_pattern=PrefixedPattern(prefix="json"), require_shorter=False)
        dictionary = KeyDictionaryBuilder(options).build({"id": 1})

        assert dict(dictionary.aliases) == {"json0": "id"}

    def test_key_equal_to_assigned_alias_is_still_aliased(self):
        options = CompressOptions(key_pattern=lambda i: f"q{i}")
        dictionary = KeyDictionaryBuilder(options).build({"alpha1": 1, "q0": 2})

        assert dict(dictionary.aliases) == {"q0": "alpha1", "q1": "q0"}
        assert dictionary.retained == frozenset()

    def test_retained_key_is_never_reused_as_alias(self):
        options = CompressOptions(key_pattern=lambda i: f"q{i}")
        dictionary = KeyDictionaryBuilder(options).build({"q0": 1, "alpha1": 2})

        assert dict(dictionary.aliases) == {"q1": "alpha1"}
        assert dictionary.retained == frozenset({"q0"})


class TestBrokenGenerators:
    """Tests for custom generators that cannot satisfy the builder."""

    def test_repeating_generator(self, users_json):
        builder = KeyDictionaryBuilder(CompressOptions(key_pattern=lambda i: "a"))
        with pytest.raises(ValueError, match="enough distinct aliases"):
            builder.build(users_json)

    def test_empty_alias(self, users_json):
        builder = KeyDictionaryBuilder(CompressOptions(key_pattern=lambda i: ""))
        with pytest.raises(ValueError, match="invalid alias"):
            builder.build(users_json)
