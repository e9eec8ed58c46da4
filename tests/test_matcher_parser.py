"""Tests for the matcher path language parser."""

import pytest
from lark import Tree

from ua_treewalker.matcher import (
    MatcherParser,
    get_lookup_names,
    matcher_to_source,
    parse_matcher,
    pretty_print_tree,
    unquote_value,
)


@pytest.fixture(autouse=True)
def reset_parser():
    """Reset singleton before each test to ensure clean state."""
    MatcherParser.reset()
    yield
    MatcherParser.reset()


def rule_names(source):
    result = parse_matcher(source)
    assert result.success, [str(e) for e in result.errors]
    return [str(t.data) for t in result.tree.iter_subtrees_topdown()]


# ============================================================
# VALID INPUTS
# ============================================================


class TestBasePaths:
    def test_agent_only(self):
        assert rule_names("agent") == ["start", "matcher_path", "path_walk"]

    def test_fixed_value(self):
        assert rule_names('"Some value"') == ["start", "matcher_path", "path_fixed_value"]

    def test_variable(self):
        names = rule_names("@Version.(1)name")
        assert names[:3] == ["start", "matcher_path", "path_variable"]
        assert "step_down" in names

    def test_whitespace_is_ignored(self):
        assert rule_names("agent . (1) product") == rule_names("agent.(1)product")


class TestPathSteps:
    def test_down_with_ranges(self):
        names = rule_names("agent.(1-2)product.(1)name.(*)version.text")
        assert names.count("step_down") == 4
        assert "number_range_start_to_end" in names
        assert "number_range_single_value" in names
        assert "number_range_all" in names

    def test_down_wildcard_name(self):
        result = parse_matcher("agent.(1)product.*")
        assert result.success
        downs = [t for t in result.tree.iter_subtrees_topdown() if t.data == "step_down"]
        assert [str(d.children[1]) for d in downs] == ["product", "*"]

    def test_navigation(self):
        names = rule_names("agent.(1)product.(1)name^>.(1)version<")
        assert "step_up" in names
        assert "step_next" in names
        assert "step_prev" in names

    @pytest.mark.parametrize("source,rule", [
        ('agent.(1)product.(1)name="Chrome"', "step_equals_value"),
        ('agent.(1)product.(1)name!="Chrome"', "step_not_equals_value"),
        ('agent.(1)product.(1)name{"Chr"', "step_starts_with_value"),
        ('agent.(1)product.(1)name}"ome"', "step_ends_with_value"),
        ('agent.(1)product.(1)name~"hro"', "step_contains_value"),
        ("agent.(1)product.(1)name?Browsers", "step_is_in_set"),
        ("agent.(1)product.(1)name[1]@", "step_back_to_full"),
    ])
    def test_compare_steps(self, source, rule):
        assert rule in rule_names(source)

    @pytest.mark.parametrize("source,rule", [
        ("agent.(1)product.(1)name[1-2]", "word_range_start_to_end"),
        ("agent.(1)product.(1)name[-2]", "word_range_first_words"),
        ("agent.(1)product.(1)name[2-]", "word_range_last_words"),
        ("agent.(1)product.(1)name[2]", "word_range_single_word"),
    ])
    def test_word_ranges(self, source, rule):
        names = rule_names(source)
        assert rule in names
        # Directly after a path step the range is part of the path
        assert "step_word_range" in names
        assert "matcher_word_range" not in names


class TestMatcherFunctions:
    @pytest.mark.parametrize("source,rule", [
        ('Concat["Android ";agent.(1)product.(1)version;"!"]', "matcher_concat"),
        ('Concat["Android ";agent.(1)product.(1)version]', "matcher_concat_prefix"),
        ('Concat[agent.(1)product.(1)version;"!"]', "matcher_concat_postfix"),
        ("NormalizeBrand[agent.(1)product.(1)name]", "matcher_normalize_brand"),
        ("CleanVersion[agent.(1)product.(1)version]", "matcher_clean_version"),
        ("LookUp[BrandLookup;agent.(1)product.(1)name]", "matcher_path_lookup"),
        ('LookUp[BrandLookup;agent.(1)product.(1)name;"Other"]', "matcher_path_lookup"),
        ("IsNull[agent.(1)product.(1)comments]", "matcher_path_is_null"),
        ("CleanVersion[agent.(1)product.(1)version][1-2]", "matcher_word_range"),
    ])
    def test_functions(self, source, rule):
        assert rule in rule_names(source)

    def test_nested_functions(self):
        names = rule_names("NormalizeBrand[LookUp[MobileBrands;CleanVersion[agent.(1)product.(1)name]]]")
        assert names[:3] == ["start", "matcher_normalize_brand", "matcher_path_lookup"]

    def test_lookup_without_default_has_placeholder(self):
        result = parse_matcher("LookUp[BrandLookup;agent.(1)product.(1)name]")
        lookup = next(result.tree.find_data("matcher_path_lookup"))
        assert lookup.children[2] is None

    def test_concat_of_two_values_is_a_prefix(self):
        assert "matcher_concat_prefix" in rule_names('Concat["a";"b"]')

    def test_word_range_on_fixed_value(self):
        assert "matcher_word_range" in rule_names('"one two three"[2]')


# ============================================================
# INVALID INPUTS
# ============================================================


class TestErrors:
    def test_empty_source(self):
        result = parse_matcher("   ")
        assert not result.success
        assert not result
        assert result.errors[0].message == "Empty matcher"

    def test_uppercase_step_name(self):
        result = parse_matcher("agent.(1)Product")
        assert not result.success
        assert result.error_count == 1
        assert result.errors[0].line == 1

    def test_unclosed_function(self):
        result = parse_matcher("CleanVersion[agent.(1)product.(1)version")
        assert not result.success
        assert "end of matcher" in result.errors[0].message

    def test_unknown_character(self):
        result = parse_matcher("agent.(1)product#")
        assert not result.success
        assert result.errors[0].context == "agent.(1)product#"

    def test_error_string_has_location(self):
        result = parse_matcher("agent.(1)product#")
        assert "line 1" in str(result.errors[0])

    def test_error_string_points_at_column(self):
        result = parse_matcher("agent.(1)product#")
        lines = str(result.errors[0]).splitlines()
        assert lines[0] == "Unexpected character '#' (line 1, column 17)"
        assert lines[1] == "    agent.(1)product#"
        assert lines[2] == " " * 20 + "^"

    def test_unclosed_function_suggests_bracket(self):
        result = parse_matcher("CleanVersion[agent.(1)product.(1)version")
        assert result.errors[0].suggestion == "Missing closing bracket ']'"
        assert result.errors[0].column == len("CleanVersion[agent.(1)product.(1)version") + 1


# ============================================================
# UTILITIES
# ============================================================


class TestUtilities:
    def test_parser_is_singleton(self):
        assert MatcherParser() is MatcherParser()

    def test_unquote_value(self):
        result = parse_matcher(r'agent.(1)product.(1)name="Say \"hi\""')
        token = next(result.tree.find_data("step_equals_value")).children[0]
        assert unquote_value(token) == 'Say "hi"'

    def test_get_lookup_names(self):
        result = parse_matcher("LookUp[BrandLookup;agent.(1)product.(1)name?Browsers]")
        assert get_lookup_names(result.tree) == ["BrandLookup", "Browsers"]

    def test_pretty_print_tree(self):
        result = parse_matcher('agent.(1)product.(1)name="Chrome"')
        printed = pretty_print_tree(result.tree)
        assert printed.splitlines()[0] == "start"
        assert "VALUE: '\"Chrome\"'" in printed


class TestMatcherToSource:
    @pytest.mark.parametrize("source", [
        'agent.(1-2)product.(*)name="Chrome"^.(1)version',
        'agent.(1)product.(1)name!="A"{"b"}"c"~"d"?Browsers[2-]@<>',
        'LookUp[BrandLookup;agent.(1)product.(1)name;"Unknown"]',
        "LookUp[BrandLookup;@Name.(1)text[-2]]",
        'Concat["v";CleanVersion[agent.(1)product.(1)version][1-2];"!"]',
        'NormalizeBrand[IsNull[agent.(1)product.*[3]]]',
        'Concat[agent.(1)product.(1)version;"\\"x\\""]',
    ])
    def test_renders_source(self, source):
        assert matcher_to_source(parse_matcher(source).tree) == source

    def test_whitespace_is_dropped(self):
        tree = parse_matcher("agent . (1) product").tree
        assert matcher_to_source(tree) == "agent.(1)product"

    def test_unknown_rule(self):
        with pytest.raises(ValueError):
            matcher_to_source(Tree("bogus", []))
