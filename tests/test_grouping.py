"""
Tests for import grouping and canonical ordering.
"""

import pytest

from impsort.grouping import GroupingConfig, Grouper, parse_groups
from impsort.model import ImportRecord
from tests.infrastructure.engine_utils import ECLIPSE_DEFAULTS


def imp(path: str, is_static: bool = False) -> ImportRecord:
    return ImportRecord(path=path, is_static=is_static)


def paths(blocks):
    return [[("static " if r.is_static else "") + r.path for r in block] for block in blocks]


class TestGroupIndex:

    def test_eclipse_defaults(self):
        grouper = Grouper(ECLIPSE_DEFAULTS)
        # block 0 holds static imports, the regular groups follow
        assert grouper.group_index(imp("org.junit.Assert.assertTrue", is_static=True)) == 0
        assert grouper.group_index(imp("java.util.List")) == 1
        assert grouper.group_index(imp("javax.inject.Inject")) == 2
        assert grouper.group_index(imp("org.slf4j.Logger")) == 3
        assert grouper.group_index(imp("com.google.common.base.Strings")) == 4
        assert grouper.group_index(imp("net.revelc.Foo")) == 5

    def test_static_after(self):
        grouper = Grouper(GroupingConfig(groups=("java.",), static_after=True))
        assert grouper.group_index(imp("java.util.List")) == 0
        assert grouper.group_index(imp("net.Foo")) == 1
        assert grouper.group_index(imp("java.util.Collections.emptyList", is_static=True)) == 2

    def test_longest_prefix_wins(self):
        grouper = Grouper(GroupingConfig(groups=("org.", "org.apache."), static_groups=("*",)))
        assert grouper.group_index(imp("org.apache.commons.Lang")) == 2
        assert grouper.group_index(imp("org.junit.Test")) == 1

    def test_first_listed_prefix(self):
        grouper = Grouper(GroupingConfig(groups=("org.", "org.apache."), longest_prefix=False))
        assert grouper.group_index(imp("org.apache.commons.Lang")) == 1

    def test_unmatched_first(self):
        grouper = Grouper(GroupingConfig(groups=("java.",), unmatched_first=True))
        assert grouper.group_index(imp("net.Foo")) == 1
        assert grouper.group_index(imp("java.util.List")) == 2

    def test_explicit_catch_all_position(self):
        grouper = Grouper(GroupingConfig.from_strings("java.,*,org."))
        assert grouper.group_index(imp("java.util.List")) == 1
        assert grouper.group_index(imp("net.Foo")) == 2
        assert grouper.group_index(imp("org.Bar")) == 3

    def test_static_groups(self):
        grouper = Grouper(GroupingConfig.from_strings("java.", "org.junit.,*"))
        assert grouper.group_index(imp("org.junit.Assert.assertEquals", is_static=True)) == 0
        assert grouper.group_index(imp("java.util.Collections.sort", is_static=True)) == 1
        assert grouper.group_index(imp("java.util.List")) == 2


class TestOrdering:

    def test_breadth_first_puts_package_types_before_nested(self):
        grouper = Grouper(GroupingConfig(breadth_first=True))
        blocks = grouper.group([imp("com.foo.Alpha.Inner"), imp("com.foo.Bar")])
        assert paths(blocks) == [["com.foo.Bar", "com.foo.Alpha.Inner"]]

    def test_depth_first_is_dictionary_order(self):
        grouper = Grouper(GroupingConfig(breadth_first=False))
        blocks = grouper.group([imp("com.foo.Bar"), imp("com.foo.Alpha.Inner")])
        assert paths(blocks) == [["com.foo.Alpha.Inner", "com.foo.Bar"]]

    def test_shorter_prefix_sorts_first(self):
        grouper = Grouper(GroupingConfig(breadth_first=False))
        blocks = grouper.group([imp("java.util.Map.Entry"), imp("java.util.Map"), imp("java.io.File")])
        assert paths(blocks) == [["java.io.File", "java.util.Map", "java.util.Map.Entry"]]

    def test_segment_comparison_not_raw_strings(self):
        # "$" sorts before "." as a character, but "bar" is a prefix of "bar$x" as a segment
        grouper = Grouper(GroupingConfig(groups=(), breadth_first=False))
        blocks = grouper.group([imp("foo.bar$x.X"), imp("foo.bar.Y")])
        assert paths(blocks) == [["foo.bar.Y", "foo.bar$x.X"]]

    def test_ignore_case(self):
        records = [imp("org.a.X"), imp("org.B.Y")]
        sensitive = Grouper(GroupingConfig(ignore_case=False)).group(records)
        insensitive = Grouper(GroupingConfig(ignore_case=True)).group(records)
        assert paths(sensitive) == [["org.B.Y", "org.a.X"]]
        assert paths(insensitive) == [["org.a.X", "org.B.Y"]]

    def test_full_layout(self):
        grouper = Grouper(ECLIPSE_DEFAULTS)
        records = [
            imp("com.example.App"),
            imp("org.junit.Test"),
            imp("java.util.Map"),
            imp("org.junit.Assert.assertEquals", is_static=True),
            imp("java.io.File"),
            imp("net.revelc.Foo"),
        ]
        assert paths(grouper.group(records)) == [
            ["static org.junit.Assert.assertEquals"],
            ["java.io.File", "java.util.Map"],
            ["org.junit.Test"],
            ["com.example.App"],
            ["net.revelc.Foo"],
        ]

    @pytest.mark.parametrize("static_after, expected", [
        (False, ["static java.util.Collections.emptyList", "java.util.List"]),
        (True, ["java.util.List", "static java.util.Collections.emptyList"]),
    ])
    def test_joined_static_imports_share_groups(self, static_after, expected):
        grouper = Grouper(GroupingConfig(join_static_with_non_static=True, static_after=static_after))
        blocks = grouper.group([imp("java.util.List"), imp("java.util.Collections.emptyList", is_static=True)])
        assert paths(blocks) == [expected]

    def test_order_is_independent_of_input_order(self):
        grouper = Grouper(ECLIPSE_DEFAULTS)
        records = [imp("java.util.Map"), imp("java.util.List"), imp("org.Foo"), imp("java.util.List", is_static=True)]
        assert grouper.group(records) == grouper.group(list(reversed(records)))


def test_parse_groups():
    assert parse_groups("java., javax.,,org.,java.") == ("java.", "javax.", "org.")
    assert parse_groups(["java.", " com. "]) == ("java.", "com.")
    assert parse_groups("") == ()
    assert parse_groups(None) == ()
