"""Tests for stat selection patterns."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from varnishstats.core.patterns import Matcher, compile_patterns

segment = st.text(
    alphabet=st.characters(
        categories=("Ll", "Lu", "Nd"), include_characters="_()"
    ),
    min_size=1,
    max_size=12,
)
stat_names = st.lists(segment, min_size=1, max_size=5).map(".".join)
pattern_strings = st.one_of(
    stat_names, stat_names.map(lambda name: f"{name}.*"), st.just("*")
)

pytestmark = pytest.mark.tier(0)


class TestWildcard:
    """Tests for the bare "*" pattern."""

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Wildcard")
    @given(name=stat_names)
    def test_wildcard_matches_every_name(self, name: str) -> None:
        """["*"] selects every stat name."""
        assert compile_patterns(["*"]).matches(name)

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Wildcard.ShortCircuit")
    def test_wildcard_short_circuits_other_patterns(self) -> None:
        """A bare "*" anywhere in the list makes the matcher select all."""
        matcher = compile_patterns(["MAIN.uptime", "*", "MGT.*"])
        assert matcher.match_all
        assert matcher.matches("LCK.ban.creat")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Empty")
    @given(name=stat_names)
    def test_empty_pattern_list_matches_nothing(self, name: str) -> None:
        """No patterns selects no stat."""
        matcher = compile_patterns([])
        assert matcher.is_empty
        assert not matcher.matches(name)


class TestTrailingWildcard:
    """Tests for "SECTION.*" style patterns."""

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Prefix")
    def test_prefix_matches_stats_below_section(self) -> None:
        """MGT.* selects stats inside the MGT section."""
        matcher = compile_patterns(["MGT.*"])
        assert matcher.matches("MGT.uptime")
        assert matcher.matches("MGT.child_start")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Prefix.SegmentBounded")
    def test_prefix_is_segment_bounded(self) -> None:
        """MGT.* does not select MGTX.uptime."""
        assert not compile_patterns(["MGT.*"]).matches("MGTX.uptime")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Prefix.SectionItself")
    def test_prefix_does_not_match_bare_section(self) -> None:
        """MGT.* does not select a stat named exactly MGT."""
        assert not compile_patterns(["MGT.*"]).matches("MGT")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Prefix.Nested")
    def test_nested_prefix(self) -> None:
        """VBE.boot.* selects every backend stat of the boot VCL."""
        matcher = compile_patterns(["VBE.boot.*"])
        assert matcher.matches("VBE.boot.default.conn")
        assert not matcher.matches("VBE.reload_1.default.conn")
        assert matcher.prefixes == ("VBE.boot.",)

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Prefix.InnerWildcard")
    def test_inner_wildcard_is_literal(self) -> None:
        """Only a trailing * is a wildcard; MEMPOOL.*.live is an exact name."""
        matcher = compile_patterns(["MEMPOOL.*.live"])
        assert not matcher.matches("MEMPOOL.req0.live")
        assert matcher.matches("MEMPOOL.*.live")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Prefix.Property")
    @given(section=segment, rest=stat_names)
    def test_prefix_selects_any_stat_below_section(
        self, section: str, rest: str
    ) -> None:
        """SECTION.* selects SECTION.<anything>."""
        assert compile_patterns([f"{section}.*"]).matches(f"{section}.{rest}")


class TestExactPattern:
    """Tests for fully literal patterns."""

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Exact")
    def test_exact_pattern_matches_only_that_name(self) -> None:
        """MAIN.uptime selects MAIN.uptime and nothing else."""
        matcher = compile_patterns(["MAIN.uptime"])
        assert matcher.matches("MAIN.uptime")
        assert not matcher.matches("MAIN.uptime2")
        assert not matcher.matches("MAIN")
        assert not matcher.matches("MGT.uptime")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Exact.Glob")
    def test_partial_segment_glob_is_literal(self) -> None:
        """MAIN.cache* is not a wildcard; it matches nothing real."""
        assert not compile_patterns(["MAIN.cache*"]).matches("MAIN.cache_hit")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Exact.EmptyString")
    @given(name=stat_names)
    def test_empty_string_pattern_matches_nothing(self, name: str) -> None:
        """An empty pattern, as produced by an empty stats option, selects nothing."""
        assert not compile_patterns([""]).matches(name)


class TestPatternUnion:
    """Tests for several patterns compiled together."""

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Union")
    def test_any_pattern_matching_selects(self) -> None:
        """A stat is selected if any pattern matches it."""
        matcher = compile_patterns(["MGT.*", "MAIN.uptime", "VBE.*"])
        assert matcher.matches("MGT.child_panic")
        assert matcher.matches("MAIN.uptime")
        assert matcher.matches("VBE.boot.default.req")
        assert not matcher.matches("MAIN.cache_hit")

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Union.Property")
    @given(patterns=st.lists(pattern_strings, max_size=5), name=stat_names)
    def test_matches_is_or_of_single_patterns(
        self, patterns: list[str], name: str
    ) -> None:
        """Compiling a list equals OR-ing each pattern compiled alone."""
        combined = compile_patterns(patterns).matches(name)
        separate = any(compile_patterns([p]).matches(name) for p in patterns)
        assert combined == separate

    @pytest.mark.core
    @pytest.mark.tra("Core.Patterns.Compile.Returns")
    def test_compile_keeps_source_patterns(self) -> None:
        """The matcher remembers its patterns in configuration order."""
        matcher = compile_patterns(["b.*", "a.x"])
        assert isinstance(matcher, Matcher)
        assert matcher.patterns == ("b.*", "a.x")
