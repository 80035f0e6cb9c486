"""Tests for coordinate conversion and range extraction."""

import pytest

from normstr import Change, NormalizedString, OffsetReferential, PreconditionError, Range, get_range_of


class TestConvertOffsets:
    """Test cases for NormalizedString.convert_offsets."""

    def test_round_trip_on_fresh_string(self):
        ns = NormalizedString("hello world")
        normalized = ns.convert_offsets(Range.Original(range(0, 11)))
        assert normalized == range(0, 11)
        assert ns.convert_offsets(Range.Normalized(normalized)) == range(0, 11)

    def test_slice_bounds(self):
        ns = NormalizedString("hello world")
        assert ns.convert_offsets(Range.Original(slice(None))) == range(0, 11)
        assert ns.convert_offsets(Range.Normalized(slice(6, None))) == range(6, 11)
        assert ns.convert_offsets(Range.Normalized((0, 5))) == range(0, 5)

    def test_original_to_normalized_after_nfd(self):
        ns = NormalizedString("café").nfd()
        assert ns.convert_offsets(Range.Original(range(3, 4))) == range(3, 5)
        assert ns.convert_offsets(Range.Original(range(0, 3))) == range(0, 3)

    def test_original_to_normalized_after_filter(self):
        ns = NormalizedString("hello").filter("l")
        # the first 'l' now lives inside the 'o'
        assert ns.convert_offsets(Range.Original(range(2, 3))) == range(2, 3)
        assert ns.convert_offsets(Range.Original(range(0, 2))) == range(0, 2)

    def test_original_to_normalized_after_strip(self):
        ns = NormalizedString(" ab ").strip()
        assert ns.convert_offsets(Range.Original(range(0, 4))) == range(0, 2)
        assert ns.convert_offsets(Range.Original(range(0, 1))) is None

    def test_zero_width_insertion_at_front(self):
        ns = NormalizedString("ab")
        ns.transform([Change.inserted(">"), Change.carried("a"), Change.carried("b")])
        assert ns.convert_offsets(Range.Original(range(0, 1))) == range(0, 2)
        assert ns.convert_offsets(Range.Original(range(1, 2))) == range(2, 3)

    def test_normalized_to_original_after_filter(self):
        ns = NormalizedString("hello").filter("l")
        assert ns.convert_offsets(Range.Normalized(range(1, 3))) == range(1, 5)

    @pytest.mark.parametrize("rng", [
        Range.Original(range(3, 3)),
        Range.Original(range(4, 2)),
        Range.Original(range(0, 100)),
        Range.Normalized(range(0, 0)),
        Range.Normalized(range(-1, 2)),
        Range.Normalized(range(2, 12)),
    ])
    def test_fail_soft(self, rng):
        assert NormalizedString("hello world").convert_offsets(rng) is None

    def test_empty_string(self):
        ns = NormalizedString("")
        assert ns.convert_offsets(Range.Original(range(0, 1))) is None
        assert ns.convert_offsets(Range.Normalized(range(0, 1))) is None

    def test_invalid_referential(self):
        ns = NormalizedString("hello")
        with pytest.raises(PreconditionError):
            ns.convert_offsets(Range("original", range(0, 1)))
        with pytest.raises(PreconditionError):
            ns.get_range(Range(None, range(0, 1)))

    def test_step_must_be_one(self):
        with pytest.raises(PreconditionError):
            NormalizedString("hello").convert_offsets(Range.Normalized(range(0, 4, 2)))

    def test_unsupported_bounds_type(self):
        with pytest.raises(TypeError):
            NormalizedString("hello").convert_offsets(Range.Normalized([0, 1]))

    def test_range_constructors(self):
        assert Range.Original(range(0, 1)).referential is OffsetReferential.ORIGINAL
        assert Range.Normalized(range(0, 1)).referential is OffsetReferential.NORMALIZED


class TestOriginalOffsets:
    """Test cases for the bounding original range query."""

    def test_fresh_string(self):
        assert NormalizedString("hello").original_offsets(range(1, 3)) == range(1, 3)

    def test_snaps_to_merged_spans(self):
        ns = NormalizedString("hello").filter("l")
        # 'o' spans [2, 5) and does not fit in the window
        assert ns.original_offsets(range(1, 4)) == range(1, 2)
        assert ns.original_offsets(range(0, 5)) == range(0, 5)

    def test_outside_covered_span(self):
        ns = NormalizedString(" ab ").strip()
        assert ns.original_offsets(range(0, 3)) is None
        assert ns.original_offsets(range(1, 4)) is None
        assert ns.original_offsets(range(1, 3)) == range(1, 3)

    def test_nothing_inside_window(self):
        ns = NormalizedString("hello").filter("l")
        assert ns.original_offsets(range(2, 4)) is None

    def test_empty_string(self):
        assert NormalizedString("").original_offsets(range(0, 1)) is None


class TestGetRange:
    """Test cases for substring extraction."""

    @pytest.fixture
    def ns(self):
        return NormalizedString("Hello World").lowercase()

    def test_normalized_substring(self, ns):
        assert ns.get_range(Range.Normalized(range(0, 5))) == "hello"

    def test_normalized_substring_from_original_range(self, ns):
        assert ns.get_range(Range.Original(range(6, 11))) == "world"

    def test_original_substring(self, ns):
        assert ns.get_range_original(Range.Normalized(range(0, 5))) == "Hello"
        assert ns.get_range_original(Range.Original(range(6, 11))) == "World"

    @pytest.mark.parametrize("rng", [
        Range.Normalized(range(3, 3)),
        Range.Normalized(range(4, 2)),
        Range.Normalized(range(0, 99)),
        Range.Original(range(0, 99)),
        Range.Original(range(5, 5)),
    ])
    def test_fail_soft(self, ns, rng):
        assert ns.get_range(rng) == ""
        assert ns.get_range_original(rng) == ""

    def test_after_filter_and_lowercase(self):
        ns = NormalizedString("Hello_______ World!")
        ns.filter("_").lowercase()
        assert ns.get() == "hello world!"
        assert ns.get_range(Range.Original(range(13, 18))) == "world"
        assert ns.get_range_original(Range.Normalized(range(0, 5))) == "Hello"
        assert ns.get_range_original(Range.Normalized(range(5, 6))) == "_______ "

    def test_get_range_of(self):
        assert get_range_of("héllo", range(1, 3)) == "él"
        assert get_range_of("abc", slice(1, None)) == "bc"
        assert get_range_of("abc", (2, 1)) == ""
        assert get_range_of("abc", range(0, 4)) == ""
        assert get_range_of("", range(0, 0)) == ""
