"""Tests for streamed-output normalization."""
import pytest

from companyqa.services.normalizer import normalize_fragment


class TestArtifactsRemoved:
    def test_bold_and_bracket_citation(self):
        assert normalize_fragment("Example **bold** [1] text") == "Example bold text"

    def test_heading_marker(self):
        assert normalize_fragment("# Heading\n\nBody") == "Heading\n\nBody"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Revenue grew [12][3] last year", "Revenue grew last year"),
            ("A *subtle* point", "A subtle point"),
            ("An _underlined_ idea", "An underlined idea"),
            ("### Products\nRockets", "Products\nRockets"),
            ("> quoted line\nplain", "quoted line\nplain"),
            ("Run `pip install acme` now", "Run pip install acme now"),
            ("<b>Bold</b> and <EM>loud</EM> and <strong>x</strong> <i>y</i>", "Bold and loud and x y"),
            ("Founded in 1999 (1) by two people (23).", "Founded in 1999 by two people."),
            ("Source: the annual report", "the annual report"),
            ("footnote 4: see filings", "see filings"),
            ("REFERENCE: company site", "company site"),
            ("According to: press release", "press release"),
            ("“Quoted” and ‘single’ it’s", "\"Quoted\" and 'single' it's"),
            ("cloud—native and 2019–2020", "cloud-native and 2019-2020"),
            ("too    many   spaces", "too many spaces"),
            ("Hello , world .", "Hello, world."),
        ],
    )
    def test_single_artifact(self, raw, expected):
        assert normalize_fragment(raw) == expected

    def test_nested_emphasis(self):
        assert normalize_fragment("***very*** important") == "very important"

    def test_citation_before_period_leaves_no_gap(self):
        assert normalize_fragment("Acme builds rockets [4].") == "Acme builds rockets."


class TestCleanTextUnchanged:
    @pytest.mark.parametrize(
        "text",
        [
            "Acme is a logistics company based in Ohio.",
            "- item one\n- item two",
            "1. First step\n2. Second step\n\nNext paragraph.",
            "Great launch 🚀 for the team 👩‍💻, café included.",
            "Use 2 * 3 to get six",
            "A lone * asterisk",
            "snake_case_name stays",
            "Tagged #hashtag and price $5 (approx)",
            "",
            " ",
            "Example.com ",
        ],
    )
    def test_plain_text_is_returned_as_is(self, text):
        assert normalize_fragment(text) == text

    def test_newlines_are_not_collapsed(self):
        text = "Line one\n\n\nLine two"
        assert normalize_fragment(text) == text


class TestFragmentBoundaries:
    def test_marker_split_across_fragments_is_left_alone(self):
        assert normalize_fragment("Acme makes **rock") == "Acme makes **rock"
        assert normalize_fragment("ets** daily") == "ets** daily"

    def test_each_call_is_independent(self):
        first = normalize_fragment("**bold**")
        second = normalize_fragment("**bold**")
        assert first == second == "bold"
