"""Tests for structured-markup and header extractors."""

import pytest
from webpage_timestamps.extractors.headers import extract_http_headers
from webpage_timestamps.extractors.structured import (
    META_TAG_NAMES,
    extract_from_schema_org,
    extract_json_ld,
    extract_meta_tags,
    extract_microdata,
    extract_opengraph,
    extract_twitter_card,
)
from webpage_timestamps.models import Confidence, Mechanism
from webpage_timestamps.normalizers import normalize_date

from tests.conftest import make_soup


class TestMetaTags:
    """Tests for HTML meta tag extraction."""

    def test_article_and_dublin_core(self, meta_html: str):
        """Every recognized meta tag becomes a high-confidence candidate."""
        sources = extract_meta_tags(make_soup(meta_html))

        assert [s.field for s in sources] == [
            "article:published_time",
            "article:modified_time",
            "dc.date.created",
        ]
        assert all(s.mechanism == Mechanism.META_TAG for s in sources)
        assert all(s.confidence == Confidence.HIGH for s in sources)
        assert sources[0].value == "2023-01-15T10:30:00Z"

    @pytest.mark.parametrize("name", META_TAG_NAMES)
    def test_property_attribute_also_matches(self, name: str):
        """Names are matched on property= as well as name=."""
        soup = make_soup(f'<meta property="{name}" content="2023-01-15T10:30:00Z">')
        sources = extract_meta_tags(soup)
        assert len(sources) == 1
        assert sources[0].field == name

    def test_unparseable_content_skipped(self):
        """Meta tags whose content is not a date yield nothing."""
        soup = make_soup('<meta name="date" content="yesterday-ish">')
        assert extract_meta_tags(soup) == []

    def test_missing_content_skipped(self):
        """A matching tag without content yields nothing."""
        soup = make_soup('<meta name="pubdate">')
        assert extract_meta_tags(soup) == []

    def test_first_matching_tag_wins(self):
        """Only the first tag per name is read."""
        soup = make_soup(
            '<meta name="date" content="2023-01-01">'
            '<meta name="date" content="2024-01-01">'
        )
        sources = extract_meta_tags(soup)
        assert [s.value for s in sources] == ["2023-01-01"]

    def test_unknown_names_ignored(self):
        """Meta tags outside the fixed list are not considered."""
        soup = make_soup('<meta name="publish_date" content="2023-01-01">')
        assert extract_meta_tags(soup) == []


class TestHttpHeaders:
    """Tests for response header extraction."""

    def test_last_modified_and_date(self):
        """Last-Modified is medium confidence, Date is low."""
        sources = extract_http_headers({
            "last-modified": "Wed, 21 Oct 2015 07:28:00 GMT",
            "date": "Thu, 22 Oct 2015 10:30:00 GMT",
        })

        assert [(s.field, s.confidence) for s in sources] == [
            ("last-modified", Confidence.MEDIUM),
            ("date", Confidence.LOW),
        ]
        assert all(s.mechanism == Mechanism.HTTP_HEADER for s in sources)

    def test_header_names_case_insensitive(self):
        """Mixed-case header names are still recognized."""
        sources = extract_http_headers({"Last-Modified": "Wed, 21 Oct 2015 07:28:00 GMT"})
        assert len(sources) == 1
        assert sources[0].field == "last-modified"

    def test_invalid_and_missing_headers(self):
        """Unparseable values and unrelated headers are ignored."""
        sources = extract_http_headers({
            "date": "not a date",
            "content-type": "text/html",
        })
        assert sources == []


class TestJsonLd:
    """Tests for Schema.org JSON-LD extraction."""

    def test_article_block(self, json_ld_html: str):
        """datePublished and dateModified are extracted with high confidence."""
        sources = extract_from_schema_org(make_soup(json_ld_html))

        assert [(s.field, s.value) for s in sources] == [
            ("datePublished", "2023-02-20T12:00:00Z"),
            ("dateModified", "2023-02-21T15:30:00Z"),
        ]
        assert all(s.mechanism == Mechanism.STRUCTURED_DATA for s in sources)
        assert all(s.confidence == Confidence.HIGH for s in sources)

    def test_array_of_items(self):
        """Top-level arrays are flattened, every item inspected."""
        soup = make_soup("""
            <script type="application/ld+json">
            [{"dateCreated": "2022-12-01"}, {"datePublished": "2023-01-01"}, "junk"]
            </script>
        """)
        sources = extract_from_schema_org(soup)
        assert [s.field for s in sources] == ["dateCreated", "datePublished"]

    def test_malformed_block_skipped(self):
        """Invalid JSON is skipped without affecting other blocks."""
        soup = make_soup("""
            <script type="application/ld+json">{ not json </script>
            <script type="application/ld+json">{"dateModified": "2023-03-01"}</script>
        """)
        sources = extract_from_schema_org(soup)
        assert [s.field for s in sources] == ["dateModified"]

    def test_non_string_values_skipped(self):
        """Dates given as numbers or objects are not candidates."""
        soup = make_soup("""
            <script type="application/ld+json">
            {"datePublished": 1673778600, "dateModified": {"@value": "2023-01-01"}}
            </script>
        """)
        assert extract_from_schema_org(soup) == []

    def test_empty_script(self):
        """Empty JSON-LD scripts produce no items."""
        soup = make_soup('<script type="application/ld+json"></script>')
        assert extract_json_ld(soup) == []


class TestMicrodata:
    """Tests for itemprop microdata extraction."""

    def test_text_fallback(self):
        """Elements without content= fall back to their text."""
        soup = make_soup("""
            <div itemscope itemtype="http://schema.org/Article">
              <time itemprop="datePublished" datetime="2023-03-10T08:00:00Z">March 10, 2023</time>
              <time itemprop="dateModified" datetime="2023-03-11T10:00:00Z">March 11, 2023</time>
            </div>
        """)
        sources = extract_microdata(soup)

        assert [(s.field, s.value) for s in sources] == [
            ("datePublished", "March 10, 2023"),
            ("dateModified", "March 11, 2023"),
        ]
        assert all(s.confidence == Confidence.HIGH for s in sources)

    def test_content_attribute_preferred(self):
        """The content attribute wins over element text."""
        soup = make_soup('<meta itemprop="datePublished" content="2023-04-01T00:00:00Z">')
        sources = extract_microdata(soup)
        assert sources[0].value == "2023-04-01T00:00:00Z"

    def test_every_element_is_a_candidate(self):
        """Repeated itemprops each produce a candidate."""
        soup = make_soup(
            '<span itemprop="datePublished">2023-01-01</span>'
            '<span itemprop="datePublished">2023-02-01</span>'
        )
        assert len(extract_microdata(soup)) == 2


class TestOpenGraph:
    """Tests for OpenGraph extraction."""

    def test_og_properties(self):
        """Published, modified and updated properties are extracted."""
        soup = make_soup("""
            <meta property="og:article:published_time" content="2023-04-05T14:30:00Z">
            <meta property="og:article:modified_time" content="2023-04-06T16:45:00Z">
            <meta property="og:updated_time" content="2023-04-07T09:00:00Z">
        """)
        sources = extract_opengraph(soup)

        assert [s.field for s in sources] == [
            "og:article:published_time",
            "og:article:modified_time",
            "og:updated_time",
        ]
        assert all(s.mechanism == Mechanism.OPEN_GRAPH for s in sources)

    def test_name_attribute_not_matched(self):
        """OpenGraph is property= only."""
        soup = make_soup('<meta name="og:updated_time" content="2023-04-07T09:00:00Z">')
        assert extract_opengraph(soup) == []


class TestTwitterCard:
    """Tests for Twitter card extraction."""

    def test_requires_date_mention(self):
        """Values that never mention a date are ignored even if they parse."""
        soup = make_soup('<meta name="twitter:data1" content="2023-01-15">')
        assert extract_twitter_card(soup) == []

    def test_unparseable_label_ignored(self):
        """A date label that doesn't parse yields nothing."""
        soup = make_soup(
            '<meta name="twitter:label1" content="Est. reading time">'
            '<meta name="twitter:data1" content="Updated date unknown">'
        )
        assert extract_twitter_card(soup) == []

    @pytest.mark.filterwarnings("ignore")
    def test_parseable_value_mentioning_date(self):
        """A parseable value that mentions a date is a medium candidate."""
        soup = make_soup('<meta name="twitter:data1" content="2023-01-15 10:30 DATE">')
        sources = extract_twitter_card(soup)

        assert len(sources) == 1
        assert sources[0].mechanism == Mechanism.SOCIAL_CARD
        assert sources[0].field == "twitter:data1"
        assert sources[0].confidence == Confidence.MEDIUM


class TestEmissionInvariant:
    """Every emitted candidate carries a parseable value."""

    def test_all_values_parse(self, meta_html: str, json_ld_html: str):
        soup = make_soup(meta_html + json_ld_html)
        sources = (
            extract_meta_tags(soup)
            + extract_from_schema_org(soup)
            + extract_microdata(soup)
            + extract_opengraph(soup)
            + extract_twitter_card(soup)
        )
        assert sources
        assert all(normalize_date(s.value) is not None for s in sources)
