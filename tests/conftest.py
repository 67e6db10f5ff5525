"""Shared test fixtures and configuration."""

import pytest
from bs4 import BeautifulSoup


def make_soup(html: str) -> BeautifulSoup:
    """Parse HTML the same way the pipeline does."""
    return BeautifulSoup(html, "lxml")


@pytest.fixture
def meta_html() -> str:
    """Page with article and Dublin Core meta tags."""
    return """
    <html>
      <head>
        <meta name="article:published_time" content="2023-01-15T10:30:00Z">
        <meta name="article:modified_time" content="2023-01-16T14:20:00Z">
        <meta name="dc.date.created" content="2023-01-14T09:00:00Z">
      </head>
      <body></body>
    </html>
    """


@pytest.fixture
def json_ld_html() -> str:
    """Page with a single Schema.org Article block."""
    return """
    <html>
      <head>
        <script type="application/ld+json">
        {
          "@context": "https://schema.org",
          "@type": "Article",
          "datePublished": "2023-02-20T12:00:00Z",
          "dateModified": "2023-02-21T15:30:00Z"
        }
        </script>
      </head>
      <body></body>
    </html>
    """


@pytest.fixture
def heuristic_html() -> str:
    """Page whose only dates are a <time> element and a .date byline."""
    return """
    <html>
      <body>
        <time datetime="2023-05-15T12:00:00Z">May 15, 2023</time>
        <div class="date">Published on June 1, 2023</div>
      </body>
    </html>
    """
