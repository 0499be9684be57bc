"""Tests for page link derivation and home page detection."""

from dataclasses import dataclass, field

import pytest
from edgepurge.purge.pages import (
    SiteAware,
    is_home_page,
    join_links,
    links_to_purge,
    page_link,
)


@dataclass
class FakeSite:
    """Multi-site root record."""

    url: str = "https://site-two.example.com/"
    is_site_root: bool = True

    def absolute_link(self) -> str:
        return self.url


@dataclass
class FakePage:
    """Page in a single-site tree."""

    url_segment: str
    relative: str
    host: str = "http://localhost"
    parent_page: object | None = None

    def link(self) -> str:
        return self.relative

    def absolute_link(self) -> str:
        return join_links(self.host, self.relative)

    def parent(self) -> object | None:
        return self.parent_page


@dataclass
class FakeMultisitePage(FakePage):
    """Page that belongs to a site in a multi-site tree."""

    owning_site: FakeSite = field(default_factory=FakeSite)

    def site(self) -> FakeSite:
        return self.owning_site


class TestJoinLinks:
    """Tests for join_links."""

    @pytest.mark.parametrize(
        ("parts", "expected"),
        [
            (("http://site.com", "/a"), "http://site.com/a"),
            (("http://site.com/", "a"), "http://site.com/a"),
            (("http://site.com/", "/a/"), "http://site.com/a/"),
            (("http://site.com", ""), "http://site.com"),
            (("", "/a"), "/a"),
            ((), ""),
        ],
    )
    def test_join(self, parts: tuple[str, ...], expected: str) -> None:
        assert join_links(*parts) == expected


class TestIsHomePage:
    """Tests for home page detection."""

    def test_top_level_home(self) -> None:
        assert is_home_page(FakePage("home", "/home/")) is True

    def test_home_under_site_root(self) -> None:
        assert is_home_page(FakePage("home", "/home/", parent_page=FakeSite())) is True

    def test_home_under_regular_page(self) -> None:
        """A nested page named home is not the home page."""
        parent = FakePage("about", "/about/")
        assert is_home_page(FakePage("home", "/about/home/", parent_page=parent)) is False

    def test_home_under_non_root_site_record(self) -> None:
        parent = FakeSite(is_site_root=False)
        assert is_home_page(FakePage("home", "/home/", parent_page=parent)) is False

    def test_other_segment(self) -> None:
        assert is_home_page(FakePage("about", "/about/")) is False


class TestPageLink:
    """Tests for link resolution order."""

    def test_base_url_wins(self) -> None:
        page = FakeMultisitePage("about", "/about/")
        assert page_link(page, "https://www.example.com") == "https://www.example.com/about/"

    def test_site_aware_page(self) -> None:
        page = FakeMultisitePage("about", "/about/")
        assert isinstance(page, SiteAware)
        assert page_link(page) == "https://site-two.example.com/about/"

    def test_plain_page(self) -> None:
        page = FakePage("about", "/about/")
        assert not isinstance(page, SiteAware)
        assert page_link(page) == "http://localhost/about/"


class TestLinksToPurge:
    """Tests for the full target list of a page."""

    def test_regular_page(self) -> None:
        """Both slash variants are purged."""
        page = FakePage("about", "/about/")
        assert links_to_purge(page, "https://www.example.com") == [
            "https://www.example.com/about",
            "https://www.example.com/about/",
        ]

    def test_home_page_adds_site_root(self) -> None:
        """The home page also purges the site root without /home."""
        page = FakePage("home", "/home/")
        assert links_to_purge(page, "https://www.example.com") == [
            "https://www.example.com/home",
            "https://www.example.com/home/",
            "https://www.example.com",
        ]

    def test_multisite_home_page(self) -> None:
        page = FakeMultisitePage("home", "/home/", parent_page=FakeSite())
        assert links_to_purge(page)[-1] == "https://site-two.example.com"

    def test_home_link_without_home_suffix(self) -> None:
        """A home page whose link lacks /home adds no root target."""
        page = FakePage("home", "/")
        assert links_to_purge(page, "https://www.example.com") == [
            "https://www.example.com",
            "https://www.example.com/",
        ]
