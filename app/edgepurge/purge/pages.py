"""Page link derivation.

The CMS page model is external; this module only relies on the small
PageRef protocol. Multi-site installs expose the owning site through the
optional SiteAware capability, and site root records are recognised by
the SiteRoot capability.
"""

from typing import Protocol, runtime_checkable

HOME_SEGMENT = "home"


class LinkTarget(Protocol):
    """Anything with an absolute public link."""

    def absolute_link(self) -> str: ...


class PageRef(Protocol):
    """The page attributes needed to derive purge targets."""

    url_segment: str

    def link(self) -> str: ...

    def absolute_link(self) -> str: ...

    def parent(self) -> object | None: ...


@runtime_checkable
class SiteAware(Protocol):
    """Page that knows the site it belongs to."""

    def site(self) -> LinkTarget: ...


@runtime_checkable
class SiteRoot(Protocol):
    """Record at the top of a multi-site tree."""

    is_site_root: bool


def join_links(*parts: str) -> str:
    """Join URL parts with exactly one slash between them.

    Empty parts are ignored. A leading slash on the first part and a
    trailing slash on the last part are kept.
    """
    parts = tuple(part for part in parts if part)
    if not parts:
        return ""
    joined = parts[0]
    for part in parts[1:]:
        joined = joined.rstrip("/") + "/" + part.lstrip("/")
    return joined


def is_home_page(page: PageRef) -> bool:
    """Check if the page is the site's home page.

    A page is the home page if its URL segment is ``home`` and it sits at
    the top of the tree, either with no parent or directly below a
    multi-site root record.
    """
    if page.url_segment != HOME_SEGMENT:
        return False
    parent = page.parent()
    if parent is None:
        return True
    return isinstance(parent, SiteRoot) and bool(parent.is_site_root)


def page_link(page: PageRef, base_url: str = "") -> str:
    """Resolve the public absolute link of a page.

    Resolution order: configured base URL, then the owning site's link
    for multi-site pages, then the page's own absolute link.
    """
    if base_url:
        return join_links(base_url, page.link())
    if isinstance(page, SiteAware):
        return join_links(page.site().absolute_link(), page.link())
    return page.absolute_link()


def links_to_purge(page: PageRef, base_url: str = "") -> list[str]:
    """Derive the cache keys for a page.

    The CDN caches the link with and without a trailing slash, so both
    are returned. The home page is also cached at the site root.

    Returns:
        Non-empty targets in order: link, link with slash, site root.
    """
    link = page_link(page, base_url).rstrip("/")
    targets = [link, f"{link}/"]

    if is_home_page(page):
        suffix = f"/{HOME_SEGMENT}"
        index = link.rfind(suffix)
        targets.append(link[:index] if index != -1 else "")

    return [target for target in targets if target]
