"""URL canonicalization used to compare tabs for duplicate grouping."""

from __future__ import annotations

import re
import urllib.parse

from .settings import setting

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def _lower_host(netloc: str) -> str:
    userinfo, at, hostport = netloc.rpartition("@")
    return f"{userinfo}{at}{hostport.lower()}"


def normalize_url(url: str, settings: object) -> str:
    """Return the comparison key for ``url``.

    Strings that do not parse as a URL with a scheme are returned unchanged so
    that they still compare literally.
    """
    candidate = (url or "").strip()
    if not _SCHEME_RE.match(candidate):
        return url
    try:
        parsed = urllib.parse.urlsplit(candidate)
    except ValueError:
        return url

    query = parsed.query
    fragment = parsed.fragment
    if setting(settings, "ignore_fragments", "ignoreFragments", False):
        fragment = ""
    if setting(settings, "ignore_query_params", "ignoreQueryParams", False):
        query = ""

    path = parsed.path
    # With no host, a leading "//" would be re-read as an authority.
    if not parsed.netloc and path.startswith("//"):
        path = "/" + path.lstrip("/")
    # Opaque paths (about:blank, mailto:...) have no hierarchy to trim.
    if parsed.netloc or path.startswith("/"):
        path = path.rstrip("/") or "/"

    return urllib.parse.urlunsplit(
        (parsed.scheme.lower(), _lower_host(parsed.netloc), path, query, fragment)
    )
