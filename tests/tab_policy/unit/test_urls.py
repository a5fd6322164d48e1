import pytest

from tabvacuum.tab_policy.settings import Settings
from tabvacuum.tab_policy.urls import normalize_url

DEFAULTS = Settings()
NO_FRAGMENTS = Settings(ignore_fragments=True)
NO_QUERY = Settings(ignore_query_params=True)


def test_normalize_url_passes_basic_url_through():
    assert normalize_url("https://example.com/page", DEFAULTS) == "https://example.com/page"


def test_normalize_url_strips_trailing_slashes():
    assert normalize_url("https://example.com/page/", DEFAULTS) == "https://example.com/page"
    assert normalize_url("https://example.com/page///", DEFAULTS) == "https://example.com/page"


def test_normalize_url_collapses_root_path_to_single_slash():
    assert normalize_url("https://example.com/", DEFAULTS) == "https://example.com/"
    assert normalize_url("https://example.com///", DEFAULTS) == "https://example.com/"
    assert normalize_url("https://example.com", DEFAULTS) == "https://example.com/"


def test_normalize_url_fragment_handling_follows_setting():
    url = "https://example.com/page#section"
    assert normalize_url(url, NO_FRAGMENTS) == "https://example.com/page"
    assert normalize_url(url, DEFAULTS) == "https://example.com/page#section"


def test_normalize_url_query_handling_follows_setting():
    url = "https://example.com/page?foo=bar"
    assert normalize_url(url, NO_QUERY) == "https://example.com/page"
    assert normalize_url(url, DEFAULTS) == "https://example.com/page?foo=bar"


def test_normalize_url_lowercases_scheme_and_host_only():
    assert normalize_url("HTTPS://Example.COM/Docs", DEFAULTS) == "https://example.com/Docs"


def test_normalize_url_accepts_camel_case_mapping_settings():
    settings = {"ignoreFragments": True, "ignoreQueryParams": True}
    assert normalize_url("https://example.com/a/?x=1#y", settings) == "https://example.com/a"


@pytest.mark.parametrize("url", ["not-a-url", "", "example.com/path", "http://[::1"])
def test_normalize_url_returns_unparseable_values_unchanged(url):
    assert normalize_url(url, DEFAULTS) == url


def test_normalize_url_collapses_leading_slashes_without_host():
    assert normalize_url("foo:////x", DEFAULTS) == "foo:/x"
    assert normalize_url("http:////x/", DEFAULTS) == "http:///x"


def test_normalize_url_leaves_opaque_paths_alone():
    assert normalize_url("about:blank", DEFAULTS) == "about:blank"
    assert normalize_url("file:///tmp/notes/", DEFAULTS) == "file:///tmp/notes"


@pytest.mark.parametrize(
    "url",
    [
        "https://Example.com/a/b//?q=1#frag",
        "https://example.com",
        "about:blank",
        "not-a-url",
        "file:///tmp/x/",
        "https://user:Pw@Example.com:8080/x/",
        "foo:////x",
        "http:////x/",
        "http:////",
    ],
)
@pytest.mark.parametrize("settings", [DEFAULTS, NO_FRAGMENTS, NO_QUERY])
def test_normalize_url_is_idempotent(url, settings):
    once = normalize_url(url, settings)
    assert normalize_url(once, settings) == once
