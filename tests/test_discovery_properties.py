"""Property-based tests for HTML sniffing and feed link discovery."""

from urllib.parse import urljoin

from hypothesis import given
from hypothesis import strategies as st

from feedcore.discovery import FeedLinkParser, is_html

PATH_SEGMENT = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789-_", min_size=1, max_size=12
)


class TestDiscoveryProperties:
    """Property-based tests for the discovery module."""

    @given(st.text(alphabet=" \t\r\n", max_size=20), st.text(max_size=50))
    def test_whitespace_prefix_does_not_change_sniffing(self, prefix, body):
        """For any payload, leading whitespace never changes the verdict."""
        assert is_html(prefix + body) == is_html(body)

    @given(
        st.lists(
            st.tuples(PATH_SEGMENT, st.sampled_from(["rss", "atom", "html"])),
            max_size=8,
        )
    )
    def test_only_feed_links_are_yielded_in_order(self, links):
        """
        For any sequence of alternate links, exactly the RSS/Atom ones are
        yielded, resolved, in the order they appear.
        """
        base_url = "https://example.com/site/"
        tags = "".join(
            f'<link rel="alternate" type="application/{kind}+xml" href="{path}">'
            for path, kind in links
        )
        html = f"<!DOCTYPE html><html><head>{tags}</head></html>"

        expected = [urljoin(base_url, path) for path, kind in links if kind != "html"]

        assert list(FeedLinkParser(html, base_url)) == expected
