"""Unit tests for entry body and summary extraction."""

from feedcore.content import (
    extract_text_and_description,
    html_to_markdown,
    strip_markdown_tags,
    summarize,
)
from feedcore.tree import parse_xml


class TestHtmlToMarkdownUnit:
    """Unit tests for html_to_markdown."""

    def test_plain_text_passes_through(self):
        """Text without markup is returned as-is."""
        assert html_to_markdown("Item A content") == "Item A content"

    def test_inline_formatting(self):
        """Inline tags map to their markdown counterparts."""
        html = "<p>Some <strong>bold</strong>, <em>italic</em> and <code>x = 1</code></p>"

        assert html_to_markdown(html) == "Some **bold**, *italic* and `x = 1`"

    def test_headings_and_paragraphs(self):
        """Block elements are separated by blank lines."""
        html = "<div><h2>Important Update</h2><p>New guidelines available.</p></div>"

        assert html_to_markdown(html) == "## Important Update\n\nNew guidelines available."

    def test_links_and_images(self):
        """Anchors and images keep their targets."""
        html = '<p><a href="https://example.com/post">Read more</a> <img src="/a.png" alt="chart"></p>'

        assert html_to_markdown(html) == "[Read more](https://example.com/post) ![chart](/a.png)"

    def test_lists(self):
        """Unordered and ordered lists become markdown lists."""
        assert html_to_markdown("<ul><li>One</li><li>Two</li></ul>") == "- One\n- Two"
        assert html_to_markdown("<ol><li>One</li><li>Two</li></ol>") == "1. One\n2. Two"

    def test_blockquote_and_rule(self):
        """Quotes are prefixed and rules rendered as dashes."""
        html = "<blockquote>Quoted</blockquote><hr><p>After</p>"

        assert html_to_markdown(html) == "> Quoted\n\n---\n\nAfter"

    def test_preformatted_text_keeps_indentation(self):
        """Code blocks are fenced and their whitespace preserved."""
        html = "<p>Example:</p><pre>def f():\n    return 1</pre>"

        assert html_to_markdown(html) == "Example:\n\n```\ndef f():\n    return 1\n```"

    def test_scripts_and_styles_are_dropped(self):
        """Executable and presentational content is removed."""
        html = "<script>alert('xss')</script><style>p{color:red}</style><p>Safe content</p>"

        assert html_to_markdown(html) == "Safe content"

    def test_whitespace_and_entities(self):
        """Whitespace runs collapse and entities are decoded."""
        assert html_to_markdown("<p>Fish  &amp;\n\n  Chips</p>") == "Fish & Chips"

    def test_line_breaks(self):
        """``<br>`` becomes a newline."""
        assert html_to_markdown("first<br>second") == "first\nsecond"

    def test_empty_input(self):
        """Empty input yields empty output."""
        assert html_to_markdown("") == ""
        assert html_to_markdown("<p></p>") == ""


class TestStripMarkdownUnit:
    """Unit tests for strip_markdown_tags and summarize."""

    def test_strip_markdown_tags(self):
        """Every supported construct is reduced to its text."""
        source = "**bold** *italic* `code` ~~strike~~ [link](url) ![image](url) # heading > blockquote\n---\n"

        assert (
            strip_markdown_tags(source)
            == "bold italic code strike link image heading blockquote\n\n"
        )

    def test_plain_text_unchanged(self):
        """Text without markdown syntax is left alone."""
        assert strip_markdown_tags("Nothing to see here.") == "Nothing to see here."

    def test_summarize_removes_newlines_and_truncates(self):
        """Summaries are single-line and capped at 280 characters."""
        markup = "## Title\n\n" + "word " * 100

        summary = summarize(markup)

        assert "\n" not in summary
        assert len(summary) == 280
        assert summary.startswith("Titleword word")

    def test_summarize_counts_characters_not_bytes(self):
        """The cap applies to characters, so multi-byte text is not cut short."""
        summary = summarize("é" * 300)

        assert summary == "é" * 280


class TestExtractTextAndDescriptionUnit:
    """Unit tests for extract_text_and_description."""

    def test_content_encoded_and_description(self):
        """Content becomes the text; description becomes the summary."""
        entry = parse_xml(
            '<item xmlns:content="http://purl.org/rss/1.0/modules/content/">'
            "<description>Short &lt;b&gt;summary&lt;/b&gt;</description>"
            "<content:encoded><![CDATA[<p>Full <em>body</em></p>]]></content:encoded>"
            "</item>"
        )

        text, description = extract_text_and_description(entry)

        assert text == "Full *body*"
        assert description == "Short summary"

    def test_description_only(self):
        """Without content the description serves as both text and summary."""
        entry = parse_xml("<item><description>Item B description</description></item>")

        assert extract_text_and_description(entry) == (
            "Item B description",
            "Item B description",
        )

    def test_content_only_derives_description(self):
        """Without description the summary is derived from the text."""
        entry = parse_xml(
            '<entry xmlns="http://www.w3.org/2005/Atom"><content type="html">'
            "&lt;p&gt;Hello &lt;em&gt;there&lt;/em&gt;&lt;/p&gt;&lt;p&gt;Second&lt;/p&gt;"
            "</content></entry>"
        )

        text, description = extract_text_and_description(entry)

        assert text == "Hello *there*\n\nSecond"
        assert description == "Hello thereSecond"

    def test_atom_summary_is_a_description(self):
        """Atom ``summary`` is treated like RSS ``description``."""
        entry = parse_xml(
            '<entry xmlns="http://www.w3.org/2005/Atom">'
            "<summary>Summary 1</summary><content>Entry 1 content</content></entry>"
        )

        assert extract_text_and_description(entry) == ("Entry 1 content", "Summary 1")

    def test_no_content_at_all(self):
        """Entries without body elements produce empty strings."""
        entry = parse_xml("<item><title>Only a title</title></item>")

        assert extract_text_and_description(entry) == ("", "")

    def test_empty_media_content_is_not_used(self):
        """An attribute-only ``media:content`` element carries no text."""
        entry = parse_xml(
            '<entry xmlns:media="http://search.yahoo.com/mrss/"><media:group>'
            '<media:content url="https://example.com/v"/>'
            "<media:description>This is a description!</media:description>"
            "</media:group></entry>"
        )

        assert extract_text_and_description(entry) == (
            "This is a description!",
            "This is a description!",
        )
