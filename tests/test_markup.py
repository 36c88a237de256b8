"""Tests for the structural query layer over parsed HTML."""

import pytest

from apkfetch.download.markup import Element, extract, parse_document

pytestmark = [pytest.mark.unit]


class TestParseDocument:
    def test_find_all_preserves_document_order(self):
        doc = parse_document(
            "<ul><li class='x'>one</li><li>skip</li><li class='x'>two</li></ul>"
        )

        texts = [el.text() for el in doc.find_all("li.x")]

        assert texts == ["one", "two"]

    def test_no_match_yields_empty_list_and_none(self):
        doc = parse_document("<div><p>text</p></div>")

        assert doc.find_all("a.downloadButton") == []
        assert doc.find_one("a.downloadButton") is None
        assert extract(doc, ".variants-table .table-row") == []

    def test_malformed_markup_does_not_raise(self):
        doc = parse_document("<div class='card-with-tabs'><a href='/x'>here<div><span>")

        link = doc.find_one(".card-with-tabs a[href]")

        assert link is not None
        assert link.attr("href") == "/x"

    @pytest.mark.parametrize("markup", ["", None, "   "])
    def test_empty_input_parses_to_empty_document(self, markup):
        doc = parse_document(markup)

        assert isinstance(doc, Element)
        assert doc.find_all("a") == []

    def test_text_is_stripped(self):
        doc = parse_document("<h5><a href='/a'>\n   YouTube 19.05.36  \n</a></h5>")

        assert doc.find_one("a").text() == "YouTube 19.05.36"


class TestElement:
    def test_attr_missing_returns_none(self):
        doc = parse_document("<a>no href</a>")

        assert doc.find_one("a").attr("href") is None

    def test_attr_joins_multi_valued_attributes(self):
        doc = parse_document("<a class='btn downloadButton'>x</a>")

        assert doc.find_one("a").attr("class") == "btn downloadButton"

    def test_find_is_scoped_to_element(self):
        doc = parse_document(
            "<div class='row'><span class='c'>a</span></div>"
            "<div class='row'><span class='c'>b</span><span class='c'>c</span></div>"
        )

        rows = doc.find_all(".row")

        assert [c.text() for c in rows[0].find_all(".c")] == ["a"]
        assert [c.text() for c in rows[1].find_all(".c")] == ["b", "c"]

    def test_nth_child_and_has_selectors(self):
        doc = parse_document(
            "<div class='t'>"
            "<div class='r'><span class='badge'>APK</span></div>"
            "<div class='r'><i>none</i></div>"
            "</div>"
        )

        assert len(doc.find_all(".t > div:nth-child(2)")) == 1
        assert len(doc.find_all(".r:has(span.badge)")) == 1
