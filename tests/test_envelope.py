"""Tests for SOAP request assembly."""

import xml.etree.ElementTree as ET

from eposprint.barcodes import BarcodeType
from eposprint.catalog import CutType, LineStyle
from eposprint.codec import render
from eposprint.commands import Area, Barcode, Cut, Mode, Rectangle, Text
from eposprint.envelope import EPOS_NS, SOAP_NS, build_request

ENVELOPE_OPEN = (
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"><s:Body>'
    '<epos-print xmlns="http://www.epson-pos.com/schemas/2011/03/epos-print">'
)
ENVELOPE_CLOSE = "</epos-print></s:Body></s:Envelope>"


class TestBuildRequest:
    """Test the request envelope."""

    def test_normal_mode(self):
        """Normal mode puts commands directly under epos-print."""
        fragments = [render(Text("hi\n")), render(Cut(CutType.FEED))]
        body = build_request(fragments, Mode.NORMAL)
        assert body == (
            ENVELOPE_OPEN + '<text>hi\n</text><cut type="feed"/>' + ENVELOPE_CLOSE
        ).encode("utf-8")

    def test_page_mode(self):
        """Page mode wraps commands in a page element."""
        fragments = [render(Area(0, 0, 500, 500)), render(Rectangle(0, 1, 2, 3, style=LineStyle.MEDIUM))]
        body = build_request(fragments, Mode.PAGE)
        assert body == (
            ENVELOPE_OPEN
            + '<page><area x="0" y="0" width="500" height="500"/>'
            + '<rectangle x1="0" y1="1" x2="2" y2="3" style="medium"/></page>'
            + ENVELOPE_CLOSE
        ).encode("utf-8")

    def test_is_well_formed(self):
        """The request parses as XML with the expected namespaces."""
        body = build_request([render(Text("x"))], Mode.PAGE)
        root = ET.fromstring(body)
        assert root.tag == f"{{{SOAP_NS}}}Envelope"
        page = root.find(f"{{{SOAP_NS}}}Body/{{{EPOS_NS}}}epos-print/{{{EPOS_NS}}}page")
        assert page is not None
        assert page.find(f"{{{EPOS_NS}}}text").text == "x"


class TestSingleEscape:
    """Test that command text is escaped exactly once on the wire."""

    def test_brace_escapes_sent_verbatim(self):
        """{-escapes appear exactly once and unaltered."""
        fragment = render(Barcode("{A{1ABC{{", BarcodeType.CODE128))
        body = build_request([fragment], Mode.NORMAL).decode("utf-8")
        assert body.count("{A{1ABC{{") == 1
        assert "&amp;" not in body

    def test_markup_characters_escaped_once(self):
        """XML specials in text arrive escaped once, never twice."""
        fragment = render(Text("a < b & c > d\n"))
        body = build_request([fragment], Mode.NORMAL).decode("utf-8")
        assert "<text>a &lt; b &amp; c &gt; d\n</text>" in body
        assert "&amp;lt;" not in body
        assert "&amp;amp;" not in body

    def test_literal_entity_text_survives(self):
        """Text that itself looks like an entity keeps its literal form."""
        fragment = render(Text("&lt;"))
        body = build_request([fragment], Mode.NORMAL)
        root = ET.fromstring(body)
        text = root.find(f".//{{{EPOS_NS}}}text")
        assert text.text == "&lt;"

    def test_printer_sees_original_text(self):
        """Parsing the request gives back the caller's text."""
        original = "Total: {1 5 < 6 & \\x1d\n"
        body = build_request([render(Text(original))], Mode.NORMAL)
        text = ET.fromstring(body).find(f".//{{{EPOS_NS}}}text")
        assert text.text == original

    def test_empty_document(self):
        """An empty document still yields a valid envelope."""
        body = build_request([], Mode.NORMAL)
        root = ET.fromstring(body)
        assert root.find(f".//{{{EPOS_NS}}}epos-print") is not None
