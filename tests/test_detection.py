"""
Tests for auto-detection of pre-serialized XML/JSON results.
"""

import json
from xml.dom import minidom

from sqlexport.core.rows import ResultSet
from sqlexport.export.detection import detect_and_encode, pretty_xml
from sqlexport.export.settings import CsvSettings, JsonSettings, OutputSettings


class TestDetectAndEncode:
    """Tests for the detection order and fallbacks."""

    def test_xml_detected(self):
        outcome = detect_and_encode(ResultSet([{"XML_F52E": "<a><b>1</b></a>"}]))
        assert outcome.format == "XML"
        assert outcome.kind == "xml"
        assert outcome.extension == "xml"
        assert outcome.text == "<a>\n  <b>1</b>\n</a>\n"

    def test_xml_split_across_rows(self):
        rows = ResultSet([{"x": "<items><item id=\"1\"/>"}, {"x": "<item id=\"2\"/></items>"}])
        outcome = detect_and_encode(rows)
        assert outcome.format == "XML"
        document = minidom.parseString(outcome.text)
        assert len(document.getElementsByTagName("item")) == 2

    def test_xml_declaration_kept(self):
        outcome = detect_and_encode(ResultSet([{"x": '<?xml version="1.0"?><a/>'}]))
        assert outcome.format == "XML"
        assert outcome.text.startswith("<?xml")

    def test_json_detected(self):
        outcome = detect_and_encode(ResultSet([{"JSON_F52E": '{"x":1}'}]))
        assert outcome.format == "JSON"
        assert outcome.kind == "json"
        assert json.loads(outcome.text) == {"x": 1}

    def test_json_indentation_follows_settings(self):
        settings = OutputSettings(json=JsonSettings(write_indented=False))
        outcome = detect_and_encode(ResultSet([{"j": '{ "x" :1 }'}]), settings)
        assert outcome.text == '{"x": 1}\n'

    def test_json_split_across_rows(self):
        rows = ResultSet([{"j": '[{"id":1},'}, {"j": '{"id":2}]'}])
        outcome = detect_and_encode(rows)
        assert outcome.format == "JSON"
        assert json.loads(outcome.text) == [{"id": 1}, {"id": 2}]

    def test_plain_text_falls_back_to_csv(self):
        outcome = detect_and_encode(ResultSet([{"value": "not json or xml"}]))
        assert outcome.format == "CSV"
        assert outcome.kind == "delimited"
        assert outcome.text == "value\nnot json or xml\n"

    def test_broken_xml_falls_back_to_csv(self):
        outcome = detect_and_encode(ResultSet([{"value": "<a><b></a>"}]))
        assert outcome.format == "CSV"
        assert outcome.warnings
        assert "XML" in outcome.warnings[0]

    def test_xml_fragments_without_root_fall_back(self):
        outcome = detect_and_encode(ResultSet([{"value": "<row/><row/>"}]))
        assert outcome.format == "CSV"

    def test_broken_json_falls_back_to_csv(self):
        outcome = detect_and_encode(ResultSet([{"value": "[1, 2"}]))
        assert outcome.format == "CSV"
        assert outcome.text == 'value\n"[1, 2"\n'

    def test_non_finite_json_literals_fall_back_to_csv(self):
        outcome = detect_and_encode(ResultSet([{"value": "[NaN, Infinity]"}]))
        assert outcome.format == "CSV"
        assert outcome.text == 'value\n"[NaN, Infinity]"\n'
        assert outcome.warnings

    def test_multi_column_is_csv(self):
        outcome = detect_and_encode(ResultSet([{"a": "<x/>", "b": 1}]))
        assert outcome.format == "CSV"

    def test_empty_rows(self):
        outcome = detect_and_encode(ResultSet())
        assert outcome.format == "CSV"
        assert outcome.text == ""

    def test_csv_settings_applied_on_fallback(self):
        settings = OutputSettings(csv=CsvSettings(header=False))
        outcome = detect_and_encode(ResultSet([{"a": 1, "b": 2}]), settings)
        assert outcome.text == "1,2\n"

    def test_null_values_treated_as_empty(self):
        rows = ResultSet([{"x": "<a>"}, {"x": None}, {"x": "</a>"}])
        assert detect_and_encode(rows).format == "XML"


class TestPrettyXml:
    def test_whitespace_normalized(self):
        assert pretty_xml("<a>\n   <b>1</b>\n</a>") == "<a>\n  <b>1</b>\n</a>\n"

    def test_nested_elements_indented(self):
        assert pretty_xml("<a><b><c>1</c></b><d/></a>") == "<a>\n  <b>\n    <c>1</c>\n  </b>\n  <d/>\n</a>\n"

    def test_mixed_content_unchanged(self):
        source = "<p>Hello <b>world</b> again</p>"
        text = pretty_xml(source)
        assert text == source + "\n"
        parsed = minidom.parseString(text)
        assert parsed.documentElement.toxml() == source

    def test_mixed_content_inside_indented_parent(self):
        text = pretty_xml("<doc><p>Hello <b>world</b> again</p><q>x</q></doc>")
        assert text == "<doc>\n  <p>Hello <b>world</b> again</p>\n  <q>x</q>\n</doc>\n"

    def test_preserved_space_untouched(self):
        source = '<doc><pre xml:space="preserve">\n  <i>x</i>\n</pre></doc>'
        text = pretty_xml(source)
        assert '<pre xml:space="preserve">\n  <i>x</i>\n</pre>' in text

    def test_cdata_kept(self):
        text = pretty_xml("<a><![CDATA[1 < 2]]></a>")
        assert text == "<a><![CDATA[1 < 2]]></a>\n"

    def test_declaration_kept_only_when_present(self):
        assert pretty_xml('<?xml version="1.0"?><a/>').startswith("<?xml")
        assert pretty_xml("<a/>") == "<a/>\n"
