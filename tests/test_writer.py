"""Tests for writer.py -- fixed-option YAML serialization."""

import io
from unittest.mock import patch

import pytest
import yaml

from config_snapshot.errors import EmissionError
from config_snapshot.model import Mapping, Scalar, ScalarFormat, Sequence
from config_snapshot.projection import assemble_document
from config_snapshot.writer import serialize_document, write_document


class TestSerializeDocument:
    """Tests for serialize_document()."""

    def test_simple_document_bytes(self):
        doc = assemble_document(
            [
                (
                    "server",
                    Mapping.of(
                        {
                            "port": Scalar("8080", ScalarFormat.NUMBER, raw=True),
                            "host": Scalar("localhost"),
                        }
                    ),
                )
            ]
        )
        assert serialize_document(doc) == (
            b'server:\n  host: "localhost"\n  port: 8080\n'
        )

    def test_empty_document(self):
        data = serialize_document(assemble_document([]))
        assert yaml.safe_load(data) == {}

    def test_literal_block_preserves_newlines(self):
        doc = assemble_document(
            [("motd", Scalar("line one\nline two", ScalarFormat.MULTILINE_STRING))]
        )
        data = serialize_document(doc)
        assert b"motd: |" in data
        assert yaml.safe_load(data) == {"motd": "line one\nline two"}

    def test_quoted_strings_stay_strings(self):
        """Reserved tokens survive as strings because they are quoted."""
        doc = assemble_document(
            [
                (
                    "flags",
                    Mapping.of(
                        {"a": Scalar("true"), "b": Scalar("123"), "c": Scalar("null")}
                    ),
                )
            ]
        )
        assert yaml.safe_load(serialize_document(doc)) == {
            "flags": {"a": "true", "b": "123", "c": "null"}
        }

    def test_raw_values_load_as_typed(self):
        doc = assemble_document(
            [
                (
                    "typed",
                    Mapping.of(
                        {
                            "count": Scalar("3", ScalarFormat.NUMBER, raw=True),
                            "ratio": Scalar("0.5", ScalarFormat.FLOATING, raw=True),
                            "enabled": Scalar("true", ScalarFormat.BOOLEAN, raw=True),
                        }
                    ),
                )
            ]
        )
        assert yaml.safe_load(serialize_document(doc)) == {
            "typed": {"count": 3, "enabled": True, "ratio": 0.5}
        }

    def test_block_sequences(self):
        doc = assemble_document(
            [("items", Sequence.of([Scalar("a", raw=True), Scalar("b", raw=True)]))]
        )
        data = serialize_document(doc)
        assert b"[" not in data
        assert yaml.safe_load(data) == {"items": ["a", "b"]}

    def test_utf8_output_unescaped(self):
        doc = assemble_document([("greeting", Scalar("héllo"))])
        data = serialize_document(doc)
        assert "héllo".encode("utf-8") in data

    def test_long_lines_split(self):
        text = " ".join(["word"] * 40)
        doc = assemble_document([("long", Scalar(text))])
        data = serialize_document(doc, width=40)
        assert data.count(b"\n") > 1
        assert yaml.safe_load(data) == {"long": text}

    def test_yaml_error_becomes_emission_error(self):
        doc = assemble_document([("k", Scalar("v"))])
        with patch(
            "config_snapshot.writer.yaml.serialize",
            side_effect=yaml.YAMLError("emitter broke"),
        ):
            with pytest.raises(EmissionError, match="emitter broke"):
                serialize_document(doc)


class TestWriteDocument:
    """Tests for write_document()."""

    def test_writes_to_stream(self):
        doc = assemble_document([("k", Scalar("v", raw=True))])
        buf = io.BytesIO()
        count = write_document(doc, buf)
        assert buf.getvalue() == b"k: v\n"
        assert count == len(b"k: v\n")

    def test_stream_error_becomes_emission_error(self):
        class BrokenStream(io.BytesIO):
            def write(self, data):
                raise OSError("disk full")

        doc = assemble_document([("k", Scalar("v"))])
        with pytest.raises(EmissionError, match="disk full"):
            write_document(doc, BrokenStream())
