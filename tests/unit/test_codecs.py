from __future__ import annotations

import json

import pytest

from serialbench.codecs import Codec, JsonCodec, ProtobufCodec, XmlCodec
from serialbench.codecs.xml_codec import dict_to_xml, xml_to_dict
from serialbench.infrastructure.schema import SchemaViolation


@pytest.fixture
def codecs(employee_schema):
    return [JsonCodec(), XmlCodec(), ProtobufCodec(employee_schema)]


def test_codecs_satisfy_protocol(codecs):
    for codec in codecs:
        assert isinstance(codec, Codec)


def test_every_codec_decodes_its_own_output(codecs, payload):
    for codec in codecs:
        data = codec.encode(payload)
        assert isinstance(data, bytes)
        assert isinstance(codec.decode(data), dict)


class TestJsonCodec:
    def test_round_trip_is_exact(self, payload):
        codec = JsonCodec()
        assert codec.decode(codec.encode(payload)) == payload

    def test_output_is_compact(self, payload):
        data = JsonCodec().encode(payload)
        assert data.startswith(b'{"employee":[{"id":1,"name":"Ali","salary":9000,')
        assert b" " not in data.replace(b"Spring Boot", b"")

    def test_indented_variant_is_larger_and_equivalent(self, payload):
        codec = JsonCodec()
        compact = codec.encode(payload)
        indented = codec.encode_indented(payload, indent=2)
        assert len(indented) > len(compact)
        assert json.loads(indented) == payload

    def test_encoding_is_deterministic(self, payload):
        codec = JsonCodec()
        assert codec.encode(payload) == codec.encode(payload)


class TestXmlCodec:
    def test_output_is_wrapped_in_root_container(self, payload):
        data = XmlCodec().encode(payload)
        assert data.startswith(b"<root>\n<employee><id>1</id><name>Ali</name>")
        assert data.endswith(b"</employee>\n</root>")

    def test_converter_emits_only_inner_elements(self, payload):
        inner = dict_to_xml(payload)
        assert inner.startswith("<employee>")
        assert "<root>" not in inner
        assert inner.count("<employee>") == 3

    def test_lists_become_repeated_elements(self, payload):
        inner = dict_to_xml(payload)
        assert "<skills>JavaScript</skills><skills>Node.js</skills><skills>React</skills>" in inner
        assert "<is_active>true</is_active>" in inner
        assert "<is_active>false</is_active>" in inner

    def test_decode_returns_strings_under_root(self, payload):
        codec = XmlCodec()
        decoded = codec.decode(codec.encode(payload))
        employees = decoded["root"]["employee"]
        assert len(employees) == 3
        assert employees[0]["id"] == "1"
        assert employees[0]["salary"] == "9000"
        assert employees[0]["is_active"] == "true"
        assert employees[2]["skills"] == ["Java", "Spring Boot", "Kubernetes", "gRPC"]

    def test_single_item_list_collapses_to_scalar(self):
        decoded = xml_to_dict(XmlCodec().encode({"employee": [{"id": 4, "skills": ["Go"]}]}))
        assert decoded == {"root": {"employee": {"id": "4", "skills": "Go"}}}

    def test_special_characters_are_escaped(self):
        codec = XmlCodec()
        data = codec.encode({"employee": [{"name": "R&D <team>"}]})
        assert b"R&amp;D &lt;team&gt;" in data
        assert codec.decode(data)["root"]["employee"]["name"] == "R&D <team>"


class TestProtobufCodec:
    def test_first_record_identity_survives(self, employee_schema, payload):
        codec = ProtobufCodec(employee_schema)
        decoded = codec.decode(codec.encode(payload))
        assert decoded["employee"][0]["id"] == 1
        assert decoded["employee"][0]["name"] == "Ali"

    def test_encoding_is_deterministic(self, employee_schema, payload):
        codec = ProtobufCodec(employee_schema)
        assert codec.encode(payload) == codec.encode(payload)

    def test_binary_is_smallest(self, codecs, payload):
        sizes = {codec.name: len(codec.encode(payload)) for codec in codecs}
        assert sizes["protobuf"] < sizes["json"] < sizes["xml"]

    def test_validate_is_result_not_exception(self, employee_schema, payload):
        payload["employee"][1]["is_active"] = 1
        result = ProtobufCodec(employee_schema).validate(payload)
        assert not result.ok
        assert result.error == "employee[1].is_active: boolean expected"

    def test_encode_rejects_string_in_repeated_field(self, employee_schema):
        codec = ProtobufCodec(employee_schema)
        with pytest.raises(SchemaViolation, match=r"employee\[0\]\.skills: array expected"):
            codec.encode({"employee": [{"id": 1, "name": "Ali", "skills": "abc"}]})

    def test_encode_rejects_invalid_sample_record(self, employee_schema, payload):
        payload["employee"][2]["is_active"] = "no"
        with pytest.raises(SchemaViolation, match="boolean expected"):
            ProtobufCodec(employee_schema).encode(payload)

    def test_text_codecs_accept_anything(self, payload):
        payload["employee"][0]["id"] = "not-a-number"
        assert JsonCodec().validate(payload).ok
        assert XmlCodec().validate(payload).ok

    def test_defaults_to_employees_schema(self):
        assert ProtobufCodec().schema.name == "Employees"
