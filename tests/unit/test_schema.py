from __future__ import annotations

import pydantic
import pytest

from serialbench.domain import Employee
from serialbench.infrastructure.schema import (
    SchemaViolation,
    available_schemas,
    load_schema,
)

EMPLOYEE_FIELDS = ["id", "name", "salary", "email", "hire_date", "skills", "is_active"]


def test_load_schema_is_cached():
    assert load_schema("Employees") is load_schema("Employees")
    assert available_schemas() == ["Employees"]


def test_load_schema_rejects_unknown_name():
    with pytest.raises(KeyError, match="Unknown schema 'Staff'"):
        load_schema("Staff")


def test_schema_declares_expected_fields(employee_schema):
    assert employee_schema.field_names() == ["employee"]
    assert employee_schema.field_names("Employee") == EMPLOYEE_FIELDS
    skills = employee_schema.fields("Employee")[5]
    assert skills.repeated and not skills.is_message


def test_sample_payload_passes_verification(employee_schema, payload):
    assert employee_schema.verify(payload) is None
    result = employee_schema.validate(payload)
    assert result.ok
    assert result.error is None


@pytest.mark.parametrize(
    "field, value, expected",
    [
        ("id", "1", "employee[0].id: integer expected"),
        ("id", 2**31, "employee[0].id: integer out of int32 range"),
        ("salary", True, "employee[0].salary: number expected"),
        ("name", 42, "employee[0].name: string expected"),
        ("skills", "JavaScript", "employee[0].skills: array expected"),
        ("skills", ["JavaScript", 7], "employee[0].skills[1]: string expected"),
        ("is_active", "yes", "employee[0].is_active: boolean expected"),
    ],
)
def test_verify_reports_first_mismatch(employee_schema, payload, field, value, expected):
    payload["employee"][0][field] = value
    assert employee_schema.verify(payload) == expected
    result = employee_schema.validate(payload)
    assert not result.ok
    assert result.error == expected


def test_verify_rejects_non_object_root_and_records(employee_schema):
    assert employee_schema.verify([]) == "Employees: object expected"
    assert employee_schema.verify({"employee": [1]}) == "employee[0]: object expected"
    assert employee_schema.verify({"employee": {}}) == "employee: array expected"


def test_verify_allows_missing_and_unknown_fields(employee_schema):
    assert employee_schema.verify({}) is None
    assert employee_schema.verify({"employee": [{"id": 7, "nickname": "x"}]}) is None


def test_encode_decode_normalizes_types(employee_schema, payload):
    decoded = employee_schema.decode(employee_schema.encode(payload))

    first = decoded["employee"][0]
    assert first["id"] == 1
    assert first["name"] == "Ali"
    assert isinstance(first["salary"], float)
    assert first["salary"] == 9000.0
    assert first["skills"] == ["JavaScript", "Node.js", "React"]
    # proto3 default values are still emitted
    assert decoded["employee"][2]["is_active"] is False
    assert list(first) == EMPLOYEE_FIELDS


def test_create_raises_schema_violation_for_rejected_value(employee_schema):
    with pytest.raises(SchemaViolation):
        employee_schema.encode({"employee": [{"id": "not-a-number"}]})


def test_schema_violation_is_value_error():
    assert issubclass(SchemaViolation, ValueError)


def test_employee_model_rejects_malformed_hire_date():
    with pytest.raises(pydantic.ValidationError):
        Employee(id=9, name="X", salary=1, email="x@example.com", hire_date="15/01/2020")
