"""
Tests del codec Employee <-> documento Redis
"""
import json

import pytest

from employee_cache.exceptions import DeserializationError
from employee_cache.utils.employee_codec import EmployeeCodec
from tests.conftest import make_employee


@pytest.fixture
def codec():
    return EmployeeCodec("employee:")


def test_key_scheme_uses_prefix():
    codec = EmployeeCodec("emp:")
    assert codec.key_for("42") == "emp:42"


def test_encode_omits_missing_email(codec):
    doc = codec.encode(make_employee("1", "Alice", 50000))
    assert doc == {"id": "1", "name": "Alice", "salary": 50000, "age": 30, "title": "Engineer"}


def test_decode_accepts_dict_string_and_json_path_list(codec):
    employee = make_employee("1", "Alice", 50000, email="alice@example.com")
    doc = codec.encode(employee)

    assert codec.decode(doc) == employee
    assert codec.decode(json.dumps(doc)) == employee
    assert codec.decode([doc]) == employee


def test_decode_invalid_json_raises(codec):
    with pytest.raises(DeserializationError) as exc:
        codec.decode("{not json", key="employee:1")
    assert exc.value.key == "employee:1"


def test_decode_missing_required_field_raises(codec):
    with pytest.raises(DeserializationError):
        codec.decode({"id": "1", "name": "Alice"})


def test_try_decode_returns_none_instead_of_raising(codec):
    assert codec.try_decode(None, key="employee:x") is None
    assert codec.try_decode({"id": "1"}, key="employee:1") is None
