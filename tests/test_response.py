import json
from dataclasses import dataclass

import pytest
from pydantic import BaseModel, Field

from ubersmith.errors import DecodeError
from ubersmith.response import INTERNAL_ERROR_CODE, Response

ENVELOPE = {
    "status": True,
    "error_code": 0,
    "error_message": "",
    "data": {"a": {"b": [10, 20, 30]}},
}


class Person(BaseModel):
    full_name: str = Field("", alias="name")
    email: str = ""


@dataclass
class Ticket:
    subject: str = ""
    priority: int = 0


def _response(data) -> Response:
    body = dict(ENVELOPE, data=data)
    return Response.from_body(json.dumps(body))


def test_from_body_parses_envelope_fields():
    r = Response.from_body(json.dumps(ENVELOPE), http_status=200)
    assert r.status is True
    assert r.ok is True
    assert r.error_code == 0
    assert r.error_message == ""
    assert r.http_status == 200
    assert r.decode_error is None
    assert json.loads(r.raw_data) == {"a": {"b": [10, 20, 30]}}


def test_from_body_remote_error_is_parsed_normally():
    body = {"status": False, "error_code": 1, "error_message": "Invalid client_id", "data": None}
    r = Response.from_body(json.dumps(body))
    assert r.status is False
    assert r.error_code == 1
    assert r.error_message == "Invalid client_id"
    assert r.raw_data == "null"
    assert r.key("anything") is None


def test_from_body_without_data_member_has_no_payload():
    r = Response.from_body('{"status": true}')
    assert r.status is True
    assert r.raw_data is None
    assert r.data() is None


@pytest.mark.parametrize("body", [b"<html>oops</html>", b"", b"[1, 2]", b'{"status": "maybe"}'])
def test_from_body_malformed_keeps_defaults_and_records_decode_error(body):
    r = Response.from_body(body, http_status=200)
    # Envelope fields stay at their zero values; only `decode_error` tells the cases apart.
    assert r.status is False
    assert r.error_code == 0
    assert r.error_message == ""
    assert r.raw_data is None
    assert r.decode_error
    assert r.http_status == 200


def test_failure_uses_internal_error_code():
    r = Response.failure(ConnectionRefusedError("connection refused"))
    assert r.status is False
    assert r.error_code == INTERNAL_ERROR_CODE
    assert r.error_message == "connection refused"
    assert r.raw_data is None


def test_failure_message_falls_back_to_exception_name():
    r = Response.failure(TimeoutError())
    assert r.error_message == "TimeoutError"


def test_key_examples():
    r = Response.from_body(json.dumps(ENVELOPE))
    assert r.key("a.b.1") == 20
    assert r.key("a.b.5") is None
    assert r.key("a.c") is None
    assert r.key("a.b.x") == 10


def test_key_reparses_payload_on_every_call():
    r = Response.from_body(json.dumps(ENVELOPE))
    first = r.key("a.b")
    first.append(40)
    assert r.key("a.b") == [10, 20, 30]


def test_key_on_array_payload_returns_none():
    r = _response([{"a": 1}])
    assert r.key("0") is None
    assert r.key("0.a") is None


def test_response_is_immutable():
    r = Response.from_body(json.dumps(ENVELOPE))
    with pytest.raises(ValueError):
        r.status = False


def test_load_populates_model_by_alias_and_ignores_extra_fields():
    r = _response({"name": "Alice", "unknown": [1, 2]})
    person = r.load(Person)
    assert person.full_name == "Alice"
    assert person.email == ""


def test_load_into_dataclass_keeps_defaults_for_missing_fields():
    r = _response({"subject": "Disk full", "extra": True})
    assert r.load(Ticket) == Ticket(subject="Disk full", priority=0)


def test_load_into_list_type():
    r = _response([{"name": "A"}, {"name": "B"}])
    people = r.load(list[Person])
    assert [p.full_name for p in people] == ["A", "B"]


def test_load_object_expected_but_array_found_raises():
    r = _response([1, 2, 3])
    with pytest.raises(DecodeError, match="Person"):
        r.load(Person)


def test_load_without_payload_raises():
    r = Response.failure(RuntimeError("boom"))
    with pytest.raises(DecodeError):
        r.load(Person)


@pytest.mark.parametrize(
    "body",
    [
        b'{"status": "true", "error_code": "7"}',
        b'{"status": true, "error_code": 7.0}',
        b'{"status": 1}',
        b'{"status": true, "error_message": 404}',
    ],
)
def test_from_body_rejects_loosely_typed_envelope_fields(body):
    r = Response.from_body(body)
    assert r.status is False
    assert r.error_code == 0
    assert r.decode_error


def test_from_body_allows_null_envelope_fields():
    r = Response.from_body(b'{"status": true, "error_code": null, "error_message": null, "data": 1}')
    assert r.status is True
    assert r.error_code == 0
    assert r.error_message == ""
    assert r.decode_error is None


def test_raw_data_is_the_payload_exactly_as_sent():
    body = b'{"status": true, "data": {"x": 1e400, "y": 1.50,\n "z": "\\u00e9"}, "error_code": 0}'
    r = Response.from_body(body)
    assert r.raw_data == '{"x": 1e400, "y": 1.50,\n "z": "\\u00e9"}'
    assert r.key("y") == 1.5
    assert r.key("z") == "é"


def test_load_null_payload_gives_defaults():
    r = Response.from_body(b'{"status": true, "data": null}')
    assert r.load(Person) == Person()
    assert r.load(Ticket) == Ticket()
    assert r.load(list[Person]) == []
    assert r.load(Person | None) is None


def test_load_null_payload_into_model_with_required_fields_raises():
    class Strict(BaseModel):
        client_id: int

    r = Response.from_body(b'{"status": true, "data": null}')
    with pytest.raises(DecodeError, match="Strict"):
        r.load(Strict)
