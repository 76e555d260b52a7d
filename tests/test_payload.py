import pytest

from tripimport.core.errors import MalformedProviderPayload
from tripimport.validation.payload import (
    INVALID_SHAPE_MESSAGE,
    find_duplicate_locations,
    parse_generated_payload,
    reject_duplicate_locations,
    require_items,
)


def test_parse_generated_string():
    assert parse_generated_payload('{"items": []}') == {"items": []}


def test_parse_generated_structured_value_passes_through():
    value = {"items": [{"id": "1"}]}

    assert parse_generated_payload(value) is value


@pytest.mark.parametrize("text", ["", "not json", "{'items': []}"])
def test_parse_generated_rejects_bad_json(text):
    with pytest.raises(MalformedProviderPayload):
        parse_generated_payload(text)


def test_require_items_returns_same_list():
    items = [{"id": "1"}]

    assert require_items({"items": items, "note": "ignored"}) is items


@pytest.mark.parametrize("result", [None, [], "items", {}, {"items": "x"}, {"items": {"0": {}}}])
def test_require_items_rejects_wrong_shapes(result):
    with pytest.raises(MalformedProviderPayload) as excinfo:
        require_items(result)

    assert excinfo.value.message == INVALID_SHAPE_MESSAGE
    assert excinfo.value.status_code == 500


def test_duplicate_locations_ignore_case_and_spacing():
    items = [
        {"location": "Pastéis de Belém, Rua de Belém 84"},
        {"location": "pastéis de belém,  rua de belém 84"},
        {"location": "LX Factory, Rua Rodrigues de Faria 103"},
    ]

    assert find_duplicate_locations(items) == ["pastéis de belém, rua de belém 84"]


def test_blank_and_missing_locations_are_not_duplicates():
    items = [{"location": ""}, {"location": "  "}, {}, {"location": None}, "not-an-item"]

    assert find_duplicate_locations(items) == []


def test_each_duplicate_reported_once():
    items = [{"location": "A"}, {"location": "a"}, {"location": "A "}]

    assert find_duplicate_locations(items) == ["a"]


def test_reject_duplicate_locations():
    reject_duplicate_locations([{"location": "A"}, {"location": "B"}])

    with pytest.raises(MalformedProviderPayload):
        reject_duplicate_locations([{"location": "A"}, {"location": "a"}])
