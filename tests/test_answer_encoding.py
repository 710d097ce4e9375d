import pytest

from app.answer_encoding import decode_selected_options, encode_selected_options


def test_encode_joins_ids_in_order():
    assert encode_selected_options([7, 3, 12]) == "7,3,12"


@pytest.mark.parametrize("empty", [None, []])
def test_empty_selection_encodes_to_none(empty):
    assert encode_selected_options(empty) is None


@pytest.mark.parametrize("stored", [None, ""])
def test_empty_field_decodes_to_no_ids(stored):
    assert decode_selected_options(stored) == []


def test_decode_parses_integers():
    assert decode_selected_options("5,1,42") == [5, 1, 42]


@pytest.mark.parametrize("ids", [[1], [4, 2, 9], [10, 10, 3]])
def test_round_trip_preserves_order(ids):
    assert decode_selected_options(encode_selected_options(ids)) == ids
