import pytest

from slotsearch.preprocess import preprocess
from slotsearch.records import Record
from slotsearch.server import SearchIndex, encode_response, parse_request

HEADER = "h\n"


def _row(slot, tx, direction):
    return f"2024-01-01 00:00:00,{slot},{tx},w,{direction},COIN,1,2,3,4,s,5,6,7,8\n"


@pytest.fixture
def index(tmp_path):
    csv = tmp_path / "in.csv"
    csv.write_text(HEADER + _row(10, 1, "buy") + _row(10, 2, "sell") + _row(11, 1, "buy"))
    preprocess(csv, tmp_path)
    idx = SearchIndex.open(tmp_path)
    yield idx
    idx.close()


def test_search_by_slot(index):
    assert [r.tx_idx for r in index.search(10, 0, "")] == [1, 2]


def test_search_filters(index):
    assert [r.tx_idx for r in index.search(10, 2, "")] == [2]
    assert [r.direction for r in index.search(10, 0, "buy")] == ["buy"]


def test_search_missing_slot(index):
    assert index.search(99, 0, "") == []


def test_parse_request_full():
    req = parse_request(b"client_pid=12&slot=5&tx_idx=3&direction=sell\0junk")
    assert tuple(req) == (12, 5, 3, "sell")


def test_parse_request_empty_direction():
    assert parse_request("client_pid=1&slot=2&tx_idx=0&direction=").direction == ""


def test_parse_request_malformed():
    with pytest.raises(ValueError):
        parse_request("nothing")


def test_encode_response():
    assert encode_response([]) == b"\0\0\0\0"
    rec = Record(slot=4)
    data = encode_response([rec])
    assert data[:4] == b"\x01\0\0\0"
    assert Record.unpack(data[4:]) == rec