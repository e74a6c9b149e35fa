import pytest

from slotsearch.preprocess import main, parse_line, preprocess
from slotsearch.records import BlockIndex, HashEntry, Metadata, Record

HEADER = "block_time,slot,tx_idx,wallet,direction,coin,a,b,c,d,sig,e,f,g,h\n"


def _row(slot, tx, direction="buy"):
    return f"2024-01-01 00:00:00,{slot},{tx},w,{direction},COIN,1,2,3,4,s,5,6,7,8\n"


def test_parse_line_fields():
    rec = parse_line(_row(42, 9, "sell"))
    assert (rec.slot, rec.tx_idx, rec.direction) == (42, 9, "sell")
    assert rec.consumed_gas == 8
    assert rec.block_time == "2024-01-01 00:00:00"


def test_parse_line_too_few_fields():
    with pytest.raises(ValueError):
        parse_line("a,b,c\n")


def test_parse_line_bad_number():
    with pytest.raises(ValueError):
        parse_line(_row("x", 1))


def test_preprocess_writes_files(tmp_path):
    csv = tmp_path / "in.csv"
    csv.write_text(HEADER + _row(5, 1) + _row(3, 2) + _row(8, 3))
    meta = preprocess(csv, tmp_path)
    assert (meta.record_count, meta.block_count) == (3, 1)
    assert Metadata.unpack((tmp_path / "metadata.bin").read_bytes()) == meta
    data = (tmp_path / "data.bin").read_bytes()
    size = meta.record_size
    assert len(data) == 3 * size
    assert Record.unpack(data[size:2 * size]).slot == 3
    hashes = (tmp_path / "hash_index.bin").read_bytes()
    assert HashEntry.unpack(hashes[32:48]) == HashEntry(8, 3, 2 * size)
    assert BlockIndex.unpack((tmp_path / "slot_index.bin").read_bytes()) == BlockIndex(3, 8, 0)


def test_main_usage():
    assert main([]) == 1


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.csv")]) == 1