import struct

import pytest

from slotsearch.records import BlockIndex, HashEntry, Metadata, Record


def _sample():
    return Record(
        block_time="2024-01-01 00:00:00", slot=7, tx_idx=3, signing_wallet="walletA",
        direction="buy", base_coin="COIN", base_coin_amount=10, quote_coin_amount=20,
        virtual_token_balance_after=30, virtual_sol_balance_after=40, signature="sigX",
        provided_gas_fee=1, provided_gas_limit=2, fee=3, consumed_gas=4,
    )


def test_record_round_trip():
    rec = _sample()
    assert Record.unpack(rec.pack()) == rec


def test_record_size_matches_layout():
    assert len(_sample().pack()) == 352


def test_record_truncates_long_strings():
    rec = Record(direction="sellx", block_time="x" * 40)
    back = Record.unpack(rec.pack())
    assert back.direction == "sell"
    assert back.block_time == "x" * 19


def test_small_structs_round_trip():
    assert HashEntry.unpack(HashEntry(1, 2, 352).pack()) == HashEntry(1, 2, 352)
    assert BlockIndex.unpack(BlockIndex(5, 9, 704).pack()) == BlockIndex(5, 9, 704)
    meta = Metadata(3, 1)
    assert Metadata.unpack(meta.pack()) == meta
    assert meta.record_size == len(_sample().pack())


def test_unpack_wrong_length():
    with pytest.raises(struct.error):
        Record.unpack(b"\0" * 10)