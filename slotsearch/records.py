"""Fixed-size binary record formats shared by the preprocessor, server and client."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

DATA_FILE = "data.bin"
HASH_INDEX_FILE = "hash_index.bin"
SLOT_INDEX_FILE = "slot_index.bin"
METADATA_FILE = "metadata.bin"
HASH_SIZE = 2_000_000
MAX_MEMORY = 10 * 1024 * 1024
REQUEST_PIPE = "/tmp/search_request"
RESPONSE_PIPE_TEMPLATE = "/tmp/search_response_{pid}"
BLOCK_SIZE = 1000


def _encode(text: str, size: int) -> bytes:
    """Encode text into a NUL-terminated field of ``size`` bytes."""
    return text.encode("utf-8")[: size - 1]


def _decode(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass
class Record:
    """One trade row as stored in the data file."""

    block_time: str = ""
    slot: int = 0
    tx_idx: int = 0
    signing_wallet: str = ""
    direction: str = ""
    base_coin: str = ""
    base_coin_amount: int = 0
    quote_coin_amount: int = 0
    virtual_token_balance_after: int = 0
    virtual_sol_balance_after: int = 0
    signature: str = ""
    provided_gas_fee: int = 0
    provided_gas_limit: int = 0
    fee: int = 0
    consumed_gas: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<20sII50s5s100s1xQQQQ100s4xQQQQ")

    def pack(self) -> bytes:
        return self.STRUCT.pack(
            _encode(self.block_time, 20),
            self.slot,
            self.tx_idx,
            _encode(self.signing_wallet, 50),
            _encode(self.direction, 5),
            _encode(self.base_coin, 100),
            self.base_coin_amount,
            self.quote_coin_amount,
            self.virtual_token_balance_after,
            self.virtual_sol_balance_after,
            _encode(self.signature, 100),
            self.provided_gas_fee,
            self.provided_gas_limit,
            self.fee,
            self.consumed_gas,
        )

    @classmethod
    def unpack(cls, data: bytes) -> Record:
        (bt, slot, tx, wallet, direction, coin, a, b, c, d, sig, e, f, g, h) = cls.STRUCT.unpack(
            bytes(data)
        )
        return cls(
            _decode(bt), slot, tx, _decode(wallet), _decode(direction), _decode(coin),
            a, b, c, d, _decode(sig), e, f, g, h,
        )


@dataclass
class HashEntry:
    """Maps a (slot, tx_idx) pair to a byte offset in the data file."""

    slot: int = 0
    tx_idx: int = 0
    offset: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIq")

    def pack(self) -> bytes:
        return self.STRUCT.pack(self.slot, self.tx_idx, self.offset)

    @classmethod
    def unpack(cls, data: bytes) -> HashEntry:
        return cls(*cls.STRUCT.unpack(bytes(data)))


@dataclass
class BlockIndex:
    """Slot range covered by one block of records and the block's offset."""

    min_slot: int = 0
    max_slot: int = 0
    offset: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIq")

    def pack(self) -> bytes:
        return self.STRUCT.pack(self.min_slot, self.max_slot, self.offset)

    @classmethod
    def unpack(cls, data: bytes) -> BlockIndex:
        return cls(*cls.STRUCT.unpack(bytes(data)))


@dataclass
class Metadata:
    """Summary of a preprocessed data set."""

    record_count: int = 0
    block_count: int = 0
    record_size: int = Record.STRUCT.size

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIQ")

    def pack(self) -> bytes:
        return self.STRUCT.pack(self.record_count, self.block_count, self.record_size)

    @classmethod
    def unpack(cls, data: bytes) -> Metadata:
        return cls(*cls.STRUCT.unpack(bytes(data)))