"""Convert a CSV export into the binary data and index files."""

from __future__ import annotations

import sys
from pathlib import Path

from .records import (
    BLOCK_SIZE,
    DATA_FILE,
    HASH_INDEX_FILE,
    METADATA_FILE,
    SLOT_INDEX_FILE,
    BlockIndex,
    HashEntry,
    Metadata,
    Record,
)

_FIELD_COUNT = 15


def parse_line(line: str) -> Record:
    """Parse one CSV row into a Record; raise ValueError on malformed rows."""
    fields = line.rstrip("\r\n").split(",")
    if len(fields) < _FIELD_COUNT:
        raise ValueError(f"expected {_FIELD_COUNT} fields, got {len(fields)}")
    (block_time, slot, tx_idx, wallet, direction, coin, base_amt, quote_amt,
     vtoken, vsol, signature, gas_fee, gas_limit, fee, consumed) = fields[:_FIELD_COUNT]
    try:
        return Record(
            block_time=block_time[:19],
            slot=int(slot),
            tx_idx=int(tx_idx),
            signing_wallet=wallet[:49],
            direction=direction[:4],
            base_coin=coin[:99],
            base_coin_amount=int(base_amt),
            quote_coin_amount=int(quote_amt),
            virtual_token_balance_after=int(vtoken),
            virtual_sol_balance_after=int(vsol),
            signature=signature[:99],
            provided_gas_fee=int(gas_fee),
            provided_gas_limit=int(gas_limit),
            fee=int(fee),
            consumed_gas=int(consumed),
        )
    except ValueError as exc:
        raise ValueError(f"invalid numeric field in row: {line!r}") from exc


def preprocess(csv_path, output_dir) -> Metadata:
    """Write data, hash index, slot index and metadata files; return the metadata."""
    out = Path(output_dir)
    meta = Metadata()
    record_size = meta.record_size
    block = BlockIndex()
    offset = 0
    with open(csv_path, encoding="utf-8") as csv, \
            open(out / DATA_FILE, "wb") as data_file, \
            open(out / HASH_INDEX_FILE, "wb") as hash_file, \
            open(out / SLOT_INDEX_FILE, "wb") as slot_file, \
            open(out / METADATA_FILE, "wb") as meta_file:
        next(csv, None)  # header
        for line in csv:
            record = parse_line(line)
            data_file.write(record.pack())
            hash_file.write(HashEntry(record.slot, record.tx_idx, offset).pack())
            if meta.record_count % BLOCK_SIZE == 0:
                if meta.block_count > 0:
                    slot_file.write(block.pack())
                block = BlockIndex(record.slot, record.slot, offset)
                meta.block_count += 1
            else:
                block.min_slot = min(block.min_slot, record.slot)
                block.max_slot = max(block.max_slot, record.slot)
            offset += record_size
            meta.record_count += 1
        slot_file.write(block.pack())
        meta_file.write(meta.pack())
    return meta


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: slotsearch-preprocess <input_csv>")
        return 1
    try:
        meta = preprocess(args[0], ".")
    except OSError as exc:
        print(f"Error opening files: {exc}", file=sys.stderr)
        return 1
    print(f"Preprocessing completed. Records: {meta.record_count}, Blocks: {meta.block_count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())