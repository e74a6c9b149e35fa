"""Search server answering slot queries over named pipes."""

from __future__ import annotations

import os
import re
import struct
import sys
from pathlib import Path
from typing import BinaryIO, Iterable, NamedTuple

from .records import (
    BLOCK_SIZE,
    DATA_FILE,
    METADATA_FILE,
    REQUEST_PIPE,
    RESPONSE_PIPE_TEMPLATE,
    SLOT_INDEX_FILE,
    BlockIndex,
    Metadata,
    Record,
)

_REQUEST_RE = re.compile(
    r"client_pid=(-?\d+)(?:&slot=(\d+)(?:&tx_idx=(\d+)(?:&direction=(\S{0,4}))?)?)?"
)


class Request(NamedTuple):
    client_pid: int
    slot: int
    tx_idx: int
    direction: str


class SearchIndex:
    """Block index over a preprocessed data file."""

    def __init__(self, meta: Metadata, blocks: list[BlockIndex], data: BinaryIO):
        self.meta = meta
        self.blocks = blocks
        self._data = data

    @classmethod
    def open(cls, directory) -> SearchIndex:
        base = Path(directory)
        meta = Metadata.unpack((base / METADATA_FILE).read_bytes()[: Metadata.STRUCT.size])
        raw = (base / SLOT_INDEX_FILE).read_bytes()
        size = BlockIndex.STRUCT.size
        blocks = [
            BlockIndex.unpack(raw[i * size:(i + 1) * size]) for i in range(meta.block_count)
        ]
        return cls(meta, blocks, open(base / DATA_FILE, "rb"))

    def search(self, slot: int, tx_idx: int = 0, direction: str = "") -> list[Record]:
        """Records with the given slot; tx_idx 0 and empty direction match anything."""
        results = []
        size = self.meta.record_size
        last = len(self.blocks) - 1
        for i, block in enumerate(self.blocks):
            if not block.min_slot <= slot <= block.max_slot:
                continue
            count = self.meta.record_count % BLOCK_SIZE if i == last else BLOCK_SIZE
            self._data.seek(block.offset)
            raw = self._data.read(count * size)
            for start in range(0, len(raw) - size + 1, size):
                rec = Record.unpack(raw[start:start + size])
                if (rec.slot == slot
                        and (tx_idx == 0 or rec.tx_idx == tx_idx)
                        and (not direction or rec.direction == direction)):
                    results.append(rec)
        return results

    def close(self) -> None:
        self._data.close()

    def __enter__(self) -> SearchIndex:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def parse_request(request) -> Request:
    """Parse ``client_pid=X&slot=Y&tx_idx=Z&direction=A``; raise ValueError if no pid."""
    if isinstance(request, bytes):
        request = request.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    match = _REQUEST_RE.match(request)
    if not match:
        raise ValueError(f"malformed request: {request!r}")
    pid, slot, tx_idx, direction = match.groups()
    return Request(int(pid), int(slot or 0), int(tx_idx or 0), direction or "")


def encode_response(records: Iterable[Record]) -> bytes:
    items = list(records)
    return struct.pack("<i", len(items)) + b"".join(r.pack() for r in items)


def serve(index: SearchIndex, request_pipe=REQUEST_PIPE) -> None:
    """Answer requests on the request pipe until interrupted."""
    if not os.path.exists(request_pipe):
        os.mkfifo(request_pipe, 0o666)
    while True:
        with open(request_pipe, "rb") as pipe:
            raw = pipe.read(256)
        try:
            req = parse_request(raw)
        except ValueError:
            continue
        results = index.search(req.slot, req.tx_idx, req.direction)
        with open(RESPONSE_PIPE_TEMPLATE.format(pid=req.client_pid), "wb") as out:
            out.write(encode_response(results))


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    directory = args[0] if args else "."
    with SearchIndex.open(directory) as index:
        print(f"Search Server Started (PID: {os.getpid()})")
        used = len(index.blocks) * BlockIndex.STRUCT.size / (1024.0 * 1024.0)
        print(f"Memory usage: {used:.2f} MB")
        try:
            serve(index, REQUEST_PIPE)
        except KeyboardInterrupt:
            print("\nCleaning up resources...")
        finally:
            if os.path.exists(REQUEST_PIPE):
                os.unlink(REQUEST_PIPE)
    return 0


if __name__ == "__main__":
    sys.exit(main())