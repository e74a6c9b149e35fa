# slotsearch

slotsearch turns a CSV export of trades into a set of fixed-size binary files. It then answers queries against those files by slot, transaction index and direction. Queries and answers travel over named pipes (FIFOs), so it runs on POSIX systems only.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Workflow

### 1. Preprocess a CSV file

```
slotsearch-preprocess trades.csv
```

The first line of the CSV is treated as a header and skipped. Every other line must hold at least these 15 comma-separated fields, in this order:

block time, slot, tx index, signing wallet, direction, base coin, base amount, quote amount, virtual token balance after, virtual sol balance after, signature, provided gas fee, provided gas limit, fee, consumed gas.

Text fields are cut to their stored widths: 19 characters for block time, 49 for wallet, 4 for direction, and 99 for base coin and signature. If a numeric field does not parse, the command stops with a `ValueError`.

The command writes four files to the current directory:

| File | Contents |
| --- | --- |
| `data.bin` | the records, each of fixed size |
| `hash_index.bin` | one `(slot, tx_idx, offset)` entry per record |
| `slot_index.bin` | the min/max slot range and offset of each block of 1000 records |
| `metadata.bin` | the record count, the block count and the record size |

When it finishes, it prints the number of records and blocks. If no CSV path is given, it prints a usage line and exits with status 1.

### 2. Start the server

```
slotsearch-server [DIRECTORY]
```

The server loads the metadata and the block index from `DIRECTORY`, which defaults to the current directory. It then listens on the request pipe `/tmp/search_request` and creates that pipe if it is missing. Each request has the form `client_pid=X&slot=Y&tx_idx=Z&direction=A`, and the server ignores requests it cannot parse. It writes each answer to `/tmp/search_response_<client_pid>`.

Stop the server with Ctrl-C (SIGINT). On the way out it closes the data file and removes the request pipe.

### 3. Query with the client

```
slotsearch-client
```

The client creates its own response pipe and shows an interactive menu (in Spanish):

1. set the slot,
2. set the transaction index (`0` matches any),
3. set the direction (`buy` or `sell`; leave it empty to match both),
4. run the search,
5. quit.

The client prints at most 10 matching records. If more records match, it reports the total number. It removes its response pipe when it exits, either through option 5 or at end of input.

## Using the library

```python
from slotsearch.preprocess import preprocess
from slotsearch.server import SearchIndex

meta = preprocess("trades.csv", "out")   # "out" must already exist
print(meta.record_count, meta.block_count)

with SearchIndex.open("out") as index:
    for record in index.search(123, tx_idx=0, direction=""):
        print(record.tx_idx, record.direction, record.base_coin_amount)
```

`SearchIndex.search` checks every block whose slot range contains the slot. It returns the records in those blocks that have that exact slot. A `tx_idx` of `0` matches any transaction index, and an empty `direction` matches either direction.

### Record types

`slotsearch.records` defines the dataclasses stored in the binary files:

- `Record`
- `HashEntry`
- `BlockIndex`
- `Metadata`

Each type has `pack()`, which returns its little-endian binary layout, and the classmethod `unpack(data)`, which reads that layout back.

### Request and response helpers

- `slotsearch.client.build_request(client_pid, slot, tx_idx, direction)` builds the text request.
- `slotsearch.server.parse_request(request)` parses a text or NUL-terminated bytes request. It raises `ValueError` when there is no client pid.
- `slotsearch.server.encode_response(records)` produces a 4-byte little-endian count followed by the packed records.
- `slotsearch.client.read_response(stream)` reads that format back. It raises `EOFError` on a truncated response.
- `slotsearch.client.format_record(record)` renders the fields that the client displays.
- `slotsearch.preprocess.parse_line(line)` parses one CSV row into a `Record`.

## Limitations

- Searches use only the block index. `hash_index.bin` is written but nothing reads it.
- The last block is read as `record_count % 1000` records. If the total record count is an exact multiple of 1000, the records of the final block are therefore not searched.
- The server answers one request at a time, and it uses fixed pipe paths under `/tmp`.