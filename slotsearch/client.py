"""Interactive client that sends search requests to the server."""

from __future__ import annotations

import os
import struct
import sys
from typing import BinaryIO

from .records import REQUEST_PIPE, RESPONSE_PIPE_TEMPLATE, Record

_MAX_SHOWN = 10

MENU = (
    "\nBienvenido al sistema de búsqueda\n"
    "1. Buscar por slot\n"
    "2. Buscar por tx_idx\n"
    "3. Buscar por dirección\n"
    "4. Realizar búsqueda\n"
    "5. Salir\n"
    "Seleccione una opción: "
)


def format_record(record: Record) -> str:
    rule = "-" * 40
    return "\n".join([
        rule,
        f"Block Time: {record.block_time}",
        f"Slot: {record.slot}",
        f"Tx Index: {record.tx_idx}",
        f"Direction: {record.direction}",
        f"Base Coin: {record.base_coin}",
        f"Base Amount: {record.base_coin_amount}",
        f"Quote Amount: {record.quote_coin_amount}",
        rule,
    ])


def build_request(client_pid: int, slot: int, tx_idx: int, direction: str) -> str:
    return f"client_pid={client_pid}&slot={slot}&tx_idx={tx_idx}&direction={direction}"


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise EOFError("truncated response")
    return data


def read_response(stream: BinaryIO) -> list[Record]:
    """Read a count-prefixed list of records from the stream."""
    (count,) = struct.unpack("<i", _read_exact(stream, 4))
    size = Record.STRUCT.size
    return [Record.unpack(_read_exact(stream, size)) for _ in range(max(count, 0))]


def _ask_int(prompt: str) -> int:
    try:
        return int(input(prompt))
    except ValueError:
        return 0


def main(argv=None) -> int:
    pid = os.getpid()
    response_pipe = RESPONSE_PIPE_TEMPLATE.format(pid=pid)
    if not os.path.exists(response_pipe):
        os.mkfifo(response_pipe, 0o666)
    slot = tx_idx = 0
    direction = ""
    try:
        while True:
            try:
                option = input(MENU).strip()
            except EOFError:
                break
            if option == "1":
                slot = _ask_int("Ingrese slot: ")
            elif option == "2":
                tx_idx = _ask_int("Ingrese tx_idx: ")
            elif option == "3":
                words = input("Ingrese dirección (buy/sell): ").split()
                direction = words[0][:4] if words else ""
            elif option == "4":
                with open(REQUEST_PIPE, "wb") as req:
                    req.write(build_request(pid, slot, tx_idx, direction).encode() + b"\0")
                with open(response_pipe, "rb") as resp:
                    results = read_response(resp)
                if not results:
                    print("\nNA - No se encontraron resultados")
                    continue
                print(f"\nResultados encontrados: {len(results)}")
                for n, rec in enumerate(results[:_MAX_SHOWN], start=1):
                    print(f"\nResultado {n}:")
                    print(format_record(rec))
                if len(results) > _MAX_SHOWN:
                    print(f"\nMostrando {_MAX_SHOWN} de {len(results)} resultados. "
                          "Use filtros más específicos")
            elif option == "5":
                print("Saliendo...")
                break
            else:
                print("Opción inválida")
    finally:
        if os.path.exists(response_pipe):
            os.unlink(response_pipe)
    return 0


if __name__ == "__main__":
    sys.exit(main())