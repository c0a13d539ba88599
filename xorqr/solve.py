#!/usr/bin/env python3
# -*- coding: utf-8 -*-
## Solver for the XORQR challenge of the ASIS CTF 2014 finals
##
## The server streams QR codes whose columns were XOR'd with a random mask
## row. Row 6 of any QR code is fixed by the standard, which gives us the mask
## back, so we unmask, decode and answer until the server runs out of codes.

import argparse
import sys
from typing import Optional

import numpy as np
from pwn import context, log, remote

from xorqr.decode import QRDecodeError, decode_matrix
from xorqr.matrix import MIN_QR_SIZE, MatrixFormatError, format_matrix, parse_matrix, unmask

HOST = "asis-ctf.ir"
PORT = 12431

START_PROMPT = b'send "START"'
ACK = b"OK"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Decode the XOR'd QR codes sent by the XORQR server.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--host", type=str, default=HOST, help="Challenge host")
    parser.add_argument("--port", type=int, default=PORT, help="Challenge port")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Echo every received line"
    )
    return parser.parse_args(argv)


def wait_for_line(r: remote, line: bytes):
    while True:
        cur = r.recvline(keepends=False)
        log.debug(cur.decode(errors="replace"))
        if cur == line:
            break


def read_matrix(r: remote) -> Optional[np.ndarray]:
    first_line = r.recvline(keepends=False).decode(errors="replace")
    n = len(first_line)

    if n < MIN_QR_SIZE:
        # not a QR code anymore, probably the flag or an error message
        log.info(first_line)
        return None

    log.debug(first_line)
    lines = [first_line]
    for _ in range(n - 1):
        line = r.recvline(keepends=False).decode(errors="replace")
        log.debug(line)
        lines.append(line)
    return parse_matrix(lines)


def dump_remaining(r: remote):
    # keep printing socket data in case it holds some clues
    try:
        while True:
            log.info(r.recvline(keepends=False).decode(errors="replace"))
    except EOFError:
        pass


def solve(r: remote) -> list[str]:
    wait_for_line(r, START_PROMPT)

    log.info("Sending: START")
    r.sendline(b"START")

    answers = []
    while True:
        try:
            matrix = read_matrix(r)
        except MatrixFormatError as e:
            log.failure(f"malformed matrix: {e}")
            break
        except EOFError:
            log.info("connection closed by server")
            return answers

        if matrix is None:
            break

        qr = unmask(matrix)
        log.debug(f"unmasked {len(qr)}x{len(qr)} QR code:\n{format_matrix(qr)}")

        try:
            text = decode_matrix(qr)
        except QRDecodeError as e:
            log.failure(str(e))
            break

        log.info(f"Sending: {text}")
        r.sendline(text.encode())
        answers.append(text)

        # wait for the OK that is sent after the server verifies our answer
        try:
            wait_for_line(r, ACK)
        except EOFError:
            log.info("connection closed by server")
            return answers

    dump_remaining(r)
    return answers


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        context.log_level = "debug"

    ## for remote access
    r = remote(args.host, args.port)
    answers = solve(r)
    r.close()

    log.success(f"answered {len(answers)} QR codes")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# vim: set tabstop=4 expandtab shiftwidth=4 softtabstop=4 number cindent fileencoding=utf-8 :
