"""
Notes API — Note Identifier Codec
===================================

What:  Mints new note ids and parses externally supplied id tokens.
How:   A native note id is a 24-character lowercase hexadecimal token
       encoding 12 bytes:

           ┌──────────────┬──────────────────┬──────────────┐
           │ 4 bytes time │ 5 bytes random   │ 3 bytes count│
           └──────────────┴──────────────────┴──────────────┘

       - time:    seconds since the epoch, big-endian
       - random:  chosen once per process
       - count:   per-process counter, starting at a random value

       The time prefix makes ids sort in creation order; the counter keeps
       ids minted in the same second distinct, so an id is never reissued.
Who:   `new_note_id()` is called by the note store on insert;
       `parse_note_id()` is called by the route dependency for {note_id}.
"""

import itertools
import os
import re
import struct
import threading
import time
from typing import NewType

from notes_api.exceptions import InvalidIdError

NoteId = NewType("NoteId", str)

NOTE_ID_LENGTH = 24

_NOTE_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

_process_random = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_counter_lock = threading.Lock()


def new_note_id() -> NoteId:
    """Returns a fresh native note id."""
    with _counter_lock:
        count = next(_counter) % 0x1000000
    raw = (
        struct.pack(">I", int(time.time()) & 0xFFFFFFFF)
        + _process_random
        + count.to_bytes(3, "big")
    )
    return NoteId(raw.hex())


def is_valid_note_id(raw_id: object) -> bool:
    """True when `raw_id` is a string matching the native id grammar."""
    return isinstance(raw_id, str) and bool(_NOTE_ID_PATTERN.match(raw_id))


def parse_note_id(raw_id: str) -> NoteId:
    """
    Parse an externally supplied id token into a native note id.

    Args:
        raw_id: The token as received (path segment, JSON value, ...)

    Returns:
        The id normalized to lowercase hex

    Raises:
        InvalidIdError: Wrong length or non-hex characters
    """
    if not is_valid_note_id(raw_id):
        raise InvalidIdError(raw_id=str(raw_id))
    return NoteId(raw_id.lower())
