"""Hero and card entries.

Each entry is a header byte holding a 2 bit count, a continue flag and the
low 5 bits of the id delta, followed by the rest of the delta and, when the
count does not fit in the header, the full count.
"""
from . import config
from .exceptions import DeckDecodingException, DeckEncodingException
from .varint import add_remaining_to_buffer, extract_bits_with_carry, read_int

MAX_COUNT_BITS = 0x03
DELTA_BITS = 5


def add_card_to_buffer(count: int, value: int, buffer: bytearray):
    start = len(buffer)

    # counts are never zero, so 1-3 are stored as 0-2 and 3 means the count follows
    extended_count = (count - 1) >= MAX_COUNT_BITS

    first_byte_count = MAX_COUNT_BITS if extended_count else (count - 1)
    first_byte = first_byte_count << 6
    first_byte |= extract_bits_with_carry(value, DELTA_BITS)

    buffer.append(first_byte)

    add_remaining_to_buffer(value, DELTA_BITS, buffer)

    if extended_count:
        add_remaining_to_buffer(count, 0, buffer)

    written = len(buffer) - start
    if written > config.MAX_ENTRY_BYTES:
        del buffer[start:]
        raise DeckEncodingException(f'Entry (count {count}, delta {value}) took {written} bytes, '
                                    f'the limit is {config.MAX_ENTRY_BYTES}')


def read_serialized_card(data: bytes, start: int, end: int, last_card_id: int):
    """Returns ``(card_id, count, next_index)``. For heroes count is the turn."""
    if start >= end:
        raise DeckDecodingException(None, f'Expected a card at byte {start} but the card section ends at {end}')

    header = data[start]
    start += 1
    extended_count = (header >> 6) == MAX_COUNT_BITS

    card_delta, start = read_int(header, DELTA_BITS, data, start, end)
    card_id = last_card_id + card_delta

    if extended_count:
        count, start = read_int(0, 0, data, start, end)
    else:
        count = (header >> 6) + 1

    return card_id, count, start
