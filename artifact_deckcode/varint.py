"""Variable length unsigned integers.

A value is split into a few low bits stored inline in a byte owned by the
caller (an entry or version header) followed by a continue flag, then as
many 7 bit chunks as needed, each with its own continue flag in bit 7.
"""
from .exceptions import DeckDecodingException


def extract_bits_with_carry(value: int, num_bits: int):
    limit = 1 << num_bits
    result = value & (limit - 1)
    if value >= limit:
        result |= limit
    return result


def add_remaining_to_buffer(value: int, already_written_bits: int, buffer: bytearray):
    value >>= already_written_bits
    while value > 0:
        next_byte = extract_bits_with_carry(value, 7)
        buffer.append(next_byte)

        value >>= 7


def read_bits_chunk(chunk: int, num_bits: int, current_shift: int, out: int):
    continue_bit = 1 << num_bits
    new_bits = chunk & (continue_bit - 1)
    out |= new_bits << current_shift

    return out, (chunk & continue_bit) != 0


def read_int(base_value: int, base_bits: int, data: bytes, start: int, end: int):
    """Reads a value whose low ``base_bits`` bits live in ``base_value``.

    Continuation bytes are read from ``data[start:end]``. Returns the value
    and the index of the first unread byte.
    """
    out = 0
    delta_shift = 0
    out, cont = read_bits_chunk(base_value, base_bits, delta_shift, out)
    if base_bits == 0 or cont:
        delta_shift += base_bits

        while True:
            if start >= end:
                raise DeckDecodingException(None, f'Ran out of bytes reading a value at byte {start}')

            next_byte = data[start]
            start += 1
            out, cont = read_bits_chunk(next_byte, 7, delta_shift, out)
            if not cont:
                break

            delta_shift += 7

    return out, start
