from collections import namedtuple

from . import config
from .config import Version
from .exceptions import DeckDecodingException
from .varint import extract_bits_with_carry

DeckHeader = namedtuple('DeckHeader', ['version', 'version_and_heroes', 'checksum', 'name_length',
                                       'header_size', 'entries_end'])


def write_header(buffer: bytearray, hero_count: int, name_length: int, version=config.CURRENT_VERSION):
    """Appends the header with a zero checksum and returns the checksum position."""
    buffer.append(version << 4 | extract_bits_with_carry(hero_count, 3))

    checksum_position = len(buffer)
    buffer.append(0)

    if version > Version.LEGACY:
        buffer.append(name_length)

    return checksum_position


def read_header(data: bytes):
    total_bytes = len(data)
    if total_bytes == 0:
        raise DeckDecodingException(None, 'Deck code is empty')

    version_and_heroes = data[0]
    version_nibble = version_and_heroes >> 4
    try:
        # anything before version 2 uses the legacy layout
        version = Version(max(version_nibble, Version.LEGACY))
    except ValueError:
        msg = f'Deck code version ({version_nibble}) and decoder version ({config.CURRENT_VERSION}) mismatch'
        raise DeckDecodingException(None, msg) from None

    if version == Version.LEGACY:
        header_size = config.LEGACY_HEADER_SIZE
    else:
        header_size = config.HEADER_SIZE

    if total_bytes < header_size:
        raise DeckDecodingException(None, f'Deck code has {total_bytes} bytes, the header needs {header_size}')

    checksum = data[1]

    if version == Version.LEGACY:
        name_length = 0
    else:
        name_length = data[2]
        if name_length > total_bytes - header_size:
            msg = f'Name length ({name_length}) is longer than the {total_bytes - header_size} bytes after the header'
            raise DeckDecodingException(None, msg)

    return DeckHeader(version, version_and_heroes, checksum, name_length, header_size, total_bytes - name_length)
