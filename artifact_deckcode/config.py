import os
import pathlib
from enum import IntEnum


class Version(IntEnum):
    # version 1 codes have no name length byte, the name fills the rest of the buffer
    LEGACY = 1
    CURRENT = 2


CURRENT_VERSION = Version.CURRENT
PREFIX = 'ADC'

HEADER_SIZE = 3
LEGACY_HEADER_SIZE = 2

HERO_COUNT = 5
MAX_NAME_BYTES = 63
MAX_ENTRY_BYTES = 11
MAX_UINT32 = 0xFFFFFFFF

# base64 characters that are not url safe, and what they are swapped for
URL_SAFE_SUBSTITUTIONS = (('/', '-'), ('=', '_'))

CARD_SET_URL = 'https://playartifact.com/cardset/{set_code}/'
CACHE_DIR = pathlib.Path(os.environ.get('ARTIFACT_CACHE_DIR', '.cache'))
REQUEST_TIMEOUT = 10
