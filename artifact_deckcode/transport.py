import base64
import binascii

from . import config
from .exceptions import DeckDecodingException


def bytes_to_code(buffer: bytes):
    deck_code = config.PREFIX + base64.b64encode(bytes(buffer)).decode('utf-8')
    for unsafe, safe in config.URL_SAFE_SUBSTITUTIONS:
        deck_code = deck_code.replace(unsafe, safe)

    return deck_code


def code_to_bytes(deck_code: str):
    # codes without the prefix are still accepted
    if deck_code.startswith(config.PREFIX):
        deck_code = deck_code[len(config.PREFIX):]

    for unsafe, safe in config.URL_SAFE_SUBSTITUTIONS:
        deck_code = deck_code.replace(safe, unsafe)

    try:
        return base64.b64decode(deck_code.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DeckDecodingException(deck_code, f'Deck code is not valid base64: {e}') from e
