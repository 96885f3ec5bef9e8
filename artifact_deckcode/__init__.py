from .adc import DeckDecoder, DeckEncoder
from .deck import CardEntry, Deck, HeroEntry
from .exceptions import (CardSetException, DeckCodeException, DeckDecodingException, DeckEncodingException,
                         InvalidDeckException)
from .logger import setup_logger
from .sanitize import sanitize

__version__ = '0.2'


def encode(deck, sanitizer=sanitize):
    return DeckEncoder.encode(deck, sanitizer)


def decode(deck_code):
    return DeckDecoder.decode(deck_code)
