from . import config
from .checksum import compute_checksum
from .deck import CardEntry, Deck, HeroEntry
from .entry import add_card_to_buffer, read_serialized_card
from .exceptions import DeckDecodingException, InvalidDeckException
from .header import read_header, write_header
from .logger import logger
from .sanitize import sanitize
from .transport import bytes_to_code, code_to_bytes
from .varint import add_remaining_to_buffer, read_int


def _is_uint(value):
    return isinstance(value, int) and not isinstance(value, bool)


class DeckEncoder:
    version = config.CURRENT_VERSION
    prefix = config.PREFIX
    header_size = config.HEADER_SIZE

    @staticmethod
    def encode(deck, sanitizer=sanitize):
        """Encodes a :class:`Deck` (or its dict form) into a deck code.

        The deck passed in is left untouched, entries are sorted on a copy.
        """
        buffer = DeckEncoder.encode_bytes(deck, sanitizer)
        deck_code = bytes_to_code(buffer)
        logger.debug(f'Encoded {len(buffer)} bytes into {deck_code}')
        return deck_code

    @staticmethod
    def encode_bytes(deck, sanitizer=sanitize):
        if isinstance(deck, dict):
            try:
                deck = Deck.from_dict(deck)
            except (KeyError, TypeError) as e:
                raise InvalidDeckException(deck, f'Deck is missing a field: {e}') from e

        DeckEncoder._validate(deck)
        deck = deck.sorted()

        name = DeckEncoder._trim_name(sanitizer(deck.name) if deck.name else '')

        buffer = bytearray()
        checksum_position = write_header(buffer, len(deck.heroes), len(name), DeckEncoder.version)
        add_remaining_to_buffer(len(deck.heroes), 3, buffer)

        last_card_id = 0
        for hero in deck.heroes:
            add_card_to_buffer(hero.turn, hero.card_id - last_card_id, buffer)
            last_card_id = hero.card_id

        last_card_id = 0
        for card in deck.cards:
            add_card_to_buffer(card.count, card.card_id - last_card_id, buffer)
            last_card_id = card.card_id

        buffer[checksum_position] = compute_checksum(buffer[DeckEncoder.header_size:])

        buffer += name

        return bytes(buffer)

    @staticmethod
    def _trim_name(name: str):
        name_bytes = name.encode('utf-8')
        if len(name_bytes) <= config.MAX_NAME_BYTES:
            return name_bytes

        original_length = len(name_bytes)
        while len(name_bytes) > config.MAX_NAME_BYTES:
            amount_to_trim = max(1, (len(name_bytes) - config.MAX_NAME_BYTES) // 4)
            name_bytes = name_bytes[:-amount_to_trim]

        # the byte cut can split a character, drop what is left of it
        name_bytes = name_bytes.decode('utf-8', 'ignore').encode('utf-8')
        logger.debug(f'Trimmed deck name from {original_length} to {len(name_bytes)} bytes')

        return name_bytes

    @staticmethod
    def _validate(deck: Deck):
        if len(deck.heroes) != config.HERO_COUNT:
            raise InvalidDeckException(deck, f'Decks must have {config.HERO_COUNT} heroes, got {len(deck.heroes)}')

        if not deck.cards:
            raise InvalidDeckException(deck, 'Decks must have cards')

        for entry, amount in [(h, h.turn) for h in deck.heroes] + [(c, c.count) for c in deck.cards]:
            if not _is_uint(entry.card_id) or not 0 <= entry.card_id <= config.MAX_UINT32:
                raise InvalidDeckException(deck, f'Card id out of range: {entry!r}')
            if not _is_uint(amount) or not 1 <= amount <= config.MAX_UINT32:
                raise InvalidDeckException(deck, f'Turn or count out of range: {entry!r}')


class DeckDecoder:
    @staticmethod
    def decode(deck_code: str):
        try:
            deck_bytes = code_to_bytes(deck_code)
            deck = DeckDecoder.parse_deck(deck_bytes)
        except DeckDecodingException as e:
            e.deck_code = deck_code
            raise

        logger.debug(f'Decoded {deck_code} into {len(deck.heroes)} heroes and {len(deck.cards)} cards')
        return deck

    @staticmethod
    def parse_deck(deck_bytes: bytes):
        header = read_header(deck_bytes)
        current_byte = header.header_size
        total_card_bytes = header.entries_end

        computed_checksum = compute_checksum(deck_bytes[current_byte:total_card_bytes])
        if header.checksum != computed_checksum:
            msg = f'Checksum in deck code ({header.checksum}) does not match computed checksum ({computed_checksum})'
            raise DeckDecodingException(None, msg)

        num_heroes, current_byte = read_int(header.version_and_heroes, 3, deck_bytes, current_byte, total_card_bytes)

        heroes = []
        last_card_id = 0
        for _ in range(num_heroes):
            card_id, turn, current_byte = read_serialized_card(deck_bytes, current_byte, total_card_bytes,
                                                               last_card_id)
            last_card_id = card_id
            heroes.append(HeroEntry(card_id, turn))

        cards = []
        last_card_id = 0
        while current_byte < total_card_bytes:
            card_id, count, current_byte = read_serialized_card(deck_bytes, current_byte, total_card_bytes,
                                                                last_card_id)
            last_card_id = card_id
            cards.append(CardEntry(card_id, count))

        name_bytes = deck_bytes[total_card_bytes:]
        try:
            name = name_bytes.decode('utf-8')
        except UnicodeDecodeError:
            logger.warning(f'Deck name is not valid utf-8, replacing bad bytes: {name_bytes!r}')
            name = name_bytes.decode('utf-8', 'replace')

        return Deck(heroes, cards, name)
