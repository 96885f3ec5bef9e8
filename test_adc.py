import copy
import unittest

from artifact_deckcode import (DeckDecoder, DeckDecodingException, DeckEncoder, DeckEncodingException, Deck,
                               HeroEntry, CardEntry, InvalidDeckException, decode, encode)
from artifact_deckcode.transport import bytes_to_code, code_to_bytes


class ADC(unittest.TestCase):
    deck = {'heroes': [{'card_id': 4005, 'turn': 2}, {'card_id': 10014, 'turn': 1}, {'card_id': 10017, 'turn': 3},
                       {'card_id': 10026, 'turn': 1}, {'card_id': 10047, 'turn': 1}],
            'cards': [{'card_id': 3000, 'count': 2}, {'card_id': 3001, 'count': 1}, {'card_id': 10091, 'count': 3},
                      {'card_id': 10102, 'count': 3}, {'card_id': 10128, 'count': 3}, {'card_id': 10165, 'count': 3},
                      {'card_id': 10168, 'count': 3}, {'card_id': 10169, 'count': 3}, {'card_id': 10185, 'count': 3},
                      {'card_id': 10223, 'count': 1}, {'card_id': 10234, 'count': 3}, {'card_id': 10260, 'count': 1},
                      {'card_id': 10263, 'count': 1}, {'card_id': 10322, 'count': 3}, {'card_id': 10354, 'count': 3}],
            'name': 'Green/Black Example'}

    code = 'ADCJWkTZX05uwGDCRV4XQGy3QGLmqUBg4GQJgGLGgO7AaABR3JlZW4vQmxhY2sgRXhhbXBsZQ__'

    def test_encoder(self):
        encoded_deck = DeckEncoder.encode(self.deck)
        assert self.code == encoded_deck

    def test_decoder(self):
        decoded_deck = DeckDecoder.decode(self.code)
        assert decoded_deck.to_dict() == self.deck
        assert len(decoded_deck.heroes) == 5
        assert decoded_deck.name == 'Green/Black Example'

    def test_reencode_decoded(self):
        assert DeckEncoder.encode(DeckDecoder.decode(self.code)) == self.code

    def test_module_shortcuts(self):
        assert encode(self.deck) == self.code
        assert decode(self.code) == Deck.from_dict(self.deck)
        assert decode(encode(self.deck, lambda name: 'Other')).name == 'Other'

    def test_decode_without_prefix(self):
        assert DeckDecoder.decode(self.code[3:]).to_dict() == self.deck

    def test_encode_sorts_copy(self):
        shuffled = copy.deepcopy(self.deck)
        shuffled['heroes'].reverse()
        shuffled['cards'].reverse()
        deck = Deck.from_dict(shuffled)
        heroes_before = list(deck.heroes)

        assert DeckEncoder.encode(deck) == self.code
        assert [h.card_id for h in deck.heroes] == [h.card_id for h in heroes_before]
        assert deck.heroes[0].card_id == 10047

    def test_round_trip(self):
        deck = Deck([HeroEntry(card_id, turn) for card_id, turn in [(90, 1), (5, 2), (4000000000, 3), (31, 1),
                                                                     (32, 1)]],
                    [CardEntry(7, 1), CardEntry(3, 40), CardEntry(2 ** 32 - 1, 2 ** 32 - 1), CardEntry(1000, 3)],
                    'Round trip')
        decoded = DeckDecoder.decode(DeckEncoder.encode(deck))
        assert decoded == deck.sorted()
        assert [c.count for c in decoded.cards] == [40, 1, 3, 2 ** 32 - 1]

    def test_canonical_encoding_is_stable(self):
        first = DeckEncoder.encode(self.deck)
        second = DeckEncoder.encode(DeckDecoder.decode(first))
        assert first == second

    def test_extended_counts(self):
        deck = Deck.from_dict(self.deck)
        for count in [1, 2, 3, 4, 5, 300]:
            deck.cards[0].count = count
            assert DeckDecoder.decode(DeckEncoder.encode(deck)).cards[0].count == count

    def test_missing_heroes(self):
        deck = copy.deepcopy(self.deck)
        deck['heroes'] = deck['heroes'][:4]
        with self.assertRaises(InvalidDeckException) as cm:
            DeckEncoder.encode(deck)
        assert cm.exception.deck is not None

    def test_empty_decks(self):
        with self.assertRaises(DeckEncodingException):
            DeckEncoder.encode({'heroes': [], 'cards': [], 'name': ''})

        deck = copy.deepcopy(self.deck)
        deck['cards'] = []
        with self.assertRaises(InvalidDeckException):
            DeckEncoder.encode(deck)

    def test_missing_fields(self):
        with self.assertRaises(InvalidDeckException):
            DeckEncoder.encode({'heroes': []})

    def test_zero_count(self):
        deck = copy.deepcopy(self.deck)
        deck['cards'][0]['count'] = 0
        with self.assertRaises(InvalidDeckException):
            DeckEncoder.encode(deck)

    def test_bool_values_rejected(self):
        deck = copy.deepcopy(self.deck)
        deck['cards'][0]['count'] = True
        with self.assertRaises(InvalidDeckException):
            DeckEncoder.encode(deck)

        deck = copy.deepcopy(self.deck)
        deck['heroes'][0]['card_id'] = False
        with self.assertRaises(InvalidDeckException):
            DeckEncoder.encode(deck)

    def test_id_out_of_range(self):
        deck = copy.deepcopy(self.deck)
        deck['cards'][0]['card_id'] = -1
        with self.assertRaises(InvalidDeckException):
            DeckEncoder.encode(deck)

        deck['cards'][0]['card_id'] = 2 ** 32
        with self.assertRaises(InvalidDeckException):
            DeckEncoder.encode(deck)


class DeckName(unittest.TestCase):
    def deck_with_name(self, name):
        deck = Deck.from_dict(ADC.deck)
        deck.name = name
        return deck

    def test_64_bytes_trimmed(self):
        decoded = DeckDecoder.decode(DeckEncoder.encode(self.deck_with_name('a' * 64)))
        assert decoded.name == 'a' * 63

    def test_long_name_trimmed(self):
        decoded = DeckDecoder.decode(DeckEncoder.encode(self.deck_with_name('b' * 200)))
        assert decoded.name == 'b' * 63

    def test_split_character_dropped(self):
        # 80 bytes, cut to 63 which ends half way through a character
        decoded = DeckDecoder.decode(DeckEncoder.encode(self.deck_with_name('é' * 40)))
        assert decoded.name == 'é' * 31

    def test_trimming_is_deterministic(self):
        deck = self.deck_with_name('x' * 64)
        assert DeckEncoder.encode(deck) == DeckEncoder.encode(deck)

    def test_empty_name(self):
        decoded = DeckDecoder.decode(DeckEncoder.encode(self.deck_with_name('')))
        assert decoded.name == ''
        assert len(decoded.cards) == 15

    def test_markup_stripped(self):
        decoded = DeckDecoder.decode(DeckEncoder.encode(self.deck_with_name('<b>Bold</b> Deck<script>x()</script>')))
        assert decoded.name == 'Bold Deck'

    def test_escaped_markup_not_revived(self):
        for name in ['&lt;script&gt;x&lt;/script&gt;', '&lt;img src=x onerror=alert(1)&gt;']:
            decoded = DeckDecoder.decode(DeckEncoder.encode(self.deck_with_name(name)))
            assert '<' not in decoded.name
            assert '>' not in decoded.name

    def test_custom_sanitizer(self):
        code = DeckEncoder.encode(self.deck_with_name('quiet'), sanitizer=lambda name: name.upper())
        assert DeckDecoder.decode(code).name == 'QUIET'

    def test_sanitizer_skipped_for_empty_name(self):
        def fail(name):
            raise AssertionError('sanitizer called')

        DeckEncoder.encode(self.deck_with_name(''), sanitizer=fail)


class MalformedCodes(unittest.TestCase):
    def test_invalid_base64(self):
        with self.assertRaises(DeckDecodingException) as cm:
            DeckDecoder.decode('ADC!!not base64!!')
        assert cm.exception.deck_code == 'ADC!!not base64!!'

    def test_empty_code(self):
        with self.assertRaises(DeckDecodingException):
            DeckDecoder.decode('ADC')

    def test_checksum_mismatch(self):
        data = bytearray(code_to_bytes(ADC.code))
        data[10] ^= 0x01
        with self.assertRaises(DeckDecodingException):
            DeckDecoder.decode(bytes_to_code(data))

    def test_every_entry_byte_checked(self):
        data = code_to_bytes(ADC.code)
        entries_end = len(data) - data[2]
        for i in range(3, entries_end):
            corrupt = bytearray(data)
            corrupt[i] = (corrupt[i] + 1) & 0xFF
            with self.assertRaises(DeckDecodingException):
                DeckDecoder.decode(bytes_to_code(corrupt))

    def test_truncated_card(self):
        # five one byte heroes, then a card whose delta says another byte follows
        data = bytes([0x25, 37, 0, 1, 1, 1, 1, 1, 0x20])
        with self.assertRaises(DeckDecodingException):
            DeckDecoder.parse_deck(data)

    def test_truncated_hero_count(self):
        with self.assertRaises(DeckDecodingException):
            DeckDecoder.parse_deck(bytes([0x2D, 0, 0]))

    def test_missing_heroes(self):
        # header says five heroes but there is only one entry
        with self.assertRaises(DeckDecodingException):
            DeckDecoder.parse_deck(bytes([0x25, 1, 0, 1]))

    def test_name_longer_than_code(self):
        with self.assertRaises(DeckDecodingException):
            DeckDecoder.parse_deck(bytes([0x25, 0, 40, 1, 1]))

    def test_unknown_version(self):
        data = bytearray(code_to_bytes(ADC.code))
        data[0] = 0x35
        with self.assertRaises(DeckDecodingException):
            DeckDecoder.decode(bytes_to_code(data))

    def test_version_zero_uses_legacy_layout(self):
        decoded = DeckDecoder.parse_deck(bytes([0x05, 5, 1, 1, 1, 1, 1]))
        assert [(h.card_id, h.turn) for h in decoded.heroes] == [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1)]
        assert decoded.cards == []
        assert decoded.name == ''

    def test_legacy_version(self):
        deck = Deck.from_dict(ADC.deck)
        deck.name = ''
        data = DeckEncoder.encode_bytes(deck)
        legacy = bytes([0x10 | (data[0] & 0x0F), data[1]]) + data[3:]

        decoded = DeckDecoder.parse_deck(legacy)
        assert decoded == deck

    def test_invalid_utf8_name(self):
        data = DeckEncoder.encode_bytes(Deck.from_dict(ADC.deck))
        data = data[:2] + bytes([2]) + data[3:-19] + b'\xff\xfe'
        decoded = DeckDecoder.parse_deck(data)
        assert decoded.name == '\ufffd\ufffd'
        assert len(decoded.cards) == 15


if __name__ == '__main__':
    unittest.main()
