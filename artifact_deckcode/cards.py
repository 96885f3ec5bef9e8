import json
import re
import textwrap

import requests

from . import config
from .adc import DeckEncoder
from .deck import CardEntry, Deck, HeroEntry
from .exceptions import CardSetException
from .logger import logger

# heroes are deployed three on the first turn, then one each on the next two
HERO_TURNS = [1, 1, 1, 2, 3]


def format_columns(col_width, columns):
    s = ''

    for i, (key, value) in enumerate(columns):
        position = '<' if i == 0 else '>' if i == len(columns) - 1 else '^'
        key_value_str = key + ': ' + str(value)
        s += f'{key_value_str: {position}{col_width}}'

    return s


class Card:
    def __init__(self, card_name, card_id, card_type, hit_points=None, attack=None, armor=None, mana_cost=None,
                 gold_cost=None, sub_type=None, card_text=None, colour=None, references=None, display_width=60,
                 mini_image=None, large_image=None, ingame_image=None, illustrator=None, base_card_id=None):
        self.name = card_name
        self.card_id = card_id
        self.card_type = card_type
        self.hit_points = hit_points
        self.attack = attack
        self.armor = armor
        self.mana_cost = mana_cost
        self.gold_cost = gold_cost
        self.sub_type = sub_type
        self.card_text = card_text
        self.colour = colour
        self.references = references or []
        self.display_width = display_width
        self.mini_image = mini_image
        self.large_image = large_image
        self.ingame_image = ingame_image
        self.illustrator = illustrator
        self.base_card_id = base_card_id

    @staticmethod
    def unpack_dict(d):
        colour = ''
        for c in ['black', 'blue', 'green', 'red']:
            if d.get('is_' + c):
                colour = c
                break

        return Card(**{
            'card_name': d['card_name']['english'],
            'card_id': d['card_id'],
            'card_type': d['card_type'],
            'hit_points': d.get('hit_points'),
            'attack': d.get('attack'),
            'armor': d.get('armor'),
            'mana_cost': d.get('mana_cost'),
            'gold_cost': d.get('gold_cost'),
            'sub_type': d.get('sub_type'),
            'card_text': d.get('card_text', {}).get('english'),
            'colour': colour,
            'references': d.get('references'),
            'mini_image': d.get('mini_image', {}).get('default'),
            'large_image': d.get('large_image', {}).get('default'),
            'ingame_image': d.get('ingame_image', {}).get('default'),
            'illustrator': d.get('illustrator'),
            'base_card_id': d.get('base_card_id')
        })

    def signature_cards(self):
        """``(card_id, count)`` for each card this hero brings into the deck."""
        return [(ref['card_id'], ref.get('count', 0)) for ref in self.references if ref.get('ref_type') == 'includes']

    def __str__(self):
        col_width = int(self.display_width / 2)
        lines = [f'{self.colour.upper():-^{self.display_width}}']

        lines.append(format_columns(col_width, [('Name', self.name), ('Type', self.card_type)]))
        if self.mana_cost or self.gold_cost:
            columns = [('Mana', self.mana_cost)] if self.mana_cost else [('Gold', self.gold_cost)]
            if self.sub_type:
                columns += [('Sub Type', self.sub_type)]
            lines.append(format_columns(int(self.display_width / len(columns)), columns))

        if self.card_text:
            for line in textwrap.wrap(re.sub(r'<[^<]+?>', '', self.card_text), self.display_width - 2):
                lines.append(f'{line: ^{self.display_width}}')

        if self.attack is not None and self.hit_points:
            columns = [('Attack', self.attack)]
            if self.armor:
                columns += [('Armor', self.armor)]
            columns += [('HP', self.hit_points)]

            lines.append(format_columns(int(self.display_width / len(columns)), columns))

        lines.append(f'{self.colour.upper():-^{self.display_width}}')
        return '\n'.join(lines)

    def __repr__(self):
        return f'Card({self.card_id}, {self.name!r})'


class CardList:
    def __init__(self, cards):
        self.cards = list(cards)
        self._by_id = {card.card_id: card for card in self.cards}

    def get_card_by_id(self, card_id):
        return self._by_id.get(card_id)

    def __getitem__(self, item):
        return self.cards.__getitem__(item)

    def __len__(self):
        return len(self.cards)

    def __add__(self, other):
        cards = self.cards + other.cards
        return CardList(cards)


class CardSet:
    def __init__(self, set_name, set_code, set_id, version, cards):
        self.set_name = set_name
        self.set_code = set_code
        self.set_id = set_id
        self.version = version
        self.cards = cards

    @staticmethod
    def _get_json(url):
        r = requests.get(url, timeout=config.REQUEST_TIMEOUT)

        if r.status_code != 200:
            raise CardSetException(url, r.status_code, f'{r.status_code}: {url}')

        return r

    @staticmethod
    def get_card_set(set_code, cache_dir=None):
        cache = config.CACHE_DIR if cache_dir is None else cache_dir
        cache.mkdir(parents=True, exist_ok=True)

        set_cache_path = cache / f'{set_code}.json'
        if not set_cache_path.exists():
            logger.info(f'Card set {set_code} is not cached, downloading')
            data = CardSet._get_json(config.CARD_SET_URL.format(set_code=set_code)).json()
            set_url = data['cdn_root'] + data['url']

            r = CardSet._get_json(set_url)
            card_set_json = r.json()
            with open(set_cache_path, 'w', encoding='utf-8') as set_cache:
                set_cache.write(r.content.decode('utf-8'))

        else:
            logger.debug(f'Loading card set {set_code} from {set_cache_path}')
            with open(set_cache_path, 'r', encoding='utf-8') as set_cache:
                card_set_json = json.loads(set_cache.read())

        return card_set_json

    @staticmethod
    def from_json(data, set_code=None):
        card_set_dict = data['card_set']
        card_list = CardList([Card.unpack_dict(d) for d in card_set_dict['card_list']])
        set_info = card_set_dict['set_info']

        return CardSet(
            set_info['name']['english'],
            set_code,
            set_info['set_id'],
            card_set_dict['version'],
            card_list
        )

    @staticmethod
    def load_card_set(set_code, cache_dir=None):
        return CardSet.from_json(CardSet.get_card_set(set_code, cache_dir), set_code)

    def get_card_by_id(self, card_id):
        return self.cards.get_card_by_id(card_id)

    def __len__(self):
        return len(self.cards)


def card_map_from_json(documents):
    """Builds ``{card_id: Card}`` from card set json documents, given as strings or parsed dicts."""
    card_map = {}
    for document in documents:
        if isinstance(document, str):
            document = json.loads(document)
        for card in CardSet.from_json(document).cards:
            card_map[card.card_id] = card

    return card_map


class CardDeck:
    """A deck made of resolved cards, as opposed to the ids stored in a deck code."""

    def __init__(self, heroes, main_deck, items, name=''):
        self.heroes = heroes
        self.main_deck = main_deck
        self.items = items
        self.name = name

    def is_valid(self):
        return len(self.heroes) == 5 and len(self.main_deck) >= 40 and len(self.items) >= 9

    def to_code_deck(self):
        heroes = []
        signature_ids = set()
        for hero, turn in zip(self.heroes, HERO_TURNS):
            heroes.append(HeroEntry(hero.card_id, turn))
            signature_ids.update(card_id for card_id, _ in hero.signature_cards())

        counts = {}
        for card in self.main_deck + self.items:
            if card.card_id in signature_ids:
                continue
            counts[card.card_id] = counts.get(card.card_id, 0) + 1

        cards = [CardEntry(card_id, count) for card_id, count in counts.items()]
        return Deck(heroes, cards, self.name)

    @staticmethod
    def from_code_deck(deck: Deck, card_pool):
        """Resolves a decoded deck against ``card_pool``, a :class:`CardList` or ``{card_id: Card}``."""
        if isinstance(card_pool, dict):
            card_pool = CardList(card_pool.values())

        def lookup(card_id):
            card = card_pool.get_card_by_id(card_id)
            if card is None:
                raise KeyError(card_id)
            return card

        heroes = []
        main_deck = []
        items = []
        for hero_entry in deck.heroes:
            hero = lookup(hero_entry.card_id)
            heroes.append(hero)
            for sig_card_id, include_count in hero.signature_cards():
                main_deck += [lookup(sig_card_id)] * include_count

        for card_entry in deck.cards:
            card = lookup(card_entry.card_id)
            if card.card_type == 'Item':
                items += [card] * card_entry.count
            else:
                main_deck += [card] * card_entry.count

        return CardDeck(heroes, main_deck, items, deck.name)


def encode_card_deck(card_deck: CardDeck):
    return DeckEncoder.encode(card_deck.to_code_deck())
