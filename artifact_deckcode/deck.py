class _Entry:
    """Base for deck entries, compared and ordered by card id alone."""
    __slots__ = ('card_id',)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        return self.card_id == other.card_id

    def __lt__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        return self.card_id < other.card_id

    def __hash__(self):
        return hash(self.card_id)


class HeroEntry(_Entry):
    __slots__ = ('turn',)

    def __init__(self, card_id, turn):
        self.card_id = card_id
        self.turn = turn

    def to_dict(self):
        return {'card_id': self.card_id, 'turn': self.turn}

    def __repr__(self):
        return f'HeroEntry(card_id={self.card_id}, turn={self.turn})'


class CardEntry(_Entry):
    __slots__ = ('count',)

    def __init__(self, card_id, count):
        self.card_id = card_id
        self.count = count

    def to_dict(self):
        return {'card_id': self.card_id, 'count': self.count}

    def __repr__(self):
        return f'CardEntry(card_id={self.card_id}, count={self.count})'


class Deck:
    def __init__(self, heroes, cards, name=''):
        self.heroes = list(heroes)
        self.cards = list(cards)
        self.name = name

    @staticmethod
    def from_dict(d: dict):
        heroes = [HeroEntry(h['card_id'], h['turn']) for h in d['heroes']]
        cards = [CardEntry(c['card_id'], c['count']) for c in d['cards']]
        return Deck(heroes, cards, d.get('name', ''))

    def to_dict(self):
        return {'heroes': [h.to_dict() for h in self.heroes],
                'cards': [c.to_dict() for c in self.cards],
                'name': self.name}

    def sorted(self):
        """A copy with heroes and cards in ascending card id order."""
        heroes = [HeroEntry(h.card_id, h.turn) for h in sorted(self.heroes)]
        cards = [CardEntry(c.card_id, c.count) for c in sorted(self.cards)]
        return Deck(heroes, cards, self.name)

    def __eq__(self, other):
        if not isinstance(other, Deck):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self):
        return f'Deck(heroes={self.heroes!r}, cards={self.cards!r}, name={self.name!r})'
