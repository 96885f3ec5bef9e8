class DeckCodeException(Exception):
    pass


class DeckEncodingException(DeckCodeException):
    pass


class InvalidDeckException(DeckEncodingException):
    def __init__(self, deck, *args, **kwargs):
        super(InvalidDeckException, self).__init__(*args, **kwargs)
        self.deck = deck


class DeckDecodingException(DeckCodeException):
    def __init__(self, deck_code, *args, **kwargs):
        super(DeckDecodingException, self).__init__(*args, **kwargs)
        self.deck_code = deck_code


class CardSetException(Exception):
    def __init__(self, url, status_code, *args, **kwargs):
        super(CardSetException, self).__init__(*args, **kwargs)
        self.url = url
        self.status_code = status_code
