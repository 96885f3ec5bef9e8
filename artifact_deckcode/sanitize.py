import html

from bs4 import BeautifulSoup

UNSAFE_TAGS = ['script', 'style', 'iframe', 'object', 'embed']


def sanitize(text: str):
    """Strips markup from a deck name, dropping the contents of script-like tags.

    Whatever text is left is escaped, so entities in the input can't turn back into tags.
    """
    if '<' in text or '&' in text:
        soup = BeautifulSoup(text, 'html.parser')
        for tag in soup(UNSAFE_TAGS):
            tag.decompose()
        text = soup.get_text()

    return html.escape(text, quote=False)
