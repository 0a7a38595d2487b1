"""Turn an already captured page into ordered RawLine sequences.

Two strategies produce lines from the same capture: a walk over leaf
elements in document order, and a plain split of the page text on newlines.
Neither fetches anything.
"""

import re

from bs4 import BeautifulSoup, NavigableString, Tag

from tvlistings.extraction.structures import RawLine


SKIPPED_TAGS = ('script', 'style', 'noscript', 'template')

# Elements that start a new line in rendered page text
BLOCK_TAGS = (
    'address', 'article', 'aside', 'blockquote', 'dd', 'div', 'dl', 'dt',
    'footer', 'form', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header', 'hr',
    'li', 'main', 'nav', 'ol', 'p', 'pre', 'section', 'table', 'tbody',
    'tfoot', 'thead', 'td', 'th', 'tr', 'ul',
)

WHITESPACE_RE = re.compile(r'\s+')


def lines_from_text(text: str) -> list[RawLine]:
    """Split a whole-page text capture into trimmed, non-empty lines"""
    texts = [line.strip() for line in (text or '').splitlines()]
    return RawLine.from_texts([line for line in texts if line])


def _soup(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html or '', 'html.parser')
    for tag in soup(list(SKIPPED_TAGS)):
        tag.decompose()
    return soup


def lines_from_html(html: str) -> list[RawLine]:
    """Trimmed text of every leaf element, in document order"""
    soup = _soup(html)
    root = soup.body or soup

    texts = []
    for element in root.find_all(True):
        if not isinstance(element, Tag) or element.find(True) is not None:
            continue
        text = ' '.join(element.get_text(' ').split())
        if text:
            texts.append(text)
    return RawLine.from_texts(texts)


def text_from_html(html: str) -> str:
    """Flat page text, one block element per line.

    Inline elements such as ``<a>`` and ``<span>`` stay on their parent's
    line, so ``<div><a>Hull City</a> v <a>Middlesbrough</a></div>`` reads as
    one teams line.
    """
    soup = _soup(html)
    root = soup.body or soup

    # comments and doctypes are subclasses and stay out of get_text()
    for node in list(root.find_all(string=True)):
        if type(node) is NavigableString:
            node.replace_with(WHITESPACE_RE.sub(' ', str(node)))
    for br in root.find_all('br'):
        br.replace_with('\n')
    for element in root.find_all(list(BLOCK_TAGS)):
        element.insert_before('\n')
        element.insert_after('\n')
    return root.get_text()
