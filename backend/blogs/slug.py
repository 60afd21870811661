"""URL slugs derived from blog titles."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """
    Lowercase *title*, collapse every run of characters outside ``[a-z0-9]``
    into a single hyphen and trim hyphens from both ends.

    >>> slugify("Hello, World!")
    'hello-world'

    Pure and idempotent: ``slugify(slugify(x)) == slugify(x)``.  Non-ASCII
    letters are not transliterated, so a title made only of them gives ``""``.
    """
    return _NON_ALNUM.sub("-", title.lower()).strip("-")
