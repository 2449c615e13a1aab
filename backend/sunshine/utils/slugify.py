import logging
from typing import Iterable

logger = logging.getLogger("sunshine.slugify")


def _is_alnum(ch: str) -> bool:
    # isalpha covers every Unicode letter category, isdecimal the Nd digits.
    return ch.isalpha() or ch.isdecimal()


def _lower(ch: str) -> str:
    # One character in, one out: capital dotted I lowers to "i", not "i" plus a combining dot.
    return ch.lower()[0]


def slugify(name: str) -> str:
    """Lowercase ``name`` one character at a time and replace each non
    letter/digit character with ``-``.

    Runs are not collapsed and leading/trailing dashes are kept, so
    ``slugify("A/B & C") == "a-b---c"``.
    """
    return "".join(low if _is_alnum(low) else "-" for low in map(_lower, name))


def assign_slugs(names: Iterable[str]) -> dict[str, str]:
    """Give every name a slug that is unique across the whole set.

    Names are visited in sorted order. The first name to produce a slug keeps
    it, later names producing the same slug get the first free ``-N`` suffix
    starting at 2.
    """
    slugs: dict[str, str] = {}
    taken: set[str] = set()
    ordered = sorted(set(names))
    base_slugs = {name: slugify(name) for name in ordered}
    # Reserve every natural slug up front so a suffixed slug never steals one.
    natural = set(base_slugs.values())

    for name in ordered:
        base = base_slugs[name]
        if base not in taken:
            slug = base
        else:
            n = 2
            while f"{base}-{n}" in taken or f"{base}-{n}" in natural:
                n += 1
            slug = f"{base}-{n}"
            logger.warning("Slug collision for %r: %r already taken, using %r", name, base, slug)
        taken.add(slug)
        slugs[name] = slug
    return slugs
