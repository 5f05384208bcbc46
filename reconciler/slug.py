"""Slug generation for stable grouping and routing keys."""
import re


def slugify(text: str) -> str:
    """
    Convert a display string into a URL-safe identifier.

    Equal series names always produce equal slugs, which is what makes the
    slug usable as a cluster key.

    >>> slugify("The Office US")
    'the-office-us'
    """
    slug = text.lower()
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'[^a-z0-9\-äöüß]', '', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')
