"""Sanitisation helpers.

Hobby offers carry free-form text (slogan, intro, description,
contact details) written by business owners and shown to every app
client. Strip HTML tags from those fields before they are stored so
they can never be rendered as markup.
"""
import re

TAG_RE = re.compile(r"<[^>]+>")
WHITESPACE_RE = re.compile(r"[ \t]+")


def strip_tags(text: str) -> str:
    """Remove HTML tags from the given string.

    Runs of spaces and tabs left behind by removed tags are collapsed
    to a single space; line breaks are kept.

    Parameters
    ----------
    text: str
        The input string that may contain HTML tags.

    Returns
    -------
    str
        The cleaned string with tags removed and whitespace trimmed.
    """
    if not text:
        return ""
    no_tags = TAG_RE.sub("", text)
    return WHITESPACE_RE.sub(" ", no_tags).strip()
