import datetime
import math
import re
import unicodedata

# Latin letters with no canonical decomposition, mapped to their plain letter.
_LATIN_LETTERS = str.maketrans(
    {
        "ł": "l",
        "ŀ": "l",
        "ø": "o",
        "œ": "o",
        "đ": "d",
        "ð": "d",
        "æ": "a",
        "ß": "s",
        "ħ": "h",
        "ı": "i",
        "ŧ": "t",
        "þ": "t",
    }
)
_SEPARATORS_RE = re.compile(r"[·/_,:;]")
_INVALID_RE = re.compile(r"[^a-z0-9 -]")
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")


def slugify(value: str) -> str:
    """Normalize free text into a URL-safe slug.

    Tag buckets and legacy title slugs both depend on this exact sequence,
    so changing any step changes public URLs.
    """
    if not value:
        return ""
    text = str(value).lower().strip()
    text = text.translate(_LATIN_LETTERS)
    # Remaining accented letters decompose into base letter + combining mark;
    # the mark is dropped by the invalid-character pass below.
    text = unicodedata.normalize("NFD", text)
    text = _SEPARATORS_RE.sub("-", text)
    text = _INVALID_RE.sub("", text)
    text = _WHITESPACE_RE.sub("-", text)
    return _HYPHENS_RE.sub("-", text)


def to_tag_slug(value: str) -> str:
    return slugify(value)


def format_date(value, locale: str = "en-US") -> str:
    """Render a date in UTC for display.

    "en-US" gives "June 1, 2024", other English locales "1 June 2024".
    Month names are English only, so any other locale gets "2024-06-01".
    """
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime.datetime) and value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc)

    language, _, region = (locale or "").replace("_", "-").partition("-")
    if language.lower() != "en":
        return f"{value:%Y-%m-%d}"
    if region.upper() in ("", "US"):
        return f"{value:%B} {value.day}, {value.year}"
    return f"{value.day} {value:%B} {value.year}"


def trim_string(value: str | None, length: int = 400) -> str:
    if not value:
        return ""
    return f"{value[: length - 3]}..." if len(value) > length else value


def title_from_tag(tag: str | None) -> str:
    if not tag:
        return ""
    return tag[0].upper() + tag[1:]


def is_external_link(href) -> bool:
    return isinstance(href, str) and not href.startswith(("/", "#"))


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"
