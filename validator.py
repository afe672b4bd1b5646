import re
import json


# Scheme, then a host that does not open with a
# path or query character, then no whitespace at all
URI_PATTERN = re.compile(r"(https?|ftp)://[^\s/$.?#][^\s]*")

# RFC 7230 token characters
HEADER_NAME_PATTERN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def validate_uri(text: str) -> bool:
    # validate_uri {{{
    if text.strip() == "":
        return False
    return URI_PATTERN.fullmatch(text) is not None
    # }}}


def validate_json(text: str) -> bool:
    """
    True when the text parses as a single
    JSON value. Python accepts NaN and
    Infinity by default, strict JSON does not.
    """
    # validate_json {{{
    try:
        json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        # Deep nesting exhausts the scanner before it fails to parse
        return False
    return True
    # }}}


def validate_headers(text: str) -> bool:
    """
    Every non blank line must read 'Name: value'.
    An empty headers field is valid, it simply
    means no headers are sent.
    """
    # validate_headers {{{
    for line in text.splitlines():
        if line.strip() == "":
            continue

        name, colon, value = line.partition(":")
        if colon == "":
            return False
        if HEADER_NAME_PATTERN.fullmatch(name.strip()) is None:
            return False
        if not _is_latin1(value):
            return False

    return True
    # }}}


def _reject_constant(name: str) -> None:
    raise ValueError(f"Constant {name} is not valid JSON")


def _is_latin1(text: str) -> bool:
    # Header values go on the wire as ISO-8859-1
    try:
        text.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True
