# File: tests/test_names.py
import random
import re
import warnings

import pytest

from archive_scout.names import SUBDOMAIN_RE, clean_name, subdomain_regex

SAMPLES = [
    '  "WWW.Example.COM"  ',
    "u00e9foo.example.com",
    "---.example.com---",
    "%2Fwww.example.com",
    "2f2fwww.example.com",
    "\\u00e9foo.example.com",
    "\\x",
    "u00e9.com",
    "20x.com",
    "WWW.EXAMPLE.COM.",
    "mail.example.com\\n",
    'href="http://dev.example.com/path"',
    "nothing here",
    "",
    "   ",
    "22u004140api.example.com",
    "_dmarc.example.com",
]

ARTIFACT_PREFIX = re.compile(r"u[0-9a-f]{4}|20|22|25|2b|2f|3d|3a|40")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('  "WWW.Example.COM"  ', "www.example.com"),
        ("u00e9foo.example.com", "foo.example.com"),
        ("---.example.com---", "example.com"),
        ("%2Fwww.example.com", "www.example.com"),
        ("2f2fwww.example.com", "www.example.com"),
        ("\\u00e9foo.example.com", "foo.example.com"),
        ("22u004140api.example.com", "api.example.com"),
        ("WWW.EXAMPLE.COM.", "www.example.com"),
        ("20x.com", "x.com"),
    ],
)
def test_clean_name_cases(raw, expected):
    assert clean_name(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "nothing here", "localhost", "\\x", "u00e9.com"])
def test_clean_name_rejects_unusable(raw):
    assert clean_name(raw) == ""


@pytest.mark.parametrize("raw", SAMPLES)
def test_clean_name_idempotent(raw):
    once = clean_name(raw)
    assert clean_name(once) == once


@pytest.mark.parametrize("raw", SAMPLES)
def test_clean_name_output_shape(raw):
    name = clean_name(raw)
    if not name:
        return
    assert name == name.lower()
    assert not name.startswith(("-", ".")) and not name.endswith(("-", "."))
    assert ARTIFACT_PREFIX.match(name) is None
    assert SUBDOMAIN_RE.fullmatch(name)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('\\"www.example.com\\"', "www.example.com"),
        ('\\"\\x41pi.example.com', "api.example.com"),
    ],
)
def test_clean_name_accepts_escaped_quotes(raw, expected):
    assert clean_name(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("\\8www.example.com", "8www.example.com"),
        ("\\qfoo.example.com", "qfoo.example.com"),
    ],
)
def test_clean_name_bad_escape_keeps_text_silently(raw, expected):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert clean_name(raw) == expected


def test_subdomain_regex_matches_domain_and_children():
    pattern = subdomain_regex("Example.com.")
    assert pattern.fullmatch("example.com")
    assert pattern.fullmatch("a.b.example.com")
    assert pattern.fullmatch("WWW.EXAMPLE.COM")
    assert pattern.search("http://web.archive.org/web/2024/http://mail.example.com/x").group(0) == (
        "mail.example.com"
    )
    assert pattern.search("http://example.org/") is None
    # the dot is literal
    assert pattern.search("http://examplexcom/") is None


_PIECES = (
    list("abcxyzABC0129-._%\"u")
    + ["\\", "\\u", "\\x4", "\\n", "\\\"", "00e9", "u0041", "0041"]
    + ["20", "22", "25", "2b", "2f", "2F", "3d", "3a", "40", "%2F", "%22"]
    + [".example.com", ".com", "example.com", "-.", "..", "www"]
)


def _generated_names(count: int, seed: int = 20240613):
    rng = random.Random(seed)
    for _ in range(count):
        yield "".join(rng.choice(_PIECES) for _ in range(rng.randint(1, 12)))


def test_clean_name_properties_on_generated_input():
    for raw in _generated_names(2000):
        name = clean_name(raw)
        assert clean_name(name) == name, raw
        if not name:
            continue
        assert name == name.lower(), raw
        assert not name.startswith(("-", ".")) and not name.endswith(("-", ".")), raw
        assert ARTIFACT_PREFIX.match(name) is None, raw
        assert SUBDOMAIN_RE.fullmatch(name), raw
