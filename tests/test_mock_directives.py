import re

import pytest

from utils.mock_directives import MockDirectiveExpander, parse_arguments, to_strftime


@pytest.fixture
def expander():
    return MockDirectiveExpander(seed=1234)


def test_whole_directive_returns_typed_value(expander):
    value = expander.expand("@integer(1, 100)")
    assert isinstance(value, int)
    assert 1 <= value <= 100
    assert isinstance(expander.expand("@boolean"), bool)


def test_embedded_directives_are_stringified(expander):
    text = expander.expand("user-@natural(1,9)-@word")
    assert re.fullmatch(r"user-[1-9]-\w+", text)


def test_email_addresses_are_not_directives(expander):
    assert expander.expand("john@email.com") == "john@email.com"
    assert not expander.has_directive("john@email.com")


def test_unknown_directive_is_kept(expander):
    result = expander.expand("@nope and @email")
    assert result.startswith("@nope and ")
    assert result != "@nope and @email"
    assert expander.expand("@nope") == "@nope"


def test_directive_names_are_case_insensitive(expander):
    assert "@" in expander.expand("@EMAIL")


def test_string_and_date_formats(expander):
    assert len(expander.expand("@string(5)")) == 5
    assert set(expander.expand("@string('ab', 8)")) <= {"a", "b"}
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", expander.expand("@date"))
    assert re.fullmatch(r"\d{2}/\d{2}", expander.expand("@date('MM/dd')"))


def test_generate_unknown_raises(expander):
    with pytest.raises(KeyError):
        expander.generate("nope")


def test_parse_arguments_and_date_tokens():
    assert parse_arguments("1, 100") == [1, 100]
    assert parse_arguments("'yyyy', \"x\"") == ["yyyy", "x"]
    assert parse_arguments(None) == []
    assert to_strftime("yyyy-MM-dd HH:mm:ss") == "%Y-%m-%d %H:%M:%S"
    assert to_strftime("100%") == "100%%"


def test_documented_directives_are_supported(expander):
    documented = (
        "name cname first cfirst last clast email url domain ip guid uuid id "
        "integer natural float boolean bool string word cword sentence csentence "
        "paragraph cparagraph title ctitle date time datetime now city province "
        "county region zip phone color"
    ).split()
    supported = expander.directives()

    assert supported == sorted(supported)
    assert set(documented) <= set(supported)
