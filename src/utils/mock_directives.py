# utils/mock_directives.py

"""
Mock.js style placeholders (``@email``, ``@integer(1,100)``...) expanded
with Faker.

A directive starts with ``@`` at the beginning of the text or after a
non-word character, so addresses such as ``john@email.com`` are left alone.
Directive names are case-insensitive; unknown names stay verbatim.
"""

import json
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from faker import Faker

_DIRECTIVE = re.compile(r"(?<![A-Za-z0-9_])@([A-Za-z_][A-Za-z0-9_]*)(?:\(([^()]*)\))?")

_DATE_TOKENS = (
    ("yyyy", "%Y"),
    ("yy", "%y"),
    ("MM", "%m"),
    ("dd", "%d"),
    ("HH", "%H"),
    ("hh", "%I"),
    ("mm", "%M"),
    ("ss", "%S"),
    ("A", "%p"),
)

MAX_SAFE_INTEGER = 2**53 - 1


def _parse_argument(raw: str) -> Any:
    text = raw.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        if len(text) >= 2 and text[0] == text[-1] == "'":
            return text[1:-1]
        return text


def parse_arguments(raw: Optional[str]) -> List[Any]:
    if raw is None or not raw.strip():
        return []
    return [_parse_argument(part) for part in raw.split(",")]


def to_strftime(mock_format: str) -> str:
    """Translate a Mock.js date format (``yyyy-MM-dd``) to strftime."""
    out = []
    i = 0
    while i < len(mock_format):
        for token, directive in _DATE_TOKENS:
            if mock_format.startswith(token, i):
                out.append(directive)
                i += len(token)
                break
        else:
            out.append(mock_format[i].replace("%", "%%"))
            i += 1
    return "".join(out)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class MockDirectiveExpander:
    """Expands ``@directive`` placeholders into random realistic values."""

    def __init__(self, locale: str = "en_US", seed: Optional[int] = None):
        self.faker = Faker(locale)
        self.faker_cn = Faker("zh_CN")
        if seed is not None:
            self.faker.seed_instance(seed)
            self.faker_cn.seed_instance(seed)
        self._handlers: Dict[str, Callable[..., Any]] = self._build_handlers()

    def directives(self) -> List[str]:
        return sorted(self._handlers)

    def has_directive(self, text: str) -> bool:
        return any(
            match.group(1).lower() in self._handlers
            for match in _DIRECTIVE.finditer(text)
        )

    def generate(self, name: str, *args: Any) -> Any:
        """Value for a single directive; raises KeyError when unknown."""
        handler = self._handlers[name.lower()]
        return handler(*[arg for arg in args if arg is not None])

    def expand(self, text: str) -> Any:
        """
        Replace every known directive in ``text``.

        When the whole text is one directive its typed value is returned
        (an ``int`` for ``@integer``), otherwise the expanded string.
        """
        whole = _DIRECTIVE.fullmatch(text)
        if whole and whole.group(1).lower() in self._handlers:
            return self.generate(whole.group(1), *parse_arguments(whole.group(2)))

        def _replace(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name.lower() not in self._handlers:
                return match.group(0)
            return _stringify(self.generate(name, *parse_arguments(match.group(2))))

        return _DIRECTIVE.sub(_replace, text)

    # handlers

    def _integer(self, min_value: int = -MAX_SAFE_INTEGER, max_value: int = MAX_SAFE_INTEGER) -> int:
        return self.faker.random_int(int(min_value), int(max_value))

    def _natural(self, min_value: int = 0, max_value: int = MAX_SAFE_INTEGER) -> int:
        return self.faker.random_int(max(0, int(min_value)), int(max_value))

    def _float(
        self,
        min_value: float = -1_000_000,
        max_value: float = 1_000_000,
        dmin: int = 0,
        dmax: int = 17,
    ) -> float:
        digits = self.faker.random_int(int(dmin), min(int(dmax), 10))
        value = self.faker.pyfloat(
            min_value=int(min_value), max_value=int(max_value), right_digits=digits
        )
        return round(value, digits)

    def _string(self, *args: Any) -> str:
        lengths = [int(a) for a in args if isinstance(a, (int, float))]
        pools = [a for a in args if isinstance(a, str)]
        if not lengths:
            low, high = 3, 7
        elif len(lengths) == 1:
            low = high = lengths[0]
        else:
            low, high = lengths[0], lengths[1]
        size = self.faker.random_int(low, high)
        if pools:
            return "".join(self.faker.random.choice(pools[0]) for _ in range(size))
        return self.faker.lexify("?" * size)

    def _date(self, mock_format: str = "yyyy-MM-dd") -> str:
        return self.faker.date_time().strftime(to_strftime(mock_format))

    def _time(self, mock_format: str = "HH:mm:ss") -> str:
        return self.faker.date_time().strftime(to_strftime(mock_format))

    def _datetime(self, mock_format: str = "yyyy-MM-dd HH:mm:ss") -> str:
        return self.faker.date_time().strftime(to_strftime(mock_format))

    def _now(self, *args: Any) -> str:
        mock_format = next((a for a in args if isinstance(a, str) and "y" in a), None)
        return datetime.now().strftime(to_strftime(mock_format or "yyyy-MM-dd HH:mm:ss"))

    def _title(self, min_words: int = 3, max_words: int = 7) -> str:
        words = self.faker.words(self.faker.random_int(int(min_words), int(max_words)))
        return " ".join(word.capitalize() for word in words)

    def _sentence(self, min_words: int = 12, max_words: Optional[int] = None) -> str:
        count = self.faker.random_int(int(min_words), int(max_words or min_words))
        return self.faker.sentence(nb_words=count, variable_nb_words=False)

    def _build_handlers(self) -> Dict[str, Callable[..., Any]]:
        fake, cn = self.faker, self.faker_cn
        return {
            "name": lambda *_: fake.name(),
            "first": lambda *_: fake.first_name(),
            "last": lambda *_: fake.last_name(),
            "cname": lambda *_: cn.name(),
            "cfirst": lambda *_: cn.last_name(),
            "clast": lambda *_: cn.first_name(),
            "email": lambda *_: fake.email(),
            "url": lambda *_: fake.url(),
            "domain": lambda *_: fake.domain_name(),
            "ip": lambda *_: fake.ipv4(),
            "guid": lambda *_: fake.uuid4(),
            "uuid": lambda *_: fake.uuid4(),
            "id": lambda *_: cn.ssn(),
            "integer": self._integer,
            "int": self._integer,
            "natural": self._natural,
            "float": self._float,
            "boolean": lambda *_: fake.pybool(),
            "bool": lambda *_: fake.pybool(),
            "string": self._string,
            "word": lambda *_: fake.word(),
            "cword": lambda *_: cn.word(),
            "sentence": self._sentence,
            "csentence": lambda *_: cn.sentence(),
            "paragraph": lambda *_: fake.paragraph(),
            "cparagraph": lambda *_: cn.paragraph(),
            "title": self._title,
            "ctitle": lambda *_: cn.sentence(nb_words=3).rstrip("。"),
            "date": self._date,
            "time": self._time,
            "datetime": self._datetime,
            "now": self._now,
            "city": lambda *_: cn.city(),
            "province": lambda *_: cn.province(),
            "region": lambda *_: cn.province(),
            "county": lambda *_: cn.district(),
            "zip": lambda *_: fake.postcode(),
            "phone": lambda *_: fake.phone_number(),
            "color": lambda *_: fake.hex_color(),
        }
