"""
Pytest configuration and fixtures for transaction generator tests.
"""

import re

import pytest

from cadence.values import Address


TOPSHOT_HEX = "1234567890abcdef"
RECIPIENT_HEX = "abcd000000000001"
RECEIVER_HEX = "01cf0e2f2f715450"


class LiteralReader:
    """
    Reads back the Cadence literal subset produced by the serializer:
    ``UIntN(d)``, arrays, string literals and dictionary literals.
    """

    _UINT = re.compile(r"UInt(32|64)\((\d+)\)")
    _ESCAPES = {"\\": "\\", '"': '"', "'": "'", "n": "\n", "r": "\r", "t": "\t", "0": "\0"}

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def read(self):
        value = self._value()
        if self.pos != len(self.text):
            raise ValueError(f"Trailing text at {self.pos}: {self.text[self.pos:]!r}")
        return value

    def _expect(self, token: str):
        if not self.text.startswith(token, self.pos):
            raise ValueError(f"Expected {token!r} at {self.pos}")
        self.pos += len(token)

    def _value(self):
        char = self.text[self.pos]
        if char == "[":
            return self._array()
        if char == "{":
            return self._dictionary()
        if char == '"':
            return self._string()
        match = self._UINT.match(self.text, self.pos)
        if not match:
            raise ValueError(f"Unexpected literal at {self.pos}")
        self.pos = match.end()
        return int(match.group(2))

    def _array(self):
        self._expect("[")
        items = []
        while not self.text.startswith("]", self.pos):
            if items:
                self._expect(", ")
            items.append(self._value())
        self._expect("]")
        return items

    def _dictionary(self):
        self._expect("{")
        entries = {}
        while not self.text.startswith("}", self.pos):
            if entries:
                self._expect(", ")
            key = self._string()
            self._expect(": ")
            entries[key] = self._value()
        self._expect("}")
        return entries

    def _string(self):
        self._expect('"')
        chars = []
        while True:
            char = self.text[self.pos]
            if char == '"':
                self.pos += 1
                return "".join(chars)
            if char in "\n\r":
                raise ValueError(f"Unescaped line break at {self.pos}")
            if char == "\\":
                code = self.text[self.pos + 1]
                if code == "u":
                    end = self.text.index("}", self.pos)
                    chars.append(chr(int(self.text[self.pos + 3:end], 16)))
                    self.pos = end + 1
                    continue
                chars.append(self._ESCAPES[code])
                self.pos += 2
                continue
            chars.append(char)
            self.pos += 1


@pytest.fixture
def decode_literal():
    """Decode a rendered Cadence literal back to a Python value."""
    return lambda text: LiteralReader(text).read()


@pytest.fixture
def topshot_address():
    """TopShot contract deployment address."""
    return Address.from_hex(TOPSHOT_HEX)


@pytest.fixture
def recipient_address():
    """Account receiving minted or transferred moments."""
    return Address.from_hex(RECIPIENT_HEX)


@pytest.fixture
def receiver_address():
    """TopshotAdminReceiver contract deployment address."""
    return Address.from_hex(RECEIVER_HEX)


@pytest.fixture
def sample_play_record():
    """Play metadata record as stored on chain."""
    return {
        "FullName": "Ja Morant",
        "FirstName": "Ja",
        "LastName": "Morant",
        "JerseyNumber": "12",
        "DraftYear": 2019,
        "TeamAtMoment": "Memphis Grizzlies",
        "PlayCategory": "Dunk",
    }


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's config files and environment."""
    import os
    import cli.config

    for key in list(os.environ):
        if key.startswith(cli.config.ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setattr(cli.config, "CONFIG_SEARCH_PATHS", [tmp_path / ".topshot.yml"])


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as a command line test"
    )
