"""Tests for SessionStateHandler."""

from dataclasses import dataclass
from datetime import date

import pytest
from pydantic import BaseModel

from webquark.crypto import SymmetricCipher
from webquark.kernel.exceptions import ConfigurationException, InvalidArgumentException
from webquark.web.session import SessionStateHandler


class Cart(BaseModel):
    items: list[str]
    total: float


@dataclass
class Preferences:
    theme: str
    font_size: int = 12


class Untyped:
    def __init__(self, a: int) -> None:
        self.a = a


@pytest.fixture
def bag() -> dict:
    return {}


@pytest.fixture
def session(bag) -> SessionStateHandler:
    return SessionStateHandler(bag, encryption_key="test-session-key")


class TestConstruction:
    def test_missing_session_is_a_configuration_error(self):
        with pytest.raises(ConfigurationException) as exc_info:
            SessionStateHandler(None)
        assert exc_info.value.code == "SESSION_UNAVAILABLE"


class TestStrings:
    def test_set_and_get_string(self, session, bag):
        session.set_string("user", "alice")
        assert session.get_string("user") == "alice"
        assert bag["user"] == "alice"

    def test_missing_string_is_none(self, session):
        assert session.get_string("nope") is None

    def test_non_string_values_are_stringified(self, bag):
        bag["count"] = 3
        assert SessionStateHandler(bag).get_string("count") == "3"


class TestJson:
    def test_model_round_trip(self, session):
        session.set("cart", Cart(items=["a", "b"], total=9.5))
        assert session.get("cart", Cart) == Cart(items=["a", "b"], total=9.5)

    def test_dataclass_round_trip(self, session):
        session.set("prefs", Preferences(theme="dark"))
        assert session.get("prefs", Preferences) == Preferences(theme="dark", font_size=12)

    def test_stored_as_json_text(self, session, bag):
        session.set("prefs", {"theme": "dark"})
        assert bag["prefs"] == '{"theme":"dark"}'

    def test_primitives(self, session):
        session.set("n", 5)
        session.set("d", date(2024, 1, 2))
        assert session.get("n", int) == 5
        assert session.get("d", date) == date(2024, 1, 2)

    def test_missing_returns_default(self, session):
        assert session.get("nope", int, 7) == 7

    def test_unreadable_returns_default(self, session):
        session.set_string("n", "not json")
        assert session.get("n", int, 7) == 7

    def test_try_get(self, session):
        session.set("n", 5)
        assert session.try_get("n", int) == (5, True)
        assert session.try_get("missing", int) == (None, False)

    def test_type_without_schema_returns_default(self, session):
        session.set_string("k", '{"a": 1}')
        assert session.get("k", Untyped, "fallback") == "fallback"
        assert session.try_get("k", Untyped) == (None, False)


class TestBookkeeping:
    def test_has_key_remove_clear(self, session):
        session.set_string("a", "1")
        session.set_string("b", "2")
        assert session.has_key("a")

        session.remove("a")
        assert not session.has_key("a")
        session.remove("a")

        session.clear()
        assert not session.has_key("b")


class TestEncrypted:
    def test_round_trip(self, session):
        session.set_encrypted("card", {"last4": "4242"})
        assert session.get_encrypted("card", dict) == {"last4": "4242"}

    def test_stored_value_is_not_plaintext(self, session, bag):
        session.set_encrypted("token", "super-secret")
        assert "super-secret" not in bag["token"]

    def test_uses_configured_key(self, bag):
        SessionStateHandler(bag, encryption_key="k1").set_encrypted("token", "value")
        plain = SymmetricCipher().decrypt(bag["token"], "k1")
        assert plain == '"value"'

    def test_other_key_cannot_read(self, bag):
        SessionStateHandler(bag, encryption_key="k1").set_encrypted("token", "value")
        assert SessionStateHandler(bag, encryption_key="k2").get_encrypted("token", str, "none") == "none"

    def test_tampered_payload_returns_default(self, session, bag):
        session.set_encrypted("token", "value")
        bag["token"] = "A" + bag["token"][1:-4] + "!!!!"
        assert session.get_encrypted("token", str, "fallback") == "fallback"

    def test_plain_value_under_encrypted_key_returns_default(self, session):
        session.set_string("token", "plain")
        assert session.get_encrypted("token", str, "fallback") == "fallback"

    def test_missing_returns_default(self, session):
        assert session.get_encrypted("nope", str, "fallback") == "fallback"

    def test_none_value_rejected(self, session):
        with pytest.raises(InvalidArgumentException):
            session.set_encrypted("token", None)

    def test_type_without_schema_returns_default(self, session):
        session.set_encrypted("k", {"a": 1})
        assert session.get_encrypted("k", Untyped, "fallback") == "fallback"

    def test_without_configured_key_falls_back_to_entry_name(self, bag):
        handler = SessionStateHandler(bag)
        handler.set_encrypted("token", "value")
        assert SymmetricCipher().decrypt(bag["token"], "token") == '"value"'
        assert handler.get_encrypted("token", str) == "value"
