"""Tests for custom exception hierarchy."""

import pytest

from dicekit.container import Container
from dicekit.exceptions import (
    DiceError,
    DiceInvalidRegistrationError,
    DiceMemberNotInjectedError,
    DiceNotFoundError,
    DiceQualifierMismatchError,
    DiceWeakReferenceError,
)


class _Service:
    pass


@pytest.mark.parametrize(
    "error_type",
    [
        DiceInvalidRegistrationError,
        DiceMemberNotInjectedError,
        DiceNotFoundError,
        DiceQualifierMismatchError,
        DiceWeakReferenceError,
    ],
)
def test_all_errors_derive_from_base(error_type: type[Exception]) -> None:
    assert issubclass(error_type, DiceError)


def test_member_not_injected_is_attribute_error() -> None:
    assert issubclass(DiceMemberNotInjectedError, AttributeError)


class TestDiceNotFoundError:
    def test_message_without_qualifier(self) -> None:
        error = DiceNotFoundError(_Service)

        assert str(error) == "'_Service' is not registered."
        assert error.dependency is _Service
        assert error.qualifier is None

    def test_message_with_qualifier(self) -> None:
        error = DiceNotFoundError(_Service, "primary")

        assert str(error) == "'_Service' is not registered (qualifier 'primary')."

    def test_message_for_non_class_key(self) -> None:
        assert str(DiceNotFoundError("db-url")) == "'db-url' is not registered."

    def test_raised_by_resolve(self) -> None:
        with pytest.raises(DiceError):
            Container().resolve(_Service)


class TestDiceQualifierMismatchError:
    def test_message_lists_registered_qualifiers(self) -> None:
        error = DiceQualifierMismatchError(_Service, "replica", ("primary", None))

        assert str(error) == (
            "'_Service' is not registered with qualifier 'replica'; registered qualifiers: 'primary', None."
        )
        assert error.registered == ("primary", None)

    def test_raised_by_resolve(self) -> None:
        container = Container()
        container.register(_Service, qualifier="primary")

        with pytest.raises(DiceQualifierMismatchError) as exc_info:
            container.resolve(_Service, "replica")

        assert exc_info.value.dependency is _Service
        assert exc_info.value.qualifier == "replica"
