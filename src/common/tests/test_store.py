import pytest
from django.db import IntegrityError, InterfaceError, OperationalError

from common.exceptions import ErrorKind, StoreUnavailableError
from common.store import translate_store_errors


@pytest.mark.parametrize("error", [OperationalError("server closed the connection"), InterfaceError("gone")])
def test_connectivity_errors_become_unavailable(error: Exception) -> None:
    @translate_store_errors
    def broken() -> None:
        raise error

    with pytest.raises(StoreUnavailableError) as exc_info:
        broken()

    assert exc_info.value.kind == ErrorKind.UNAVAILABLE
    assert exc_info.value.__cause__ is error


def test_integrity_errors_propagate() -> None:
    @translate_store_errors
    def duplicate() -> None:
        raise IntegrityError("unique constraint")

    with pytest.raises(IntegrityError):
        duplicate()


def test_return_value_is_kept() -> None:
    @translate_store_errors
    def fine(x: int) -> int:
        return x * 2

    assert fine(21) == 42
