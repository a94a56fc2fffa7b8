from dicekit.lazy import Lazy


def test_factory_is_not_called_before_first_resolve() -> None:
    calls: list[int] = []

    lazy = Lazy(lambda: calls.append(1))

    assert calls == []
    assert lazy.is_resolved is False


def test_factory_runs_once_and_result_is_cached() -> None:
    calls: list[object] = []

    def factory() -> object:
        value = object()
        calls.append(value)
        return value

    lazy = Lazy(factory)

    first = lazy.resolve()
    second = lazy()

    assert first is second
    assert len(calls) == 1
    assert lazy.is_resolved is True


def test_none_result_is_memoized() -> None:
    calls: list[int] = []

    def factory() -> None:
        calls.append(1)

    lazy = Lazy(factory)
    lazy()
    lazy()

    assert calls == [1]


def test_separate_wrappers_do_not_share_results() -> None:
    def factory() -> object:
        return object()

    assert Lazy(factory)() is not Lazy(factory)()


def test_repr_reports_state() -> None:
    lazy = Lazy(lambda: 1)
    assert "pending" in repr(lazy)

    lazy()
    assert "resolved" in repr(lazy)
