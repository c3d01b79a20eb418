import pytest
from hypothesis import given, strategies as st

from mvc_observer import Subject
from registry_config import RegistryConfig
from registry_errors import HandlerFailure, ObserverNotFound


class Recorder:
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def update(self, context):
        self.log.append((self.name, context))


class Boom:
    def update(self, context):
        raise RuntimeError("boom")


def test_notify_order_with_duplicates():
    log = []
    a, b = Recorder("A", log), Recorder("B", log)
    subject = Subject()
    subject.add_observer(a)
    subject.add_observer(b)
    subject.add_observer(a)

    assert subject.observers.count() == 3
    subject.notify(5)
    assert log == [("A", 5), ("B", 5), ("A", 5)]


def test_context_passed_unchanged():
    log = []
    ctx = {"x": 1}
    subject = Subject()
    subject.add_observer(Recorder("A", log))
    subject.notify(ctx)
    assert log[0][1] is ctx


def test_remove_observer_removes_one_occurrence():
    log = []
    a, b = Recorder("A", log), Recorder("B", log)
    subject = Subject()
    for o in (a, b, a):
        subject.add_observer(o)

    subject.remove_observer(a)
    subject.notify(1)
    assert log == [("B", 1), ("A", 1)]


def test_remove_missing_observer_is_noop():
    log = []
    a, b = Recorder("A", log), Recorder("B", log)
    subject = Subject()
    subject.add_observer(a)

    subject.remove_observer(b)
    subject.remove_observer(b)
    assert subject.observers.snapshot() == (a,)


def test_remove_missing_observer_strict():
    subject = Subject(RegistryConfig(strict_removal=True))
    with pytest.raises(ObserverNotFound):
        subject.remove_observer(Recorder("A", []))


def test_observer_added_during_notify_waits_for_next_pass():
    log = []
    subject = Subject()
    late = Recorder("late", log)

    class Adder:
        def update(self, context):
            log.append(("adder", context))
            subject.add_observer(late)

    adder = Adder()
    subject.add_observer(adder)
    subject.notify(1)
    assert log == [("adder", 1)]

    subject.remove_observer(adder)
    subject.notify(2)
    assert log == [("adder", 1), ("late", 2)]


def test_removal_during_notify_does_not_skip_others():
    log = []
    subject = Subject()
    b = Recorder("B", log)
    c = Recorder("C", log)

    class Remover:
        def update(self, context):
            log.append(("R", context))
            subject.remove_observer(self)
            subject.remove_observer(b)

    subject.add_observer(Remover())
    subject.add_observer(b)
    subject.add_observer(c)

    subject.notify(0)
    assert log == [("R", 0), ("B", 0), ("C", 0)]
    assert subject.observers.snapshot() == (c,)


def test_reentrant_notify_does_not_deadlock():
    log = []
    subject = Subject()

    class Echo:
        def update(self, context):
            log.append(context)
            if context < 3:
                subject.notify(context + 1)

    subject.add_observer(Echo())
    subject.notify(0)
    assert log == [0, 1, 2, 3]


def test_handler_failure_is_fail_fast():
    log = []
    subject = Subject()
    subject.add_observer(Recorder("A", log))
    subject.add_observer(Boom())
    subject.add_observer(Recorder("C", log))

    with pytest.raises(RuntimeError, match="boom"):
        subject.notify("x")
    assert log == [("A", "x")]


def test_isolated_failures_collected():
    log = []
    boom = Boom()
    subject = Subject(RegistryConfig(isolate_failures=True))
    subject.add_observer(Recorder("A", log))
    subject.add_observer(boom)
    subject.add_observer(Recorder("C", log))

    with pytest.raises(HandlerFailure) as ei:
        subject.notify("x")

    assert log == [("A", "x"), ("C", "x")]
    assert len(ei.value.failures) == 1
    assert ei.value.failures[0][0] is boom
    assert isinstance(ei.value.__cause__, RuntimeError)


@given(names=st.lists(st.sampled_from("abcde"), max_size=20))
def test_notify_invokes_each_registration_once_in_order(names):
    log = []
    pool = {n: Recorder(n, log) for n in "abcde"}
    subject = Subject()
    for n in names:
        subject.add_observer(pool[n])

    subject.notify(42)
    assert log == [(n, 42) for n in names]
