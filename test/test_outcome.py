import pytest

from runtools.archiver.outcome import Outcome


def test_order():
    assert Outcome.SUCCESS.is_better_than(Outcome.UNSTABLE)
    assert Outcome.UNSTABLE.is_better_than(Outcome.FAILURE)
    assert Outcome.FAILURE.is_better_than(Outcome.NOT_BUILT)
    assert Outcome.NOT_BUILT.is_better_than(Outcome.ABORTED)


def test_strict_and_inclusive_comparisons():
    assert not Outcome.SUCCESS.is_better_than(Outcome.SUCCESS)
    assert Outcome.SUCCESS.is_better_or_equal_to(Outcome.SUCCESS)
    assert Outcome.UNSTABLE.is_better_or_equal_to(Outcome.UNSTABLE)
    assert not Outcome.FAILURE.is_better_or_equal_to(Outcome.UNSTABLE)
    assert Outcome.FAILURE.is_worse_than(Outcome.UNSTABLE)
    assert Outcome.FAILURE.is_worse_or_equal_to(Outcome.FAILURE)


def test_combine():
    assert Outcome.SUCCESS.combine(Outcome.FAILURE) == Outcome.FAILURE
    assert Outcome.FAILURE.combine(Outcome.UNSTABLE) == Outcome.FAILURE
    assert Outcome.UNSTABLE.combine(Outcome.UNSTABLE) == Outcome.UNSTABLE


def test_from_name():
    assert Outcome.from_name('unstable') == Outcome.UNSTABLE
    assert Outcome.from_name('NOT_BUILT') == Outcome.NOT_BUILT
    with pytest.raises(ValueError):
        Outcome.from_name('broken')
