import io
import shutil

import pytest

from runtools.archiver import retention
from runtools.archiver.build import BuildHistory
from runtools.archiver.listener import BuildListener
from runtools.archiver.outcome import Outcome
from runtools.archiver.retention import superseded_builds, sweep
from runtools.archiver.test.build import fake_history

S, U, F, NB, A = Outcome.SUCCESS, Outcome.UNSTABLE, Outcome.FAILURE, Outcome.NOT_BUILT, Outcome.ABORTED


@pytest.fixture
def console():
    return io.StringIO()


@pytest.fixture
def listener(console):
    return BuildListener(console)


def numbers(records):
    return [r.number for r in records]


@pytest.mark.parametrize('outcomes, expected', [
    ((S, F, S, U), [3, 2, 1]),
    ((F, U, S), []),
    ((S, S, S), [2, 1]),
    ((U, S, F), [1]),
    ((NB, A, S), [3, 2]),
    ((), []),
])
def test_superseded_builds(tmp_path, outcomes, expected):
    history = fake_history(tmp_path, *outcomes, with_artifacts=False)
    assert numbers(superseded_builds(history)) == expected


def test_sweep_deletes_superseded(tmp_path, listener, console):
    history = fake_history(tmp_path, S, F, S, U)

    deleted = sweep(history, listener)

    assert numbers(deleted) == [3, 2, 1]
    assert history[0].artifacts_dir.exists()
    assert not any(r.artifacts_dir.exists() for r in history[1:])
    assert console.getvalue().splitlines() == [
        'Deleting old artifacts from #3', 'Deleting old artifacts from #2', 'Deleting old artifacts from #1']


def test_sweep_skips_missing_dirs(tmp_path, listener, console):
    history = fake_history(tmp_path, S, F, with_artifacts=False)

    assert sweep(history, listener) == []
    assert console.getvalue() == ''


def test_sweep_empty_history(listener):
    assert sweep(BuildHistory(), listener) == []


def test_deletion_failure_does_not_stop_sweep(tmp_path, listener, console, monkeypatch):
    history = fake_history(tmp_path, S, F, F, F)
    real_rmtree = shutil.rmtree

    def failing_rmtree(path, *args, **kwargs):
        if path.parent.name == '3':
            raise PermissionError('denied')
        return real_rmtree(path, *args, **kwargs)

    monkeypatch.setattr(retention.shutil, 'rmtree', failing_rmtree)

    deleted = sweep(history, listener)

    assert numbers(deleted) == [2, 1]
    assert history[1].artifacts_dir.exists()
    output = console.getvalue()
    assert 'ERROR: denied' in output
    assert 'Deleting old artifacts from #1' in output
