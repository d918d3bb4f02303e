"""Tests for the transform/recover session."""

import os

import numpy as np
import pytest
from models.sample_volume import SampleVolume
from models.transform_params import TransformParams
from engines.session import TransformSession, SessionState, TransformCancelled
from utils.test_images import generate_sequential_grid, generate_noise


def make_session(image, **kwargs):
    return TransformSession(SampleVolume.from_image(image), **kwargs)


def test_sequential_grid_end_to_end():
    """8x8 grid of 0..63: three stages, exact recovery, identity at stage 0."""
    grid = generate_sequential_grid(8, 8)
    session = make_session(grid)

    forward = session.transform()
    assert len(forward) == 4
    assert [r.stage for r in forward] == [0, 1, 2, 3]
    assert np.array_equal(forward[0].expansion[:, :, 0], grid)
    assert np.array_equal(forward[0].image[:, :, 0], grid)

    # Fully decomposed: the single coarse value is the grid mean
    assert np.isclose(forward.final.image[0, 0, 0], grid.mean())
    assert np.allclose(forward.final.expansion, grid.mean())

    recovered = session.recover()
    assert len(recovered) == 4
    assert np.allclose(recovered.final.image[:, :, 0], grid, rtol=1e-9, atol=1e-9)
    assert session.state == SessionState.COMPLETED


@pytest.mark.parametrize("width,height,bands", [
    (1, 1, 1), (1, 7, 1), (7, 1, 3), (3, 5, 1), (5, 3, 2), (13, 2, 1), (2, 13, 1),
    (16, 16, 3), (97, 61, 3), (64, 9, 4)
])
def test_round_trip(width, height, bands):
    """recover(transform(X)) == X for any extents, including odd ones."""
    image = generate_noise(width, height, bands, seed=width * 31 + height)
    session = make_session(image)
    session.transform()
    recovered = session.recover()
    assert np.allclose(recovered.final.image, image, rtol=1e-9, atol=1e-9)
    assert len(recovered) == session.schedule.total_stages + 1


def test_degenerate_grid_is_noop():
    """1x1 input yields the original as the only result."""
    session = make_session(np.array([[[12.0, 34.0, 56.0]]]))
    results = session.transform()
    assert len(results) == 1
    assert np.array_equal(results[0].image, [[[12.0, 34.0, 56.0]]])


def test_expansion_uses_applied_pass_counts():
    """Exhausted axes stop scaling the expansion."""
    session = make_session(generate_noise(2, 16, 1))
    results = session.transform()
    applied = [(r.row_stages_applied, r.column_stages_applied) for r in results]
    assert applied == [(0, 0), (1, 1), (1, 2), (1, 3), (1, 4)]


def test_progress_is_monotonic_and_reaches_100():
    """Progress is reported after every checkpoint and ends at 100."""
    values = []
    session = make_session(generate_noise(12, 5, 1), report_progress=values.append)
    session.transform()
    assert len(values) == 2 + 4 * session.schedule.total_stages
    assert values == sorted(values)
    assert values[-1] == 100


def test_progress_for_zero_stage_run():
    """A zero-stage run still completes its progress."""
    values = []
    make_session(np.zeros((1, 1)), report_progress=values.append).transform()
    assert values == [50, 100]


def polls_until(limit):
    """Cancellation poll that answers True from the given call onwards."""
    calls = {'n': 0}

    def is_cancelled():
        calls['n'] += 1
        return calls['n'] >= limit
    return is_cancelled


@pytest.mark.parametrize("limit", [1, 3, 4, 7, 10])
def test_cancel_transform_restores_original(limit):
    """Cancelling at any checkpoint leaves the pristine volume."""
    image = generate_noise(11, 9, 3)
    session = make_session(image, is_cancelled=polls_until(limit))
    with pytest.raises(TransformCancelled):
        session.transform()
    assert session.state == SessionState.CANCELLED
    assert np.array_equal(session.volume.to_image(), image)


def test_cancel_recover_restores_original():
    """Cancelling a recovery also restores the pristine samples."""
    image = generate_noise(10, 10, 1)
    cancel = {'flag': False}
    session = make_session(image, is_cancelled=lambda: cancel['flag'])
    session.transform()

    cancel['flag'] = True
    with pytest.raises(TransformCancelled):
        session.recover()
    assert np.array_equal(session.volume.to_image(), image)


def test_failure_restores_original(monkeypatch):
    """An error inside a pass marks the session failed and resets it."""
    def boom(data, stage):
        raise FloatingPointError("bad pass")

    monkeypatch.setattr("engines.session.column_pass", boom)
    image = generate_noise(8, 8, 1)
    session = make_session(image)
    with pytest.raises(FloatingPointError):
        session.transform()
    assert session.state == SessionState.FAILED
    assert np.array_equal(session.volume.to_image(), image)


def test_running_session_rejects_second_run():
    """Only one run at a time per session."""
    session = make_session(np.zeros((4, 4)))
    session.state = SessionState.RUNNING
    with pytest.raises(RuntimeError):
        session.transform()


def test_write_files(tmp_path):
    """Completed runs persist every stage when asked to."""
    params = TransformParams(write_files=True, output_dir=str(tmp_path), file_ext="png")
    session = make_session(generate_sequential_grid(8, 8), params=params)
    session.transform()

    names = sorted(os.listdir(tmp_path))
    assert len(names) == 8
    assert "Transform_0.png" in names
    assert "TransformPE_3.png" in names


def test_recover_expansion_uses_remaining_pass_counts():
    """Recovery expansions follow the passes still left on each axis."""
    image = generate_noise(2, 16, 1)
    session = make_session(image)
    session.transform()
    recovered = session.recover()

    applied = [(r.row_stages_applied, r.column_stages_applied) for r in recovered]
    assert applied == [(1, 4), (1, 3), (1, 2), (1, 1), (0, 0)]
    assert np.allclose(recovered.final.expansion, image, rtol=1e-9, atol=1e-9)


def test_failed_file_write_marks_session_failed(tmp_path, monkeypatch):
    """An error while persisting stages is a failed run, not a completed one."""
    def refuse(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("engines.session.save_stage_images", refuse)
    image = generate_noise(8, 8, 1)
    params = TransformParams(write_files=True, output_dir=str(tmp_path))
    session = make_session(image, params=params)
    with pytest.raises(OSError):
        session.transform()
    assert session.state == SessionState.FAILED
    assert np.array_equal(session.volume.to_image(), image)


def test_stage_timings():
    """Every stage records its wall time; the sequence total is their sum."""
    session = make_session(generate_noise(12, 7, 2))
    results = session.transform()
    timings = [r.elapsed_ms for r in results]
    assert all(t >= 0.0 for t in timings)
    assert results.total_time_ms == pytest.approx(sum(timings))
