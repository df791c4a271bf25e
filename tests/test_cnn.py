import numpy as np
import pytest

from qgpnet.cnn import (
    CnnTrainer,
    flatten_channels,
    import_event_file,
    list_directory,
    main,
)
from qgpnet.tensors import Channel

EVENT_VALUES = 28 * 20 ** 3


def _write_event(path, value):
    path.write_text(" ".join([value] * EVENT_VALUES), encoding="utf-8")
    return path


def test_flatten_channels_preserves_order():
    rng = np.random.default_rng(1)
    channels = [Channel(3, rng), Channel(3, rng)]
    flat = flatten_channels(channels)
    assert flat.shape == (54, 1)
    np.testing.assert_array_equal(flat[:27, 0], channels[0].tensor.ravel())
    np.testing.assert_array_equal(flat[27:, 0], channels[1].tensor.ravel())
    assert flat[1, 0] == channels[0].tensor[0, 0, 1]


def test_import_event_file_reads_all_channels(tmp_path):
    path = tmp_path / "event.txt"
    np.savetxt(path, np.arange(EVENT_VALUES, dtype=float))
    channels = import_event_file(path)
    assert len(channels) == 28
    assert all(channel.tensor.shape == (20, 20, 20) for channel in channels)
    assert channels[0].tensor[0, 0, 1] == 1.0
    assert channels[1].tensor[0, 0, 0] == 8000.0


def test_import_event_file_truncated(tmp_path):
    path = tmp_path / "short.txt"
    path.write_text("1 2 3", encoding="utf-8")
    with pytest.raises(ValueError):
        import_event_file(path)


def test_import_event_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        import_event_file(tmp_path / "absent.txt")


def test_list_directory_sorted(tmp_path):
    for name in ["b.txt", "a.txt", "c.txt"]:
        (tmp_path / name).write_text("0", encoding="utf-8")
    assert [entry.name for entry in list_directory(tmp_path)] == ["a.txt", "b.txt", "c.txt"]


def test_run_epoch_rejects_too_many_events():
    trainer = CnnTrainer(rng=np.random.default_rng(0))
    with pytest.raises(ValueError, match="Only 10000 events available"):
        trainer.run_epoch(1, 10001, 1)


def test_trainer_needs_two_pools():
    with pytest.raises(ValueError):
        CnnTrainer([["a"], ["b"], ["c"]], rng=np.random.default_rng(0))


def test_predict_outputs_single_probability():
    rng = np.random.default_rng(5)
    trainer = CnnTrainer(rng=rng)
    channels = [Channel(20, rng) for _ in range(28)]
    output = trainer.predict(channels)
    assert output.shape == (1, 1)
    assert np.isclose(output.sum(), 1.0)


def test_predict_rejects_wrong_channel_count():
    rng = np.random.default_rng(5)
    trainer = CnnTrainer(rng=rng)
    with pytest.raises(ValueError):
        trainer.predict([Channel(20, rng) for _ in range(3)])


def test_batch_consumes_events(tmp_path):
    qgp = _write_event(tmp_path / "qgp.txt", "0.5")
    nqgp = _write_event(tmp_path / "nqgp.txt", "0.25")
    trainer = CnnTrainer([[qgp] * 3, [nqgp] * 3], rng=np.random.default_rng(11))
    results = trainer.batch(2, [[qgp], [nqgp]])
    assert len(results) == 2
    assert all(label in (0, 1) for _, label in results)
    assert all(output.shape == (1, 1) for output, _ in results)
    assert sum(len(pool) for pool in trainer.complete_list) == 4


def test_batch_with_empty_candidates():
    trainer = CnnTrainer([[], []], rng=np.random.default_rng(2))
    with pytest.raises(IndexError):
        trainer.batch(1, [[], []])


def test_run_epoch_pops_from_pools(tmp_path):
    qgp = _write_event(tmp_path / "qgp.txt", "1")
    nqgp = _write_event(tmp_path / "nqgp.txt", "0")
    trainer = CnnTrainer([[qgp, qgp], [nqgp, nqgp]], rng=np.random.default_rng(4))
    trainer.run_epoch(1, 2, 1)
    assert sum(len(pool) for pool in trainer.complete_list) == 3


def test_main_reports_missing_directory(tmp_path, capsys):
    assert main([str(tmp_path / "nowhere")]) == 1
    assert "nowhere" in capsys.readouterr().out