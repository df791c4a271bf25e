import pytest

from qgpnet.app import PlotKind, main, plot_series, topology_for_mode
from qgpnet.datastorage import DataStorage


@pytest.mark.parametrize(
    "mode, expected",
    [
        (0, [224000, 2, 1]),
        (1, [224000, 64, 2, 1]),
        (2, [224000, 64, 64, 2, 1]),
    ],
)
def test_topology_for_mode(mode, expected):
    assert topology_for_mode(mode) == expected


def test_unknown_mode():
    with pytest.raises(ValueError):
        topology_for_mode(3)


def test_empty_storage_uses_default_ranges():
    view = plot_series(DataStorage(), PlotKind.TIME)
    assert view.xs == ()
    assert view.ys == ()
    assert view.x_range == (0.0, 5.0)
    assert view.y_range == (0.0, 2.0)


@pytest.mark.parametrize(
    "kind, y_label",
    [
        (PlotKind.TIME, "time [s]"),
        (PlotKind.LOSS, "loss"),
        (PlotKind.LOSS_ACCUMULATED, "accumulated loss"),
    ],
)
def test_labels(kind, y_label):
    view = plot_series(DataStorage(), kind)
    assert view.x_label == "epoch"
    assert view.y_label == y_label


def test_invalid_kind():
    with pytest.raises(ValueError):
        plot_series(DataStorage(), 7)


def test_loss_series_is_returned_unchanged():
    storage = DataStorage()
    storage.accept_new_datapoint("loss", 1, 0.5)
    storage.accept_new_datapoint("loss", 2, 0.25)
    view = plot_series(storage, PlotKind.LOSS)
    assert view.xs == (1.0, 2.0)
    assert view.ys == (0.5, 0.25)
    assert view.y_range == (0.0, 2.0)


def test_accumulated_loss_sums_earlier_epochs():
    storage = DataStorage()
    losses = [0.5, 1.5, 2.0, 0.25]
    for epoch, loss in enumerate(losses, start=1):
        storage.accept_new_datapoint("loss", epoch, loss)
    view = plot_series(storage, PlotKind.LOSS_ACCUMULATED)
    assert view.xs == (1.0, 2.0, 3.0, 4.0)
    assert view.ys[0] == 0.0
    for index in range(len(losses) - 1):
        assert view.ys[index + 1] - view.ys[index] == pytest.approx(losses[index])


def test_ranges_grow_beyond_data():
    storage = DataStorage()
    for epoch in range(1, 9):
        storage.accept_new_datapoint("time", epoch, epoch * 1.5)
    view = plot_series(storage, PlotKind.TIME)
    assert view.x_range[1] > max(view.xs)
    assert view.y_range[1] > max(view.ys)


def test_format_lists_every_point():
    storage = DataStorage()
    storage.accept_new_datapoint("time", 1, 3)
    storage.accept_new_datapoint("time", 2, 4)
    text = plot_series(storage, PlotKind.TIME).format()
    lines = text.splitlines()
    assert len(lines) == 3
    assert "time [s]" in lines[0]


def test_main_reports_failure_for_missing_directory(tmp_path, capsys):
    code = main([str(tmp_path / "absent"), "--epochs", "1"])
    assert code == 1
    assert "accumulated loss" in capsys.readouterr().out