# test/test_timeseries.py
import numpy as np
import pytest

from wav2pwl.core.timeseries import TimeSeries, SampleBuffer
from wav2pwl.core.exceptions import InvalidTimeSeries, NonMonotonicTime


def test_init_ok_basic():
    t = np.array([0.0, 1.0, 2.0])
    v = np.array([10.0, 20.0, 30.0])
    ts = TimeSeries(time=t, values=v, unit="V", name="out")

    assert ts.n == 3
    assert ts.t_start == 0.0
    assert ts.t_end == 2.0
    assert ts.unit == "V"
    assert ts.name == "out"


def test_init_rejects_non_1d():
    t = np.array([[0.0, 1.0]])
    v = np.array([1.0, 2.0])
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=t, values=v)


def test_init_rejects_length_mismatch():
    t = np.array([0.0, 1.0, 2.0])
    v = np.array([1.0, 2.0])
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=t, values=v)


def test_init_rejects_non_finite_time():
    t = np.array([0.0, np.nan, 2.0])
    v = np.array([1.0, 2.0, 3.0])
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=t, values=v)


def test_init_rejects_negative_time():
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=np.array([-1.0, 0.0]), values=np.array([1.0, 2.0]))


def test_init_rejects_non_monotonic_time():
    t = np.array([0.0, 0.1, 0.05])
    v = np.array([1.0, 2.0, 3.0])
    with pytest.raises(NonMonotonicTime):
        TimeSeries(time=t, values=v)


def test_non_monotonic_is_an_invalid_time_series():
    assert issubclass(NonMonotonicTime, InvalidTimeSeries)


def test_allows_duplicate_times_non_decreasing():
    t = np.array([0.0, 1.0, 1.0, 2.0])
    v = np.array([1.0, 2.0, 3.0, 4.0])
    ts = TimeSeries(time=t, values=v)
    assert ts.n == 4


def test_empty_series_is_valid():
    ts = TimeSeries(time=np.array([]), values=np.array([]))
    assert ts.n == 0
    assert ts.t_start is None
    assert ts.t_end is None


def test_decimate_keeps_true_time():
    t = np.arange(7) / 10.0
    v = np.arange(7, dtype=float)
    out = TimeSeries(time=t, values=v, name="x").decimate(3)

    assert np.allclose(out.time, [0.0, 0.3, 0.6])
    assert np.allclose(out.values, [0.0, 3.0, 6.0])
    assert out.name == "x"


def test_decimate_by_one_returns_self():
    ts = TimeSeries(time=np.array([0.0, 1.0]), values=np.array([1.0, 2.0]))
    assert ts.decimate(1) is ts


def test_decimate_rejects_zero():
    ts = TimeSeries(time=np.array([0.0, 1.0]), values=np.array([1.0, 2.0]))
    with pytest.raises(ValueError):
        ts.decimate(0)


def test_scale_multiplies_values_only():
    ts = TimeSeries(time=np.array([0.0, 1.0]), values=np.array([0.5, -0.25]))
    out = ts.scale(2.0)
    assert np.allclose(out.time, [0.0, 1.0])
    assert np.allclose(out.values, [1.0, -0.5])


def test_scale_can_change_unit():
    ts = TimeSeries(time=np.array([0.0]), values=np.array([0.5]))
    assert ts.scale(2.0, unit="V").unit == "V"
    assert ts.scale(2.0, unit="V").scale(3.0).unit == "V"
    assert ts.scale(2.0).unit is None


def test_to_numpy_copy_flag():
    t = np.array([0.0, 1.0, 2.0])
    v = np.array([1.0, 2.0, 3.0])
    ts = TimeSeries(time=t, values=v)

    t_view, v_view = ts.to_numpy(copy=False)
    t_cp, v_cp = ts.to_numpy(copy=True)

    assert t_view is ts.time and v_view is ts.values
    assert t_cp is not ts.time and v_cp is not ts.values
    assert np.allclose(t_cp, ts.time) and np.allclose(v_cp, ts.values)


class TestSampleBuffer:
    def test_basic(self):
        buf = SampleBuffer(samples=np.zeros(100), sample_rate=1000)
        assert buf.n == 100
        assert buf.duration == pytest.approx(0.1)

    def test_rejects_non_positive_rate(self):
        with pytest.raises(InvalidTimeSeries):
            SampleBuffer(samples=np.zeros(4), sample_rate=0)

    def test_rejects_2d_samples(self):
        with pytest.raises(InvalidTimeSeries):
            SampleBuffer(samples=np.zeros((2, 2)), sample_rate=8000)

    def test_empty_is_valid(self):
        buf = SampleBuffer(samples=np.array([]), sample_rate=8000)
        assert buf.n == 0
        assert buf.to_timeseries().n == 0

    def test_to_timeseries_uses_index_over_rate(self):
        buf = SampleBuffer(samples=np.array([0.1, 0.2, 0.3]), sample_rate=4)
        ts = buf.to_timeseries(name="v")
        assert np.allclose(ts.time, [0.0, 0.25, 0.5])
        assert np.allclose(ts.values, [0.1, 0.2, 0.3])
        assert ts.attrs["sample_rate"] == 4
