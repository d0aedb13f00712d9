import numpy as np
import pytest

from heatcore import grid
from heatcore.configs import MAX_SNAPSHOTS, HeatConfig
from heatcore.presets import build_initial_field
from heatcore.result import sup_norm, sup_norm_history
from heatcore.sampler import run, run_1d, run_2d, run_3d, snapshot_stride

SMALL_CONFIGS = [
    HeatConfig(dim=1, n=30, alpha=0.2, dt=0.001, t_end=0.3, initial="two-humps"),
    HeatConfig(dim=2, n=12, alpha=0.2, dt=0.001, t_end=0.2, initial="two-spots"),
    HeatConfig(dim=3, n=8, alpha=0.15, dt=0.0003, t_end=0.1, initial="point"),
]


@pytest.fixture(scope="module")
def small_results():
    return [run(cfg) for cfg in SMALL_CONFIGS]


@pytest.fixture(scope="module")
def scenario_1d():
    return run_1d(n=80, alpha=0.2, dt=0.0005, t_end=1.0, initial="point")


class TestStride:
    @pytest.mark.parametrize(
        "num_steps, max_snapshots, expected",
        [(1, 201, 1), (200, 201, 1), (201, 201, 2), (2763, 201, 14), (1000, 101, 10)],
    )
    def test_stride(self, num_steps, max_snapshots, expected):
        assert snapshot_stride(num_steps, max_snapshots) == expected


class TestEndpoints:
    @pytest.mark.parametrize("case", range(len(SMALL_CONFIGS)))
    def test_first_and_last_snapshot(self, case, small_results):
        cfg, result = SMALL_CONFIGS[case], small_results[case]
        initial = build_initial_field(cfg.n, cfg.dim, cfg.initial)

        assert result.times[0] == 0.0
        np.testing.assert_array_equal(result.snapshots[0], initial)
        assert result.times[-1] == result.steps * result.dt
        assert result.times[-1] == pytest.approx(cfg.t_end)

    @pytest.mark.parametrize("case", range(len(SMALL_CONFIGS)))
    def test_times_strictly_increasing(self, case, small_results):
        result = small_results[case]
        assert len(result.times) == len(result.snapshots)
        assert np.all(np.diff(result.times) > 0)

    @pytest.mark.parametrize("case", range(len(SMALL_CONFIGS)))
    def test_boundary_is_zero_in_every_snapshot(self, case, small_results):
        cfg, result = SMALL_CONFIGS[case], small_results[case]
        mask = grid.boundary_mask(cfg.dim, cfg.n)
        for snapshot in result.snapshots:
            assert np.all(snapshot[mask] == 0.0)

    @pytest.mark.parametrize("case", range(len(SMALL_CONFIGS)))
    def test_dt_within_stability_bound(self, case, small_results):
        cfg, result = SMALL_CONFIGS[case], small_results[case]
        assert result.dt <= result.h**2 / (2 * cfg.dim * cfg.alpha)

    def test_snapshots_are_distinct_copies(self, small_results):
        snapshots = small_results[0].snapshots
        assert not np.shares_memory(snapshots[0], snapshots[-1])
        assert not np.shares_memory(snapshots[-2], snapshots[-1])


class TestSnapshotBound:
    def test_long_1d_run_is_decimated(self):
        result = run_1d(n=200, alpha=0.2, dt=0.0001, t_end=10.0, initial="half")
        assert result.steps > 10_000
        assert len(result.times) <= MAX_SNAPSHOTS[1] + 1
        assert result.times[-1] == result.steps * result.dt

    def test_3d_cap(self):
        result = run_3d(n=6, alpha=0.5, dt=0.01, t_end=1.0, initial="corner")
        assert result.steps > 100
        assert len(result.snapshots) <= MAX_SNAPSHOTS[3] + 1

    @pytest.mark.parametrize("max_snapshots", [2, 5, 17])
    def test_custom_cap(self, max_snapshots):
        result = run_1d(
            n=20, alpha=0.2, dt=0.001, t_end=0.5, max_snapshots=max_snapshots
        )
        assert len(result.snapshots) <= max_snapshots + 1
        assert result.times[-1] == result.steps * result.dt

    def test_short_run_keeps_every_step(self):
        # h = 0.5 so the requested dt is stable and four steps are taken
        result = run_1d(n=1, alpha=0.1, dt=0.25, t_end=1.0, initial="bump")
        assert result.steps == 4
        assert result.times == (0.0, 0.25, 0.5, 0.75, 1.0)


class TestScenarios:
    def test_1d_point_partial_decay(self, scenario_1d):
        assert scenario_1d.steps in (2762, 2763)
        assert scenario_1d.dt < 0.0005
        final = sup_norm(scenario_1d.snapshots[-1])
        assert 0.0 < final < 1.0

    def test_2d_corner_boundary_ring(self):
        result = run_2d(n=40, alpha=0.2, dt=0.001, t_end=0.1, initial="corner")
        first = result.snapshots[0].reshape(42, 42)
        assert np.all(first[1:13, 1:13] == 1.0)
        assert first.sum() == 144.0
        for snapshot in result.snapshots:
            g = snapshot.reshape(42, 42)
            assert np.all(g[0, :] == 0.0) and np.all(g[-1, :] == 0.0)
            assert np.all(g[:, 0] == 0.0) and np.all(g[:, -1] == 0.0)

    def test_3d_two_spots_initial(self):
        result = run_3d(n=20, alpha=0.15, dt=0.0003, t_end=0.01, initial="two-spots")
        np.testing.assert_array_equal(
            result.snapshots[0], build_initial_field(20, 3, "two-spots")
        )
        assert set(np.unique(result.snapshots[0])) == {0.0, 1.0}

    @pytest.mark.parametrize("dim, n", [(1, 50), (2, 16), (3, 8)])
    def test_half_decays_monotonically(self, dim, n):
        cfg = HeatConfig(dim=dim, n=n, alpha=0.2, dt=0.01, t_end=1.0, initial="half")
        result = run(cfg)
        norms = np.array(sup_norm_history(result))
        assert norms[0] == 1.0
        assert np.all(np.diff(norms) <= 1e-12)
        assert norms[-1] < 0.5


class TestConfig:
    @pytest.mark.parametrize(
        "fields",
        [
            {"n": 0},
            {"n": 2.5},
            {"alpha": 0.0},
            {"alpha": -1.0},
            {"dt": 0.0},
            {"t_end": 0.0},
            {"dim": 4},
            {"initial": "bump"},
            {"backend": "cupy"},
            {"precision": "f16"},
            {"max_snapshots": 1},
        ],
    )
    def test_invalid_configuration_fails_fast(self, fields):
        with pytest.raises(ValueError):
            HeatConfig(dim=fields.pop("dim", 2), **fields)

    def test_defaults_per_dimension(self):
        cfg = HeatConfig.with_defaults(3, n=10)
        assert cfg.n == 10
        assert cfg.alpha == 0.15
        assert cfg.max_snapshots == 101
        assert cfg.grid_size == 12

    def test_f32_run(self):
        result = run_2d(n=8, alpha=0.2, dt=0.001, t_end=0.05, precision="f32")
        assert all(s.dtype == np.float32 for s in result.snapshots)
