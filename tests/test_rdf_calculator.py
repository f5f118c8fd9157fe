import logging
import pytest
import numpy as np
from trackrdf.core.box import PeriodicBox
from trackrdf.core.rdf_calculator import RDFCalculator, compute_rdf, shell_volumes, num_bins_for, _histogram_chunk
from trackrdf.exceptions import BinRangeError, OutOfBoxError

@pytest.fixture
def cubic_box():
    return PeriodicBox(10.0, 10.0, 10.0)

@pytest.fixture
def random_groups():
    """Two random groups inside a 10x10x10 box centred on the origin."""
    rng = np.random.default_rng(42)
    group_a = rng.uniform(-5.0, 5.0, size=(23, 3))
    group_b = rng.uniform(-5.0, 5.0, size=(17, 3))
    return group_a, group_b

def test_single_pair_scenario(cubic_box):
    """One pair at distance 1.0 with dr=0.5 lands in the [1.0, 1.5) shell."""
    rdf = compute_rdf([(0.0, 0.0, 0.0)], [(1.0, 0.0, 0.0)], cubic_box, 0.5)
    assert rdf.n_bins == 40
    assert rdf.counts[2] == 1.0
    assert rdf.counts.sum() == 1.0
    assert rdf.r[2] == pytest.approx(1.0)

def test_pair_across_boundary(cubic_box):
    rdf = compute_rdf([(-4.5, 0.0, 0.0)], [(4.5, 0.0, 0.0)], cubic_box, 0.5)
    assert rdf.counts[2] == 1.0

@pytest.mark.parametrize("lengths, bin_width, expected", [
    ((10.0, 10.0, 10.0), 0.25, 80),
    ((10.0, 10.0, 10.0), 0.5, 40),
    ((3.0, 8.0, 5.0), 0.7, 9),
    ((4.0, 4.0, 1.0), 0.3, 7),
])
def test_num_bins(lengths, bin_width, expected):
    assert num_bins_for(PeriodicBox(*lengths), bin_width) == expected

def test_shell_volumes_increasing_and_sum():
    n_bins, dr = 50, 0.2
    volumes = shell_volumes(n_bins, dr)
    assert np.all(np.diff(volumes) > 0)
    np.testing.assert_allclose(volumes.sum(), 4.0 / 3.0 * np.pi * (n_bins * dr)**3, rtol=1e-12)
    np.testing.assert_allclose(volumes[0], 4.0 / 3.0 * np.pi * dr**3)

def test_total_counts_equal_pair_count(cubic_box, random_groups):
    group_a, group_b = random_groups
    rdf = compute_rdf(group_a, group_b, cubic_box, 0.1)
    assert rdf.counts.sum() == len(group_a) * len(group_b)
    assert rdf.n_dropped == 0

def test_counts_match_brute_force(cubic_box, random_groups):
    group_a, group_b = random_groups
    dr = 0.25
    expected = np.zeros(num_bins_for(cubic_box, dr))
    for a in group_a:
        for b in group_b:
            d = a - b
            d = np.where(np.abs(d) > 5.0, d - np.sign(d) * 10.0, d)
            expected[int(np.floor(np.linalg.norm(d) / dr))] += 1
    rdf = compute_rdf(group_a, group_b, cubic_box, dr)
    np.testing.assert_array_equal(rdf.counts, expected)

def test_compute_is_idempotent(cubic_box, random_groups):
    group_a, group_b = random_groups
    a_before, b_before = group_a.copy(), group_b.copy()
    first = compute_rdf(group_a, group_b, cubic_box, 0.1)
    second = compute_rdf(group_a, group_b, cubic_box, 0.1)
    np.testing.assert_array_equal(first.g_r, second.g_r)
    np.testing.assert_array_equal(group_a, a_before)
    np.testing.assert_array_equal(group_b, b_before)

def test_shell_normalization(cubic_box, random_groups):
    group_a, group_b = random_groups
    rdf = compute_rdf(group_a, group_b, cubic_box, 0.1)
    assert rdf.normalization == 'shell'
    np.testing.assert_allclose(rdf.g_r, rdf.counts / rdf.shell_volumes)

def test_reference_and_density_normalization(cubic_box, random_groups):
    group_a, group_b = random_groups
    shell = compute_rdf(group_a, group_b, cubic_box, 0.1)
    reference = compute_rdf(group_a, group_b, cubic_box, 0.1, normalization='reference')
    density = compute_rdf(group_a, group_b, cubic_box, 0.1, normalization='density')
    np.testing.assert_allclose(reference.g_r, shell.g_r / len(group_b))
    np.testing.assert_allclose(density.g_r, shell.g_r * cubic_box.volume / (len(group_a) * len(group_b)))

def test_density_normalization_ideal_gas_near_one():
    rng = np.random.default_rng(0)
    box = PeriodicBox(10.0, 10.0, 10.0)
    group_a = rng.uniform(-5.0, 5.0, size=(400, 3))
    group_b = rng.uniform(-5.0, 5.0, size=(400, 3))
    rdf = compute_rdf(group_a, group_b, box, 0.5, normalization='density')
    # Shells between 2 and 4 lie fully inside the minimum-image sphere.
    assert np.mean(rdf.g_r[4:8]) == pytest.approx(1.0, abs=0.1)

def test_out_of_range_raises():
    box = PeriodicBox(1.0, 100.0, 100.0)
    with pytest.raises(BinRangeError):
        compute_rdf([(0.0, 0.0, 0.0)], [(0.0, 10.0, 0.0)], box, 0.5)

def test_out_of_range_drop(caplog):
    box = PeriodicBox(1.0, 100.0, 100.0)
    group_a = [(0.0, 0.0, 0.0)]
    group_b = [(0.0, 10.0, 0.0), (0.0, 1.0, 0.0)]
    with caplog.at_level(logging.WARNING):
        rdf = compute_rdf(group_a, group_b, box, 0.5, out_of_range='drop')
    assert rdf.n_dropped == 1
    assert rdf.counts.sum() == len(group_a) * len(group_b) - rdf.n_dropped
    assert rdf.counts[2] == 1.0
    assert "Dropped 1" in caplog.text

def test_displacement_beyond_limit_raises(cubic_box):
    with pytest.raises(OutOfBoxError):
        compute_rdf([(0.0, 0.0, 0.0)], [(16.0, 0.0, 0.0)], cubic_box, 0.1)

def test_empty_group_gives_zero_histogram(cubic_box):
    rdf = compute_rdf(np.empty((0, 3)), [(1.0, 0.0, 0.0)], cubic_box, 0.5, normalization='density')
    assert rdf.n_bins == 40
    assert not np.any(rdf.g_r)
    assert rdf.n_a == 0 and rdf.n_b == 1

def test_parallel_matches_serial(cubic_box, random_groups):
    group_a, group_b = random_groups
    serial = RDFCalculator(bin_width=0.1, chunk_size=5).calculate(group_a, group_b, cubic_box)
    parallel = RDFCalculator(bin_width=0.1, chunk_size=5, n_workers=2).calculate(group_a, group_b, cubic_box)
    np.testing.assert_array_equal(serial.counts, parallel.counts)
    np.testing.assert_array_equal(serial.g_r, parallel.g_r)

def test_chunking_does_not_change_result(cubic_box, random_groups):
    group_a, group_b = random_groups
    whole = RDFCalculator(bin_width=0.2, chunk_size=1000).calculate(group_a, group_b, cubic_box)
    pieces = RDFCalculator(bin_width=0.2, chunk_size=3).calculate(group_a, group_b, cubic_box)
    np.testing.assert_array_equal(whole.counts, pieces.counts)

@pytest.mark.parametrize("max_block_pairs", [1, 7, 40])
def test_blocking_over_group_b_does_not_change_result(cubic_box, random_groups, max_block_pairs):
    group_a, group_b = random_groups
    whole = RDFCalculator(bin_width=0.2).calculate(group_a, group_b, cubic_box)
    blocked = RDFCalculator(bin_width=0.2, chunk_size=4, max_block_pairs=max_block_pairs).calculate(
        group_a, group_b, cubic_box)
    np.testing.assert_array_equal(whole.counts, blocked.counts)
    np.testing.assert_array_equal(whole.g_r, blocked.g_r)

def test_histogram_chunk_counts_dropped_across_blocks():
    box_lengths = np.array([10.0, 10.0, 10.0])
    chunk_a = np.zeros((2, 3))
    group_b = np.array([[0.5, 0.0, 0.0], [4.0, 4.0, 4.0], [0.0, 0.2, 0.0], [4.5, 4.5, 4.5]])
    counts, n_dropped = _histogram_chunk(chunk_a, group_b, box_lengths, bin_width=1.0, n_bins=2,
                                         out_of_range='drop', max_block_pairs=2)
    assert n_dropped == 4
    np.testing.assert_array_equal(counts, [4, 0])

def test_result_metadata(cubic_box):
    rdf = RDFCalculator(bin_width=0.5).calculate([(0.0, 0.0, 0.0)], [(1.0, 0.0, 0.0)], cubic_box, time_step=12)
    assert rdf.time_step == 12
    assert rdf.n_a == 1 and rdf.n_b == 1
    np.testing.assert_array_equal(rdf.box_lengths, [10.0, 10.0, 10.0])

@pytest.mark.parametrize("kwargs", [
    {'bin_width': 0.0},
    {'bin_width': -0.1},
    {'bin_width': float('inf')},
    {'bin_width': float('nan')},
    {'max_block_pairs': 0},
    {'normalization': 'volume'},
    {'out_of_range': 'clamp'},
    {'n_workers': 0},
    {'chunk_size': 0},
])
def test_calculator_rejects_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        RDFCalculator(**kwargs)

def test_calculator_rejects_bad_group_shape(cubic_box):
    with pytest.raises(ValueError, match="group_a has shape"):
        compute_rdf(np.zeros((2, 2)), [(1.0, 0.0, 0.0)], cubic_box, 0.5)
