import logging
import pytest
import numpy as np
from trackrdf.core.box import PeriodicBox
from trackrdf.core.frame import Frame
from trackrdf.core.groups import GroupPartitioner

@pytest.fixture
def mixed_frame():
    positions = np.arange(15, dtype=np.float64).reshape(5, 3)
    types = np.array([2, 1, 3, 1, 2])
    return Frame(time_step=4, box=PeriodicBox(10.0, 10.0, 10.0), positions=positions, types=types)

def test_partition_keeps_index_order(mixed_frame):
    group_a, group_b = GroupPartitioner(1, 2).partition(mixed_frame)
    np.testing.assert_array_equal(group_a, [[3.0, 4.0, 5.0], [9.0, 10.0, 11.0]])
    np.testing.assert_array_equal(group_b, [[0.0, 1.0, 2.0], [12.0, 13.0, 14.0]])

def test_partition_custom_types(mixed_frame):
    group_a, group_b = GroupPartitioner(type_a=3, type_b=1).partition(mixed_frame)
    assert group_a.shape == (1, 3)
    assert group_b.shape == (2, 3)

def test_partition_returns_copies(mixed_frame):
    group_a, _ = GroupPartitioner().partition(mixed_frame)
    mixed_frame.positions[:] = -1.0
    np.testing.assert_array_equal(group_a[0], [3.0, 4.0, 5.0])

def test_partition_types_and_positions(mixed_frame):
    from_arrays = GroupPartitioner(1, 2).partition(mixed_frame.types, mixed_frame.positions)
    from_frame = GroupPartitioner(1, 2).partition(mixed_frame)
    np.testing.assert_array_equal(from_arrays[0], from_frame[0])
    np.testing.assert_array_equal(from_arrays[1], from_frame[1])

@pytest.mark.parametrize("types, positions, message", [
    ([1, 2], None, "positions are required"),
    ([1, 2], np.zeros((3, 3)), "Expected types"),
    ([[1, 2]], np.zeros((2, 3)), "Expected types"),
])
def test_partition_rejects_mismatched_arrays(types, positions, message):
    with pytest.raises(ValueError, match=message):
        GroupPartitioner().partition(np.array(types), positions)

def test_count(mixed_frame):
    partitioner = GroupPartitioner()
    assert partitioner.count(mixed_frame) == (2, 2)
    assert partitioner.count(np.array([1, 1, 1, 4])) == (3, 0)

def test_count_warns_on_composition_change(caplog):
    partitioner = GroupPartitioner()
    with caplog.at_level(logging.WARNING, logger="trackrdf.core.groups"):
        partitioner.count(np.array([1, 2, 2]))
        partitioner.count(np.array([1, 2, 2]))
        assert "composition changed" not in caplog.text
        partitioner.count(np.array([1, 1, 2]))
    assert "composition changed" in caplog.text

def test_partition_empty_group(mixed_frame):
    group_a, group_b = GroupPartitioner(type_a=7, type_b=2).partition(mixed_frame)
    assert group_a.shape == (0, 3)
    assert group_b.shape == (2, 3)

def test_same_types_rejected():
    with pytest.raises(ValueError, match="must differ"):
        GroupPartitioner(1, 1)

@pytest.mark.parametrize("positions, types, message", [
    (np.zeros((3, 2)), np.ones(3), "Positions must be 2D"),
    (np.zeros((3, 3)), np.ones((3, 1)), "Types must be 1D"),
    (np.zeros((3, 3)), np.ones(4), "Atom count mismatch"),
])
def test_frame_validation(positions, types, message):
    with pytest.raises(ValueError, match=message):
        Frame(0, PeriodicBox(1.0, 1.0, 1.0), positions, types)
