import pytest

from netops.policy.threads import AvailableRamPolicy, TablePolicy, ThreadPolicyType, get_thread_policy


@pytest.mark.parametrize("footprint", [0, 1.75, 2.4, 8])
def test_table_policy_fixed_sizes(footprint):
    policy = TablePolicy()
    assert policy.size(8, 0, footprint).threads == 1
    assert policy.size(16, 0, footprint).threads == 6
    assert policy.size(32, 0, footprint).threads == 12


def test_table_policy_divides_larger_servers():
    sizing = TablePolicy().size(64, 0, 8)
    assert sizing.threads == 8
    assert sizing.warning is None


def test_table_policy_ignores_used_ram():
    assert TablePolicy().size(64, 60, 8).threads == 8


def test_table_policy_zero_footprint_warns():
    sizing = TablePolicy().size(64, 0, 0)
    assert sizing.threads == 1
    assert sizing.warning


def test_table_policy_payload_too_large():
    sizing = TablePolicy().size(64, 0, 100)
    assert sizing.threads == 0
    assert not sizing.usable


def test_available_policy_uses_free_ram():
    assert AvailableRamPolicy().size(32, 16, 8).threads == 2


def test_available_policy_never_returns_zero():
    sizing = AvailableRamPolicy().size(32, 30, 8)
    assert sizing.threads == 1
    assert sizing.usable


def test_available_policy_zero_footprint_warns():
    sizing = AvailableRamPolicy().size(32, 0, 0)
    assert sizing.threads == 1
    assert sizing.warning


@pytest.mark.parametrize("policy", [TablePolicy(), AvailableRamPolicy()])
@pytest.mark.parametrize("capacity,used,footprint", [
    (-1, 0, 2),
    (None, 0, 2),
    (float("nan"), 0, 2),
    (32, 0, -2),
    (32, 0, None),
    (32, -4, 2),
])
def test_invalid_inputs_are_unusable(policy, capacity, used, footprint):
    sizing = policy.size(capacity, used, footprint)
    assert sizing.threads == 0
    assert not sizing.usable
    assert sizing.warning


def test_get_thread_policy():
    assert isinstance(get_thread_policy("table"), TablePolicy)
    assert isinstance(get_thread_policy(ThreadPolicyType.AVAILABLE), AvailableRamPolicy)
    with pytest.raises(ValueError):
        get_thread_policy("greedy")
