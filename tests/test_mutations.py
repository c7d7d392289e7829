import pytest

from app_lib.scheduling.mutations import InvalidTransition, MutationState, PendingMutation


def test_applied_path():
    mutation = PendingMutation(5, payload={"date": "2025-06-11"})
    assert mutation.state == MutationState.IDLE
    mutation.begin()
    assert mutation.is_pending
    mutation.apply()
    assert mutation.state == MutationState.APPLIED
    assert mutation.is_settled


def test_reverted_path_keeps_reason():
    mutation = PendingMutation(5).begin().revert("Conflict detected")
    assert mutation.state == MutationState.REVERTED
    assert mutation.reason == "Conflict detected"


@pytest.mark.parametrize("steps", [
    ("apply",),
    ("revert",),
    ("begin", "begin"),
    ("begin", "apply", "revert"),
    ("begin", "revert", "apply"),
])
def test_out_of_order_transitions_raise(steps):
    mutation = PendingMutation(1)
    with pytest.raises(InvalidTransition):
        for step in steps:
            getattr(mutation, step)()
