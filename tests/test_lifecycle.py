import pytest

from collabhub.utils.lifecycle import (
    ALLOWED_TRANSITIONS,
    LifecycleAction,
    ProjectStatus,
    TransitionError,
    ViewerRole,
    can_act,
    check_transition,
    target_status,
    viewer_role,
)


def test_freelancer_actions():
    assert can_act(ProjectStatus.assigned, ViewerRole.freelancer) == {LifecycleAction.start_work}
    assert can_act(ProjectStatus.in_progress, ViewerRole.freelancer) == {LifecycleAction.submit_work}
    assert can_act(ProjectStatus.revision, ViewerRole.freelancer) == {LifecycleAction.resubmit_work}


def test_client_actions_in_review():
    assert can_act(ProjectStatus.review, ViewerRole.client) == {
        LifecycleAction.approve,
        LifecycleAction.request_revision,
    }


@pytest.mark.parametrize("status", list(ProjectStatus))
def test_other_viewer_never_acts(status):
    assert can_act(status, ViewerRole.other) == set()


def test_completed_is_terminal():
    for role in ViewerRole:
        assert can_act(ProjectStatus.completed, role) == set()
    for new_status in ProjectStatus:
        with pytest.raises(TransitionError):
            check_transition(ProjectStatus.completed, new_status, ViewerRole.client)


def test_can_act_accepts_plain_strings():
    assert can_act("review", "client") == {LifecycleAction.approve, LifecycleAction.request_revision}


def test_viewer_role():
    assert viewer_role("c", "f", "c") == ViewerRole.client
    assert viewer_role("c", "f", "f") == ViewerRole.freelancer
    assert viewer_role("c", "f", "x") == ViewerRole.other
    assert viewer_role("c", None, "x") == ViewerRole.other


def test_open_to_assigned_only_through_acceptance():
    with pytest.raises(TransitionError) as exc:
        check_transition(ProjectStatus.open, ProjectStatus.assigned, ViewerRole.client)
    assert not exc.value.forbidden


def test_wrong_role_is_forbidden():
    with pytest.raises(TransitionError) as exc:
        check_transition(ProjectStatus.review, ProjectStatus.completed, ViewerRole.freelancer)
    assert exc.value.forbidden


def test_unknown_edge_is_rejected():
    with pytest.raises(TransitionError) as exc:
        check_transition(ProjectStatus.assigned, ProjectStatus.completed, ViewerRole.client)
    assert not exc.value.forbidden


def test_every_action_matches_an_allowed_transition():
    for status in ProjectStatus:
        for role in ViewerRole:
            for action in can_act(status, role):
                new_status = target_status(action)
                assert ALLOWED_TRANSITIONS[(status, new_status)] == role
                check_transition(status, new_status, role)
