"""Tests for plan states, transitions, folder layout, and duplicate handling."""

import pytest

from vaultplans.domain.lifecycle import (
    PLAN_TRANSITIONS,
    PlanFolders,
    PlanState,
    PlanSummary,
    is_valid_transition,
    resolve_duplicates,
)


class TestPlanState:
    def test_members(self) -> None:
        assert [s.value for s in PlanState] == ["inbox", "reviewed", "archive"]

    def test_every_state_has_transitions(self) -> None:
        assert set(PLAN_TRANSITIONS) == {s.value for s in PlanState}


class TestTransitions:
    @pytest.mark.parametrize(
        ("current", "target"),
        [("inbox", "reviewed"), ("inbox", "archive"), ("reviewed", "archive")],
    )
    def test_forward(self, current: str, target: str) -> None:
        assert is_valid_transition(current, target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            ("reviewed", "inbox"),
            ("archive", "inbox"),
            ("archive", "reviewed"),
            ("inbox", "inbox"),
            ("archive", "archive"),
        ],
    )
    def test_backward_and_self(self, current: str, target: str) -> None:
        assert not is_valid_transition(current, target)

    def test_unknown_state(self) -> None:
        assert not is_valid_transition("trash", "archive")


class TestPlanFolders:
    def test_defaults(self) -> None:
        folders = PlanFolders()
        assert folders.inbox == "Technical Plans/Inbox"
        assert folders.reviewed == "Technical Plans/Reviewed"
        assert folders.archive == "Technical Plans/Archive"

    def test_path_and_marker(self) -> None:
        folders = PlanFolders()
        assert folders.path("reviewed", "a.md") == "Technical Plans/Reviewed/a.md"
        assert folders.marker_path(PlanState.ARCHIVE) == "Technical Plans/Archive/.gitkeep"

    def test_custom_root(self) -> None:
        folders = PlanFolders(root="Eng/Plans", inbox_name="New")
        assert folders.folder("inbox") == "Eng/Plans/New"
        assert folders.all()[1] == (PlanState.REVIEWED, "Eng/Plans/Reviewed")

    def test_unknown_state_raises(self) -> None:
        with pytest.raises(ValueError):
            PlanFolders().folder("trash")

    def test_state_of(self) -> None:
        folders = PlanFolders()
        assert folders.state_of("Technical Plans/Archive/a.md") is PlanState.ARCHIVE
        assert folders.state_of("Notes/a.md") is None
        assert folders.state_of("Technical Plans/Inbox/sub/a.md") is None

    def test_contains(self) -> None:
        folders = PlanFolders()
        assert folders.contains("Technical Plans/Inbox/a.md")
        assert folders.contains("Technical Plans")
        assert not folders.contains("Technical Plans Old/a.md")
        assert not folders.contains("Notes/a.md")


def _summary(state: PlanState, filename: str = "a.md") -> PlanSummary:
    return PlanSummary(path=f"{state}/{filename}", filename=filename, state=state)


class TestPlanSummary:
    def test_to_dict_without_metadata(self) -> None:
        assert _summary(PlanState.INBOX).to_dict() == {
            "path": "inbox/a.md",
            "filename": "a.md",
            "state": "inbox",
        }

    def test_to_dict_with_metadata(self) -> None:
        summary = PlanSummary(
            path="p/a.md", filename="a.md", state=PlanState.REVIEWED, metadata={"k": "v"}
        )
        assert summary.to_dict()["metadata"] == {"k": "v"}


class TestResolveDuplicates:
    def test_no_duplicates(self) -> None:
        plans = [_summary(PlanState.INBOX, "a.md"), _summary(PlanState.REVIEWED, "b.md")]
        kept, shadowed = resolve_duplicates(plans)
        assert kept == plans
        assert shadowed == []

    def test_most_terminal_copy_wins(self) -> None:
        inbox = _summary(PlanState.INBOX)
        reviewed = _summary(PlanState.REVIEWED)
        archive = _summary(PlanState.ARCHIVE)
        kept, shadowed = resolve_duplicates([inbox, reviewed, archive])
        assert kept == [archive]
        assert shadowed == [inbox, reviewed]

    def test_order_independent(self) -> None:
        inbox = _summary(PlanState.INBOX)
        reviewed = _summary(PlanState.REVIEWED)
        kept, _ = resolve_duplicates([reviewed, inbox])
        assert kept == [reviewed]

    def test_survivors_keep_listing_order(self) -> None:
        b = _summary(PlanState.INBOX, "b.md")
        a_inbox = _summary(PlanState.INBOX, "a.md")
        a_archive = _summary(PlanState.ARCHIVE, "a.md")
        kept, _ = resolve_duplicates([b, a_inbox, a_archive])
        assert kept == [b, a_archive]
