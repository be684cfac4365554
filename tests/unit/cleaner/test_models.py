"""Tests for cleanup domain models."""

import dataclasses

import pytest

from treescrub.cleaner.models import (
    ActionKind,
    Configuration,
    DeletionPatternSet,
    EntryOutcome,
    OutcomeStatus,
    RunStatus,
    RunSummary,
)


class TestConfiguration:
    def test_defaults(self) -> None:
        config = Configuration()

        assert config.recursive is True
        assert config.force is True
        assert config.strip_project_bindings is False
        assert config.dry_run is False

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Configuration().force = False  # type: ignore[misc]


class TestDeletionPatternSet:
    def test_default_tables(self) -> None:
        patterns = DeletionPatternSet()

        assert patterns.directories == ("bin", "obj")
        assert "_ReSharper*" in patterns.extra_directories
        assert "*.suo" in patterns.files
        assert patterns.project_extensions == (".csproj", ".vbproj", ".modelproj", ".fsproj")

    def test_directory_batches_order(self) -> None:
        patterns = DeletionPatternSet(directories=("out",), extra_directories=(".vs",))

        assert patterns.directory_batches == (("out",), (".vs",))


class TestEntryOutcome:
    @pytest.mark.parametrize(
        ("status", "success", "failed"),
        [
            (OutcomeStatus.SUCCESS, True, False),
            (OutcomeStatus.DRY_RUN, True, False),
            (OutcomeStatus.SKIPPED, False, False),
            (OutcomeStatus.ERROR, False, True),
        ],
    )
    def test_status_flags(self, status: OutcomeStatus, success: bool, failed: bool) -> None:
        outcome = EntryOutcome(path="/p", action=ActionKind.DELETE_FILE, status=status)

        assert outcome.success is success
        assert outcome.failed is failed


class TestRunSummary:
    def test_empty_summary_has_nothing_to_clean(self) -> None:
        summary = RunSummary(root="/p")

        assert summary.total_actions == 0
        assert summary.status == RunStatus.NOTHING_TO_CLEAN
        assert summary.entry_errors == ()

    def test_counters_add_up(self) -> None:
        summary = RunSummary(
            root="/p",
            directories_deleted=2,
            files_deleted=3,
            solution_files_cleaned=1,
            project_files_cleaned=4,
        )

        assert summary.total_actions == 10
        assert summary.status == RunStatus.CLEANED

    def test_errors_alone_do_not_count_as_cleaned(self) -> None:
        """A run that only failed still reports nothing to clean."""
        outcomes = (
            EntryOutcome(path="/p/a", action=ActionKind.DELETE_FILE, status=OutcomeStatus.ERROR, message="denied"),
            EntryOutcome(path="/p/b", action=ActionKind.SCAN, status=OutcomeStatus.ERROR),
            EntryOutcome(path="/p/bin", action=ActionKind.DELETE_DIRECTORY, status=OutcomeStatus.SKIPPED),
        )
        summary = RunSummary(root="/p", outcomes=outcomes)

        assert summary.status == RunStatus.NOTHING_TO_CLEAN
        assert summary.entry_errors == (("/p/a", "denied"), ("/p/b", "Unknown error"))
        assert summary.skipped == (outcomes[2],)
