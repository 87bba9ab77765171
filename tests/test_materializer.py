"""Tests for link creation and precondition checks."""

import os

import pytest

from filter_linker.core.errors import (
    CrossVolumeHardLinkUnsupported,
    ElevationRequiredForSymbolicLink,
    MissingDestinationRoot,
    MissingSourceRoot,
    NoCandidatesFound,
)
from filter_linker.core.links import (
    FilterGroup,
    LinkKind,
    LinkRequest,
    LinkStatus,
    create_link,
    materialize,
)

DEFAULT_DARK = [FilterGroup.DEFAULT, FilterGroup.DARKMODE]


def statuses(summary):
    return {r.name: r.status for r in summary.results}


def test_default_and_darkmode_create_two_links(repo, dest, allowed):
    summary = materialize(repo, dest, DEFAULT_DARK, **allowed)

    assert statuses(summary) == {
        "a.filter": LinkStatus.CREATED,
        "b.filter": LinkStatus.CREATED,
    }
    assert (summary.created, summary.skipped, summary.failed) == (2, 0, 0)
    assert (dest / "a.filter").is_symlink()
    assert os.readlink(dest / "a.filter") == str((repo / "a.filter").absolute())


def test_existing_destination_is_skipped_and_untouched(repo, dest, allowed):
    (dest / "a.filter").write_bytes(b"my own filter")

    summary = materialize(repo, dest, DEFAULT_DARK, **allowed)

    assert statuses(summary) == {
        "a.filter": LinkStatus.SKIPPED,
        "b.filter": LinkStatus.CREATED,
    }
    assert (dest / "a.filter").read_bytes() == b"my own filter"
    assert not (dest / "a.filter").is_symlink()


def test_second_run_skips_everything(repo, dest, allowed):
    first = materialize(repo, dest, [FilterGroup.ALL], **allowed)
    second = materialize(repo, dest, [FilterGroup.ALL], **allowed)

    assert first.created == len(first.results)
    assert second.created == 0
    assert second.failed == 0
    assert second.skipped == len(first.results)


def test_hard_links_share_data(repo, dest, allowed):
    summary = materialize(repo, dest, [FilterGroup.DEFAULT], use_hard_links=True, **allowed)

    assert summary.kind is LinkKind.HARD
    linked = dest / "a.filter"
    assert not linked.is_symlink()
    assert os.stat(linked).st_ino == os.stat(repo / "a.filter").st_ino


def test_cross_volume_hard_link_aborts_before_mutation(repo, dest):
    with pytest.raises(CrossVolumeHardLinkUnsupported):
        materialize(
            repo,
            dest,
            [FilterGroup.ALL],
            use_hard_links=True,
            is_elevated=lambda: True,
            same_volume=lambda a, b: False,
        )
    assert list(dest.iterdir()) == []


def test_symbolic_without_privilege_aborts_before_mutation(repo, dest):
    with pytest.raises(ElevationRequiredForSymbolicLink):
        materialize(
            repo,
            dest,
            [FilterGroup.ALL],
            is_elevated=lambda: False,
            same_volume=lambda a, b: True,
        )
    assert list(dest.iterdir()) == []


def test_hard_links_do_not_need_privilege(repo, dest):
    summary = materialize(
        repo,
        dest,
        [FilterGroup.DEFAULT],
        use_hard_links=True,
        is_elevated=lambda: False,
        same_volume=lambda a, b: True,
    )
    assert summary.created == 1


def test_missing_roots(tmp_path, repo, dest, allowed):
    with pytest.raises(MissingSourceRoot):
        materialize(tmp_path / "nope", dest, [FilterGroup.DEFAULT], **allowed)
    with pytest.raises(MissingDestinationRoot):
        materialize(repo, tmp_path / "nope", [FilterGroup.DEFAULT], **allowed)


def test_no_candidates_is_fatal(tmp_path, dest, allowed):
    empty = tmp_path / "empty"
    empty.mkdir()
    missing = []

    with pytest.raises(NoCandidatesFound):
        materialize(
            empty,
            dest,
            [FilterGroup.DEFAULT, FilterGroup.DARKMODE],
            on_missing=lambda g, p: missing.append(g),
            **allowed,
        )
    assert missing == [FilterGroup.DARKMODE]


def test_one_failure_does_not_stop_the_batch(repo, dest, allowed, monkeypatch):
    real_symlink = os.symlink

    def flaky_symlink(src, dst, *args, **kwargs):
        if os.path.basename(dst) == "a.filter":
            raise PermissionError(13, "Permission denied")
        return real_symlink(src, dst, *args, **kwargs)

    monkeypatch.setattr(os, "symlink", flaky_symlink)
    seen = []

    summary = materialize(repo, dest, DEFAULT_DARK, on_result=seen.append, **allowed)

    assert [r.status for r in seen] == [LinkStatus.FAILED, LinkStatus.CREATED]
    assert seen[0].error == "Permission denied"
    assert summary.failed == 1
    assert (dest / "b.filter").is_symlink()


def test_dangling_symlink_counts_as_existing(tmp_path, repo):
    dst = tmp_path / "dangling.filter"
    os.symlink(tmp_path / "gone", dst)

    result = create_link(LinkRequest(repo / "a.filter", dst, LinkKind.SYMBOLIC))

    assert result.status is LinkStatus.SKIPPED
    assert os.readlink(dst) == str(tmp_path / "gone")


def test_summary_to_dict(repo, dest, allowed):
    summary = materialize(repo, dest, [FilterGroup.DEFAULT, FilterGroup.DARKMODE], **allowed)
    data = summary.to_dict()

    assert data["kind"] == "symbolic"
    assert data["created"] == 2
    assert data["missing_groups"] == []
    assert [r["name"] for r in data["results"]] == ["a.filter", "b.filter"]
    assert data["results"][0]["error"] is None
