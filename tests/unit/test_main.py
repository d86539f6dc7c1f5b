"""Unit tests for the CLI entrypoint (store replaced by an in-memory double or a mocked API)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest
from github import GithubException

from github_label_manager import main as cli
from github_label_manager.github.client import GitHubLabelStore
from github_label_manager.labels.store import RemoteLabel


@pytest.fixture
def cli_store(make_store, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for name in ("LABELS_GITHUB_TOKEN", "GH_TOKEN", "GITHUB_TOKEN", "LABELS_REPOSITORY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LABELS_GITHUB_TOKEN", "test-token")
    monkeypatch.setenv("LABELS_REPOSITORY", "octo-org/octo-repo")

    store = make_store([RemoteLabel(name="Bug", color="d73a4a")])
    store.repository = "octo-org/octo-repo"
    store.close = lambda: None
    monkeypatch.setattr(cli, "_build_store", lambda settings, repository: store)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    return store


def test_missing_token_is_a_configuration_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    for name in ("LABELS_GITHUB_TOKEN", "GH_TOKEN", "GITHUB_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    assert cli.main(["list"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_missing_repository_is_rejected(
    cli_store, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("LABELS_REPOSITORY")

    assert cli.main(["list"]) == 2
    assert "--repo" in capsys.readouterr().err


def test_list_prints_labels(cli_store, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["list"]) == 0

    out = capsys.readouterr().out
    assert "Repository: octo-org/octo-repo" in out
    assert "Name:        Bug" in out
    assert "Color:       #d73a4a" in out


def test_get_missing_label_exits_3(cli_store) -> None:
    assert cli.main(["get", "ghost"]) == 3


def test_create_normalizes_color(cli_store) -> None:
    assert cli.main(["create", "docs", "#0075CA", "-d", "Documentation"]) == 0

    assert cli_store.labels["docs"].color == "0075ca"
    assert cli_store.labels["docs"].description == "Documentation"


def test_create_with_invalid_color_aborts_before_remote_call(cli_store) -> None:
    assert cli.main(["create", "docs", "nothex"]) == 2

    assert cli_store.calls == []


def test_create_existing_label_exits_3(cli_store) -> None:
    assert cli.main(["create", "Bug", "ff0000"]) == 3


def test_update_renames(cli_store) -> None:
    assert cli.main(["update", "Bug", "--new-name", "bug", "--color", "FF0000"]) == 0

    assert cli_store.labels["bug"].color == "ff0000"


def test_delete_with_force(cli_store) -> None:
    assert cli.main(["delete", "Bug", "-f"]) == 0

    assert cli_store.labels == {}


def test_delete_cancelled_without_confirmation(
    cli_store, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    assert cli.main(["delete", "Bug"]) == 0

    assert "Bug" in cli_store.labels
    assert "Cancelled." in capsys.readouterr().out


def test_apply_reports_outcomes(
    cli_store, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "labels.toml").write_text(
        """
[[labels]]
name = "bug"
color = "d73a49"
update_if_match = ["Bug", "bug-report"]
""",
        encoding="utf-8",
    )

    assert cli.main(["apply"]) == 0

    out = capsys.readouterr().out
    assert "RENAMED  'Bug' -> 'bug'" in out
    assert "  Success: 1" in out
    assert [op for op, _ in cli_store.calls] == ["update", "update"]


def test_apply_exits_1_when_any_item_fails(cli_store, tmp_path: Path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text('delete = ["wontfix"]\n', encoding="utf-8")

    assert cli.main(["apply", str(config)]) == 1


def test_apply_dry_run_makes_no_calls(
    cli_store, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "labels.toml"
    config.write_text('delete = ["wontfix"]\n', encoding="utf-8")

    assert cli.main(["apply", "--dry-run", str(config)]) == 0

    out = capsys.readouterr().out
    assert "=== DRY RUN MODE ===" in out
    assert "This was a dry run. No actual changes were made." in out
    assert cli_store.calls == []


def test_apply_aborts_when_repository_is_unreachable(
    cli_store,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    github_api = Mock()
    github_api.get_repo.side_effect = GithubException(404, {"message": "Not Found"})
    store = GitHubLabelStore(
        token="test-token", repository="octo-org/octo-repo", github_api=github_api
    )
    monkeypatch.setattr(cli, "_build_store", lambda settings, repository: store)
    config = tmp_path / "labels.toml"
    config.write_text(
        'delete = ["wontfix"]\n\n'
        '[[labels]]\nname = "bug"\ncolor = "d73a49"\n\n'
        '[[labels]]\nname = "docs"\ncolor = "0075ca"\n',
        encoding="utf-8",
    )

    assert cli.main(["apply", str(config)]) == 1

    captured = capsys.readouterr()
    assert "Setup error: Cannot access repository 'octo-org/octo-repo'" in captured.err
    assert "=== Summary ===" not in captured.out
    assert "FAILED" not in captured.out
    assert github_api.get_repo.call_count == 1


def test_apply_dry_run_does_not_contact_repository(
    cli_store, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    github_api = Mock()
    store = GitHubLabelStore(
        token="test-token", repository="octo-org/octo-repo", github_api=github_api
    )
    monkeypatch.setattr(cli, "_build_store", lambda settings, repository: store)
    config = tmp_path / "labels.toml"
    config.write_text('delete = ["wontfix"]\n', encoding="utf-8")

    assert cli.main(["apply", "--dry-run", str(config)]) == 0
    github_api.get_repo.assert_not_called()


def test_ad_hoc_command_aborts_when_repository_is_unreachable(
    cli_store, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    github_api = Mock()
    github_api.get_repo.side_effect = GithubException(401, {"message": "Bad credentials"})
    store = GitHubLabelStore(
        token="test-token", repository="octo-org/octo-repo", github_api=github_api
    )
    monkeypatch.setattr(cli, "_build_store", lambda settings, repository: store)

    assert cli.main(["delete", "-f", "wontfix"]) == 1
    assert "Setup error" in capsys.readouterr().err
    assert github_api.get_repo.call_count == 1


def test_apply_skip_existing_flag(cli_store, tmp_path: Path) -> None:
    config = tmp_path / "labels.toml"
    config.write_text('[[labels]]\nname = "Bug"\ncolor = "d73a4a"\n', encoding="utf-8")

    assert cli.main(["apply", "-s", str(config)]) == 0
    assert cli.main(["apply", str(config)]) == 1


def test_apply_empty_config_is_a_no_op(
    cli_store, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "labels.toml").write_text("", encoding="utf-8")

    assert cli.main(["apply"]) == 0
    assert "No actions to perform" in capsys.readouterr().out


def test_apply_invalid_config_exits_2(cli_store, tmp_path: Path) -> None:
    (tmp_path / "labels.toml").write_text("[[labels]]\ncolor = 1\n", encoding="utf-8")

    assert cli.main(["apply"]) == 2
    assert cli_store.calls == []


def test_apply_missing_config_file_exits_2(cli_store) -> None:
    assert cli.main(["apply", "does-not-exist.toml"]) == 2
