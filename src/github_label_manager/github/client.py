"""GitHub-backed label store.

This wraps PyGithub so that label calls stay out of CLI and engine code, and so
GitHub's status codes are classified into typed errors at the transport
boundary:

- 404 -> `NotFound`
- 422 with an `already_exists` error code -> `AlreadyExists`
- any other 422 -> `InvalidInput`
- everything else, including network errors -> `RemoteUnavailable`
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import requests
from github import Auth, Github, GithubException
from github.GithubObject import NotSet
from github.Label import Label
from github.Repository import Repository

from github_label_manager.errors import (
    AlreadyExists,
    InvalidInput,
    LabelManagerError,
    NotFound,
    RemoteUnavailable,
)
from github_label_manager.labels.store import LabelUpdate, RemoteLabel

logger = logging.getLogger(__name__)


def _error_message(error: GithubException) -> str:
    data = error.data
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return str(error)


def _has_error_code(data: Any, code: str) -> bool:
    if not isinstance(data, dict):
        return False
    errors = data.get("errors")
    if not isinstance(errors, list):
        return False
    return any(isinstance(item, dict) and item.get("code") == code for item in errors)


def classify_error(error: Exception, *, label: str) -> LabelManagerError:
    """Map a PyGithub / requests failure for `label` to a typed error."""

    if isinstance(error, GithubException):
        if error.status == 404:
            return NotFound(label)
        if error.status == 422:
            if _has_error_code(error.data, "already_exists"):
                return AlreadyExists(label)
            return InvalidInput(f"GitHub rejected label {label!r}: {_error_message(error)}")
        return RemoteUnavailable(
            f"GitHub API error {error.status} for label {label!r}: {_error_message(error)}"
        )
    return RemoteUnavailable(f"GitHub request failed for label {label!r}: {error}")


@contextmanager
def _github_errors(label: str) -> Iterator[None]:
    try:
        yield
    except (GithubException, requests.RequestException) as e:
        raise classify_error(e, label=label) from e


def _to_remote_label(label: Label) -> RemoteLabel:
    return RemoteLabel(
        name=label.name,
        color=label.color,
        description=label.description,
        url=label.url,
    )


class GitHubLabelStore:
    """Label CRUD for one repository via PyGithub.

    The repository handle is fetched on first use, so constructing the store
    (e.g. for a dry run) makes no network calls.
    """

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository.strip().strip("/"):
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")
        self._repo = repo
        self._connect_error: RemoteUnavailable | None = None

        if repo is not None:
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=base_url.rstrip("/"))

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def connect(self) -> None:
        """Resolve the repository now instead of on the first label call.

        Raises:
            RemoteUnavailable if the repository cannot be accessed. The failure is
            remembered and re-raised by later calls without another lookup.
        """

        self._get_repo()

    def _get_repo(self) -> Repository:
        if self._connect_error is not None:
            raise self._connect_error
        if self._repo is None:
            assert self._github is not None
            try:
                self._repo = self._github.get_repo(self._repository_name)
            except (GithubException, requests.RequestException) as e:
                self._connect_error = RemoteUnavailable(
                    f"Cannot access repository {self._repository_name!r}: {e}"
                )
                raise self._connect_error from e
            logger.info(
                "Connected to repository", extra={"repo": self._repository_name}
            )
        return self._repo

    def list_labels(self) -> list[RemoteLabel]:
        repo = self._get_repo()
        with _github_errors("*"):
            labels = [_to_remote_label(label) for label in repo.get_labels()]
        logger.debug(
            "Labels listed", extra={"repo": self._repository_name, "count": len(labels)}
        )
        return labels

    def get_label(self, name: str) -> RemoteLabel:
        repo = self._get_repo()
        with _github_errors(name):
            return _to_remote_label(repo.get_label(name))

    def create_label(self, name: str, color: str, description: str | None = None) -> RemoteLabel:
        repo = self._get_repo()
        with _github_errors(name):
            created = repo.create_label(
                name=name,
                color=color,
                description=description if description is not None else NotSet,
            )
        logger.info("Label created", extra={"repo": self._repository_name, "label": name})
        return _to_remote_label(created)

    def update_label(self, name: str, update: LabelUpdate) -> RemoteLabel:
        """Apply a partial edit.

        GitHub's edit call needs a name and a colour, so unset fields are filled
        from the current label.
        """

        repo = self._get_repo()
        with _github_errors(name):
            label = repo.get_label(name)
        new_name = update.new_name or label.name
        with _github_errors(new_name):
            label.edit(
                name=new_name,
                color=update.color or label.color,
                description=update.description if update.description is not None else NotSet,
            )
        logger.info(
            "Label updated",
            extra={"repo": self._repository_name, "label": name, "new_name": new_name},
        )
        return _to_remote_label(label)

    def delete_label(self, name: str) -> None:
        repo = self._get_repo()
        with _github_errors(name):
            repo.get_label(name).delete()
        logger.info("Label deleted", extra={"repo": self._repository_name, "label": name})

    def close(self) -> None:
        if self._github is not None:
            self._github.close()
