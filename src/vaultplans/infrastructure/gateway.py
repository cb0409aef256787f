"""VaultGateway — the remote file capabilities the lifecycle manager needs.

Every method is exactly one remote call with no partial results. There is
no rename and no transaction primitive: moves are composed from
``create_or_update_file`` + ``delete_file`` by the caller.

Directory listing is its own capability (``list_directory``) rather than
overloading ``get_file`` on folder-shaped paths.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


class GatewayError(Exception):
    """A remote vault call failed.

    Attributes:
        path: Vault-relative path the call targeted, if any.
        status: HTTP status code, if the failure came from a response.
    """

    def __init__(self, message: str, *, path: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.status = status


class VaultFileNotFoundError(GatewayError):
    """The requested file or folder does not exist in the vault."""


@runtime_checkable
class VaultGateway(Protocol):
    """Capability surface of a remote, file-oriented vault."""

    def get_status(self) -> dict[str, Any]:
        """Server status payload (connectivity check)."""
        ...

    def list_files(self) -> Sequence[str]:
        """All file paths in the vault, flat."""
        ...

    def list_directory(self, path: str) -> Sequence[str]:
        """Entries directly inside folder *path*; subfolders end with ``/``."""
        ...

    def get_file(self, path: str) -> str:
        """Document text. Raises :class:`VaultFileNotFoundError` if absent."""
        ...

    def create_or_update_file(self, path: str, text: str) -> None:
        """Upsert *text* at *path*, creating parent folders implicitly."""
        ...

    def delete_file(self, path: str) -> None:
        """Delete *path*. Raises :class:`VaultFileNotFoundError` if absent."""
        ...
