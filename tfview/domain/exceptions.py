"""Domain exceptions for tfview.

These exceptions represent failures of the tf client, the workspace
filesystem and user selections. They are caught at the application boundary
(CLI) and converted to user-facing error messages.
"""


class TfviewDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ToolPathUnknownError(TfviewDomainError):
    """Raised when the location of the tf executable cannot be determined."""

    def __init__(self, tf_path: str | None = None) -> None:
        if tf_path:
            message = f"Unable to execute command. tf executable not found at '{tf_path}'"
        else:
            message = "Unable to execute command. Path to tf executable is unknown"
        super().__init__(
            message,
            hint="Set 'tf_path' in the [tool] section of config.toml or add tf to PATH",
        )
        self.tf_path = tf_path


class ToolProcessError(TfviewDomainError):
    """Raised when the tf process cannot be started or does not finish."""

    pass


class ToolCommandError(TfviewDomainError):
    """Raised when tf exits with a non-zero code.

    Attributes:
        command: The tf command that failed.
        exit_code: Process exit code.
        stderr: Error output of tf.
        stdout: Standard output of tf.
    """

    def __init__(
        self,
        command: str,
        exit_code: int,
        stderr: str = "",
        stdout: str = "",
    ) -> None:
        detail = stderr.strip() or "(no error output from tf)"
        super().__init__(f"tf {command} failed (exit code {exit_code}): {detail}")
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout


class WorkspaceFileSystemError(TfviewDomainError):
    """Base class for filesystem errors raised while browsing the workspace.

    Attributes:
        path: Path the failing operation was applied to.
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class FileNotFoundInWorkspace(WorkspaceFileSystemError):
    """Raised when a path no longer exists on disk."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}", path)


class FileAlreadyExists(WorkspaceFileSystemError):
    """Raised when creating a path that already exists."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File already exists: {path}", path)


class NoPermissions(WorkspaceFileSystemError):
    """Raised when access to a path is denied."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Permission denied: {path}", path)


class FileIsADirectory(WorkspaceFileSystemError):
    """Raised when a file operation is applied to a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Is a directory: {path}", path)


class HistoryNotFoundError(TfviewDomainError):
    """Raised when tf returns no history for a file at a changeset."""

    def __init__(self, file_path: str, changeset_id: int) -> None:
        super().__init__(
            f"No history found for '{file_path}' at changeset {changeset_id}",
            hint="Check that the path is mapped in this workspace",
        )
        self.file_path = file_path
        self.changeset_id = changeset_id


class InvalidSelectionError(TfviewDomainError):
    """Raised when a user selection cannot be acted on."""

    pass
