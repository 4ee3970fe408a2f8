# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the hunkpick CLI application.

This module defines the exceptions raised by the git collaborator, the diff
parser and the CLI layer. Expected conditions of the interactive loop (bad
regex, unsplittable hunk, no match) are never raised; they are reported to
the user and looped past.
"""

import contextlib

import typer
from loguru import logger


class HunkpickError(Exception):
    """
    Base exception for all hunkpick-related errors.

    All hunkpick-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a HunkpickError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class GitError(HunkpickError):
    """
    Errors related to git operations.

    Raised when git commands fail or when git repository
    state is invalid for the requested operation.
    """

    pass


class PatchApplyError(GitError):
    """Raised when git apply (or its --check dry run) rejects a patch."""

    pass


class DiffParseError(HunkpickError):
    """
    Errors while splitting diff text into hunks.

    Raised when a hunk header does not match the unified diff
    `@@ -a,b +c,d @@` form. Fatal for the file being parsed only.
    """

    pass


class ValidationError(HunkpickError):
    """
    Input validation errors.

    Raised when user input fails validation checks,
    such as an unknown patch mode or a misplaced revision.
    """

    pass


class ConfigurationError(HunkpickError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class EditorError(HunkpickError):
    """Raised when the hunk edit buffer cannot be written, opened or read back."""

    pass


def git_not_found() -> GitError:
    """Create a GitError for when git is not available."""
    return GitError(
        "Git is not installed or not in PATH",
        "Please install git and ensure it's available in your PATH environment variable",
    )


def not_git_repository(path: str = ".") -> GitError:
    """Create a GitError for when not in a git repository."""
    return GitError(
        f"Not a git repository: {path}",
        "Run 'git init' to initialize a git repository or navigate to an existing repository",
    )


def unknown_patch_mode(name: str) -> ValidationError:
    """Create a ValidationError for a patch mode name that does not exist."""
    return ValidationError(
        f"Unknown patch mode: {name}",
        "Valid modes are stage, stash, reset, checkout and worktree",
    )


def invalid_config_value(key: str, reason: str) -> ConfigurationError:
    """Create a ConfigurationError for a value that failed validation."""
    return ConfigurationError(
        f"Invalid configuration value for '{key}'",
        reason,
    )


@contextlib.contextmanager
def handle_hunkpick_exception(exit_on_fail: bool = True):
    """
    Report hunkpick errors reaching the CLI layer.

    Known errors are logged with their details; with exit_on_fail the process
    exits with status 1 (130 for Ctrl+C). Unknown exceptions propagate.
    """
    try:
        yield
    except HunkpickError as e:
        logger.error(e.message)
        if e.details:
            logger.error(e.details)
        if exit_on_fail:
            raise typer.Exit(1) from e
        raise
    except KeyboardInterrupt as e:
        logger.info("Operation cancelled by user")
        if exit_on_fail:
            raise typer.Exit(130) from e
        raise
