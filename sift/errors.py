# SPDX-License-Identifier: AGPL-3.0-only
#
# Copyright (c) 2026 Sift Contributors
#
# This file is part of Sift.
#
# Sift is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 only.
#
# Sift is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.

from collections.abc import Mapping
from typing import Any

from sift.cli.exitcodes import EXIT_ISSUES_FOUND, EXIT_USAGE_ERROR


class SiftError(Exception):
    """
    Base class for all sift errors.

    Carries a stable machine-readable `code` next to the human-readable
    message so callers (and tests) can branch without parsing text.
    """

    code: str
    message: str
    details: Mapping[str, Any] | None = None

    def __init__(
        self,
        message: str,
        code: str = "sift_error",
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ToolExit(SiftError):
    """
    Deliberate, user-facing termination of a command.

    Commands raise this instead of calling sys.exit() so that embedding code
    (the console entry point, the test harness) decides what a failed run
    means. The message is meant to be shown to the user as-is.
    """

    exit_code: int

    def __init__(
        self,
        message: str,
        exit_code: int = EXIT_ISSUES_FOUND,
        code: str = "tool_exit",
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
        self.exit_code = exit_code


class UsageError(ToolExit):
    """Raised when command-line arguments cannot be parsed."""

    usage: str | None

    def __init__(self, message: str, usage: str | None = None) -> None:
        super().__init__(message, exit_code=EXIT_USAGE_ERROR, code="usage_error")
        self.usage = usage

    def __str__(self) -> str:
        if self.usage:
            return f"{self.message}\n\n{self.usage}"
        return self.message


class OptionsError(SiftError):
    """Raised when an analysis options file cannot be read or is malformed."""

    file: str | None

    def __init__(
        self,
        message: str,
        code: str = "options_error",
        file: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
        self.file = file

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}: {self.message}"
        return self.message
