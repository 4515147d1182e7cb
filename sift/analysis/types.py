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
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

# Severity enum


class Severity(StrEnum):
    """
    Severity level of a diagnostic.

    Ordering (from strongest to weakest):
      ERROR   → the code is broken
      WARNING → very likely a bug
      INFO    → style or hygiene
    """

    ERROR = auto()
    WARNING = auto()
    INFO = auto()

    @staticmethod
    def ordered() -> tuple["Severity", ...]:
        """
        Severity ordering from highest to lowest importance.
        """
        return (Severity.ERROR, Severity.WARNING, Severity.INFO)

    @property
    def rank(self) -> int:
        return Severity.ordered().index(self)

    @classmethod
    def from_str(cls, value: str) -> "Severity":
        """
        Parse severity from string (case-insensitive).

        Raises:
            ValueError if invalid severity.
        """
        value = value.lower()
        for sev in Severity:
            if sev.value == value:
                return sev
        raise ValueError(f"Invalid severity: {value}")


@dataclass(frozen=True, slots=True)
class Location:
    """
    Position of a diagnostic. `file` is project-relative POSIX.
    """

    file: str
    line: int
    column: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "line": self.line, "column": self.column}

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    One reported issue.
    """

    code: str
    severity: Severity
    message: str
    location: Location

    def dedupe_key(self) -> tuple[str, str, int, int, str]:
        return (self.code, self.location.file, self.location.line, self.location.column, self.message)

    def sort_key(self) -> tuple[int, str, int, int, str]:
        return (
            self.severity.rank,
            self.location.file,
            self.location.line,
            self.location.column,
            self.code,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "location": self.location.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class Summary:
    total: int
    by_severity: Mapping[str, int] = field(default_factory=dict)
    by_code: Mapping[str, int] = field(default_factory=dict)

    @staticmethod
    def from_diagnostics(diagnostics: tuple[Diagnostic, ...]) -> "Summary":
        by_severity: dict[str, int] = {}
        by_code: dict[str, int] = {}
        for d in diagnostics:
            by_severity[d.severity.value] = by_severity.get(d.severity.value, 0) + 1
            by_code[d.code] = by_code.get(d.code, 0) + 1
        return Summary(total=len(diagnostics), by_severity=by_severity, by_code=by_code)

    def headline(self) -> str:
        if self.total == 0:
            return "No issues found!"
        noun = "issue" if self.total == 1 else "issues"
        return f"{self.total} {noun} found."

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "by_severity": dict(sorted(self.by_severity.items())),
            "by_code": dict(sorted(self.by_code.items())),
        }


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    project_root: str
    diagnostics: tuple[Diagnostic, ...]
    files_analyzed: int
    elapsed_seconds: float = 0.0

    @property
    def summary(self) -> Summary:
        return Summary.from_diagnostics(self.diagnostics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_root": self.project_root,
            "files_analyzed": self.files_analyzed,
            "summary": self.summary.to_dict(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
