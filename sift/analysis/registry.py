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

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from sift.analysis.index import ParsedModule, ProjectIndex
from sift.analysis.options import AnalysisOptions
from sift.analysis.types import Severity


@dataclass(frozen=True, slots=True)
class Finding:
    """
    Raw hit produced by a check, before severity and suppression apply.
    """

    line: int
    column: int
    message: str


CheckFn = Callable[[ParsedModule, ProjectIndex], Iterable[Finding]]


@dataclass(frozen=True, slots=True)
class Check:
    """
    A diagnostic producer.

    lint=False: always active (unless its severity is set to ignore).
    lint=True: active only when enabled under `linter.rules`.
    run=None: the code is produced by the analyzer itself, not per module.
    """

    code: str
    default_severity: Severity
    description: str
    run: CheckFn | None = None
    lint: bool = False


@dataclass(frozen=True, slots=True)
class ActiveCheck:
    check: Check
    severity: Severity
    run: CheckFn


class DuplicateCheckError(ValueError):
    pass


class CheckRegistry:
    """
    Stores checks by code.

    Typical lifecycle:
      reg = CheckRegistry()
      reg.register(Check(...))
      active = reg.active(options)
    """

    def __init__(self, checks: Iterable[Check] = ()) -> None:
        self._checks: dict[str, Check] = {}
        for c in checks:
            self.register(c)

    def register(self, check: Check) -> None:
        if check.code in self._checks:
            raise DuplicateCheckError(f"Check already registered: {check.code}")
        self._checks[check.code] = check

    def get(self, code: str) -> Check | None:
        return self._checks.get(code)

    def all(self) -> tuple[Check, ...]:
        return tuple(sorted(self._checks.values(), key=lambda c: c.code))

    def lints(self) -> tuple[Check, ...]:
        return tuple(c for c in self.all() if c.lint)

    def is_known_lint(self, name: str) -> bool:
        c = self._checks.get(name)
        return c is not None and c.lint

    def active(self, options: AnalysisOptions) -> tuple[ActiveCheck, ...]:
        """
        Per-module checks that should run under `options`, with their
        effective severity. Ignored codes and disabled lints are dropped.
        """
        out: list[ActiveCheck] = []
        for c in self.all():
            if c.run is None:
                continue
            if c.lint and not options.is_lint_enabled(c.code):
                continue
            severity = options.severity_for(c.code, c.default_severity)
            if severity is None:
                continue
            out.append(ActiveCheck(check=c, severity=severity, run=c.run))
        return tuple(out)


def default_registry() -> CheckRegistry:
    from sift.analysis.checks import BUILTIN_CHECKS

    return CheckRegistry(BUILTIN_CHECKS)
