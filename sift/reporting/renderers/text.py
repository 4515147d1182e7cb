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

from collections.abc import Sequence
from pathlib import Path

from sift.analysis.types import AnalysisResult, Diagnostic, Summary
from sift.core.platform import DEFAULT_SEPARATOR


class TextReportRenderer:
    """
    Human-readable CLI output. Pure rendering: does not sort or mutate.

    Layout:
      <blank>
        <severity> <sep> <message> <sep> <file>:<line>:<col> <sep> <code>
      <blank>
      <summary headline>

    With more than one project, file paths are prefixed with the project
    directory name so lines stay unambiguous.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR):
        self.separator = separator

    def render(self, results: Sequence[AnalysisResult]) -> str:
        lines: list[str] = [""]
        prefix_paths = len(results) > 1

        diagnostics = [
            self.render_diagnostic(d, project=Path(r.project_root).name if prefix_paths else None)
            for r in results
            for d in r.diagnostics
        ]
        if diagnostics:
            lines.extend(diagnostics)
            lines.append("")

        lines.append(self.render_summary(results))
        return "\n".join(lines) + "\n"

    def render_diagnostic(self, d: Diagnostic, project: str | None = None) -> str:
        sep = self.separator
        location = f"{project}/{d.location}" if project else str(d.location)
        return f"  {d.severity.value} {sep} {d.message} {sep} {location} {sep} {d.code}"

    def render_summary(self, results: Sequence[AnalysisResult]) -> str:
        combined = tuple(d for r in results for d in r.diagnostics)
        return Summary.from_diagnostics(combined).headline()
