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
from pathlib import Path
from typing import Any

import yaml

from sift.analysis.types import Severity
from sift.core.logging import get_logger
from sift.errors import OptionsError

logger = get_logger(__name__)

OPTIONS_FILENAME = "analysis_options.yaml"
USER_OPTIONS_FILENAME = "analysis_options_user.yaml"
PACKAGE_INCLUDE_PREFIX = "package:sift/"
IGNORE = "ignore"


@dataclass(frozen=True, slots=True)
class AnalysisOptions:
    """
    Effective analysis options for one project.

    severities: per-code severity override; None means the code is ignored.
    lint_rules: opt-in lint rules and whether they are enabled.
    """

    severities: Mapping[str, Severity | None] = field(default_factory=dict)
    lint_rules: Mapping[str, bool] = field(default_factory=dict)
    exclude: tuple[str, ...] = ()
    source: Path | None = None

    def is_lint_enabled(self, code: str) -> bool:
        return bool(self.lint_rules.get(code, False))

    def enabled_lints(self) -> tuple[str, ...]:
        return tuple(sorted(k for k, v in self.lint_rules.items() if v))

    def severity_for(self, code: str, default: Severity) -> Severity | None:
        if code in self.severities:
            return self.severities[code]
        return default

    def merged_with(self, overlay: "AnalysisOptions") -> "AnalysisOptions":
        """
        Layer `overlay` on top of these options (overlay wins per key).
        """
        severities = dict(self.severities)
        severities.update(overlay.severities)
        lint_rules = dict(self.lint_rules)
        lint_rules.update(overlay.lint_rules)
        return AnalysisOptions(
            severities=severities,
            lint_rules=lint_rules,
            exclude=self.exclude + tuple(g for g in overlay.exclude if g not in self.exclude),
            source=overlay.source or self.source,
        )


class DefaultAnalysisOptionsLoader:
    """
    Loads AnalysisOptions from analysis_options.yaml files.

    Responsibilities:
      - Find the options file for a project (project file, then the user
        defaults under the tool root)
      - Resolve `include:` chains (package:sift/... or relative paths)
      - Raise OptionsError with clear messages on malformed input
    """

    def __init__(self, tool_root: Path) -> None:
        self.tool_root = tool_root

    def load_for_project(self, project_root: Path) -> AnalysisOptions:
        candidate = project_root / OPTIONS_FILENAME
        if candidate.is_file():
            return self.load(candidate)

        user_defaults = self.tool_root / USER_OPTIONS_FILENAME
        if user_defaults.is_file():
            return self.load(user_defaults)

        logger.debug("no_analysis_options", project=str(project_root))
        return AnalysisOptions()

    def load(self, path: str | Path) -> AnalysisOptions:
        path = Path(path).resolve()
        return self._load(path, chain=())

    def _load(self, path: Path, chain: tuple[Path, ...]) -> AnalysisOptions:
        if path in chain:
            raise OptionsError(
                code="include_cycle",
                message="Include cycle: " + " -> ".join(str(p) for p in (*chain, path)),
                file=str(chain[-1]),
            )

        data = self._read_options_file(path)

        base = AnalysisOptions()
        include = data.get("include")
        if include is not None:
            if not isinstance(include, str):
                raise OptionsError(code="invalid_include", message="'include' must be a string.", file=str(path))
            base = self._load(self._resolve_include(include, path), chain + (path,))

        own = self._parse(data, path)
        logger.debug("analysis_options_loaded", file=str(path), lints=list(own.enabled_lints()))
        return base.merged_with(own)

    def _read_options_file(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise OptionsError(code="options_not_found", message=f"Options file does not exist: {path}")

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise OptionsError(
                code="options_read_error",
                message=f"Failed to read options file: {path}",
                details={"error": str(e)},
            ) from e

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise OptionsError(code="invalid_yaml", message=f"Invalid YAML: {e}", file=str(path)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise OptionsError(code="invalid_options", message="Options root must be a mapping.", file=str(path))
        return data

    def _resolve_include(self, include: str, including_file: Path) -> Path:
        if include.startswith(PACKAGE_INCLUDE_PREFIX):
            return (self.tool_root / include[len(PACKAGE_INCLUDE_PREFIX) :]).resolve()

        if include.startswith("package:"):
            raise OptionsError(
                code="unresolved_include",
                message=f"Unable to resolve include '{include}'.",
                file=str(including_file),
            )

        return (including_file.parent / include).resolve()

    def _parse(self, data: Mapping[str, Any], path: Path) -> AnalysisOptions:
        analyzer = self._section(data, "analyzer", path)
        linter = self._section(data, "linter", path)

        return AnalysisOptions(
            severities=self._parse_severities(analyzer.get("errors"), path),
            lint_rules=self._parse_lint_rules(linter.get("rules"), path),
            exclude=self._parse_exclude(analyzer.get("exclude"), path),
            source=path,
        )

    def _section(self, data: Mapping[str, Any], key: str, path: Path) -> Mapping[str, Any]:
        value = data.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise OptionsError(code="invalid_section", message=f"'{key}' must be a mapping.", file=str(path))
        return value

    def _parse_severities(self, raw: Any, path: Path) -> dict[str, Severity | None]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise OptionsError(code="invalid_errors", message="'analyzer.errors' must be a mapping.", file=str(path))

        out: dict[str, Severity | None] = {}
        for code, value in raw.items():
            value_s = str(value).strip().lower()
            if value_s == IGNORE:
                out[str(code)] = None
                continue
            try:
                out[str(code)] = Severity.from_str(value_s)
            except ValueError as e:
                raise OptionsError(
                    code="invalid_severity",
                    message=f"Invalid severity '{value}' for '{code}'.",
                    file=str(path),
                ) from e
        return out

    def _parse_lint_rules(self, raw: Any, path: Path) -> dict[str, bool]:
        if raw is None:
            return {}
        if isinstance(raw, list):
            return {str(name): True for name in raw}
        if isinstance(raw, dict):
            return {str(name): bool(enabled) for name, enabled in raw.items()}
        raise OptionsError(
            code="invalid_rules",
            message="'linter.rules' must be a list or a mapping.",
            file=str(path),
        )

    def _parse_exclude(self, raw: Any, path: Path) -> tuple[str, ...]:
        if raw is None:
            return ()
        if not isinstance(raw, list) or not all(isinstance(g, str) for g in raw):
            raise OptionsError(
                code="invalid_exclude",
                message="'analyzer.exclude' must be a list of glob strings.",
                file=str(path),
            )
        return tuple(raw)
