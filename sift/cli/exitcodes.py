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

# CI-friendly semantics
EXIT_OK = 0
EXIT_ISSUES_FOUND = 1
EXIT_TOOL_ERROR = 2
EXIT_USAGE_ERROR = 64


def is_fatal(
    by_severity: Mapping[str, int],
    *,
    fatal_warnings: bool = True,
    fatal_infos: bool = True,
) -> bool:
    """
    Decide whether a diagnostics summary should fail the run.
    Policy:
      - any error => fatal
      - any warning => fatal unless fatal_warnings is off
      - any info => fatal unless fatal_infos is off
    """
    if by_severity.get("error", 0) > 0:
        return True
    if fatal_warnings and by_severity.get("warning", 0) > 0:
        return True
    if fatal_infos and by_severity.get("info", 0) > 0:
        return True
    return False
