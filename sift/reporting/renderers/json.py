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

import json
from collections.abc import Sequence

from sift.analysis.types import AnalysisResult


class JsonReportRenderer:
    """
    Machine-readable output: one JSON document per run, stable key order.
    """

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def render(self, results: Sequence[AnalysisResult]) -> str:
        payload = {
            "projects": [r.to_dict() for r in results],
            "total": sum(len(r.diagnostics) for r in results),
        }
        return json.dumps(payload, indent=self.indent, sort_keys=True, ensure_ascii=False) + "\n"
