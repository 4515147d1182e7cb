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

from sift.analysis.options import AnalysisOptions, DefaultAnalysisOptionsLoader
from sift.analysis.registry import Check, CheckRegistry, Finding, default_registry
from sift.analysis.types import AnalysisResult, Diagnostic, Location, Severity, Summary

__all__ = [
    "Severity",
    "Location",
    "Diagnostic",
    "Summary",
    "AnalysisResult",
    "AnalysisOptions",
    "DefaultAnalysisOptionsLoader",
    "Check",
    "CheckRegistry",
    "Finding",
    "default_registry",
]
