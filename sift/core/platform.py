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

import sys
from dataclasses import dataclass

WINDOWS_SEPARATOR = "-"
DEFAULT_SEPARATOR = "•"


@dataclass(frozen=True, slots=True)
class HostPlatform:
    """
    Minimal view of the host operating system.

    Kept as a value object so tests can pretend to run on another platform
    without patching sys.platform.
    """

    name: str

    @classmethod
    def current(cls) -> "HostPlatform":
        return cls(name=sys.platform)

    @property
    def is_windows(self) -> bool:
        return self.name.startswith("win") or self.name == "cygwin"


def analyzer_separator(platform: HostPlatform | None = None) -> str:
    """
    Glyph placed between the fields of a rendered diagnostic line.

    Windows consoles do not reliably render the bullet, so they get a dash.
    """
    platform = platform if platform is not None else HostPlatform.current()
    return WINDOWS_SEPARATOR if platform.is_windows else DEFAULT_SEPARATOR
