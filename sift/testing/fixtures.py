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

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from sift.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PREFIX = "sift_fixture_"


@dataclass(frozen=True, slots=True)
class Fixture:
    """
    An owned temporary directory standing in for a real project.

    `root` is always absolute and canonical, so paths built from it mean
    the same thing whatever the current working directory is.
    """

    root: Path

    def path(self, relative: str | Path = "") -> Path:
        return self.root / relative if relative else self.root

    def write_file(self, relative: str | Path, contents: str) -> Path:
        target = self.root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(contents, encoding="utf-8")
        return target

    def read_file(self, relative: str | Path) -> str:
        return (self.root / relative).read_text(encoding="utf-8")

    def replace_first(self, relative: str | Path, old: str, new: str) -> Path:
        """
        Replace the first occurrence of `old` in a fixture file.

        Raises ValueError when `old` is not present, so a stale mutation
        fails loudly instead of silently leaving the file unchanged.
        """
        source = self.read_file(relative)
        if old not in source:
            raise ValueError(f"{relative}: text to replace not found: {old!r}")
        return self.write_file(relative, source.replace(old, new, 1))


def create_fixture(name_prefix: str = DEFAULT_PREFIX) -> Fixture:
    root = Path(tempfile.mkdtemp(prefix=name_prefix)).resolve()
    logger.debug("fixture_created", root=str(root))
    return Fixture(root=root)


def destroy_fixture(fixture: Fixture) -> None:
    """
    Recursively delete a fixture. Deletion errors are logged, never raised.
    """
    try:
        shutil.rmtree(fixture.root)
    except OSError as e:
        logger.warning("fixture_cleanup_failed", root=str(fixture.root), error=str(e))


@contextmanager
def temporary_fixture(name_prefix: str = DEFAULT_PREFIX) -> Iterator[Fixture]:
    fixture = create_fixture(name_prefix)
    try:
        yield fixture
    finally:
        destroy_fixture(fixture)
