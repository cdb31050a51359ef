from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.pages_builder import PagesBuilder


@pytest.fixture
def pages_builder(tmp_path: Path) -> PagesBuilder:
    """Provide a reusable multi-page project rooted at the pytest tmp_path."""
    return PagesBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_pagemap_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog keeps seeing pagemap records."""
    yield
    logger = logging.getLogger("pagemap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
