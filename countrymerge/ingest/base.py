"""
Base class for source loaders.

A loader reads one input file, parses it and converts it to the canonical
in-memory shape the merge stage expects. Optional sources degrade to an
empty result on any read or parse failure; required sources raise
SourceError.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """A required source could not be loaded."""


class FetchError(SourceError):
    """The remote dataset could not be fetched."""


def repair_fragment(text: str) -> str:
    """
    Repair a truncated JSON object fragment.

    Appends a closing brace when the trimmed text does not end with one.

    Examples:
        >>> repair_fragment('{"code": "en"')
        '{"code": "en"}'
    """
    text = text.strip()
    if text.endswith('}'):
        return text
    return text + '}'


def parse_fragment(text: str) -> Dict:
    """
    Repair and parse a fragment.

    Raises:
        ValueError: If the repaired text is not a JSON object
    """
    data = json.loads(repair_fragment(text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def read_json_file(path: Path) -> Any:
    """Read and parse a JSON file."""
    with open(path, encoding='utf-8') as f:
        return json.load(f)


class BaseLoader(ABC):
    """Base class for source-specific loaders."""

    # Required sources raise SourceError instead of degrading to empty
    required = False

    def __init__(self, source_id: str, path: Optional[Path] = None):
        self.source_id = source_id
        self.path = Path(path) if path is not None else None

    def exists(self) -> bool:
        return self.path is not None and self.path.exists()

    def read(self) -> Any:
        """Read the raw source data."""
        return read_json_file(self.path)

    @abstractmethod
    def parse(self, data: Any) -> Any:
        """
        Convert raw data to the canonical shape.

        Returns None if the top-level shape is unusable.
        """
        pass

    @abstractmethod
    def empty(self) -> Any:
        """Canonical empty result, used when the source is absent."""
        pass

    def fail(self, message: str) -> Any:
        """Handle a load failure: raise for required sources, else degrade."""
        if self.required:
            raise SourceError(f"{self.source_id}: {message}")
        logger.error(f"Error loading {self.source_id}: {message}")
        return self.empty()

    def load(self) -> Any:
        """Load, parse and convert the source."""
        if not self.exists():
            if self.required:
                raise SourceError(f"{self.source_id}: file not found: {self.path}")
            logger.info(f"{self.source_id} file not found, skipping: {self.path}")
            return self.empty()

        try:
            data = self.read()
        except (OSError, ValueError) as e:
            return self.fail(f"{self.path.name}: {e}")

        result = self.parse(data)
        if result is None:
            return self.fail(f"{self.path.name}: unexpected top-level {type(data).__name__}")

        logger.info(f"Loaded {self.source_id} with {len(result)} entries")
        return result


class FragmentLoader(BaseLoader):
    """Loader for near-JSON patch fragments that may be truncated."""

    def read(self) -> Dict:
        return parse_fragment(self.path.read_text(encoding='utf-8'))
