"""
Loads, validates and saves the JSON track manifest.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from trackpage.exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestWriteError,
)
from trackpage.models.manifest import Manifest

log = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "tracks.json"


class ManifestStore:
    """Handles all operations related to the manifest file."""

    @staticmethod
    def default() -> Manifest:
        """Returns an empty manifest, used as the template seed."""
        return Manifest(title="", prefix="", songs=[])

    @staticmethod
    def dumps(manifest: Manifest) -> str:
        """
        Serializes a manifest in its canonical form.

        Keys keep the model's field order, indentation is two spaces, non-ASCII
        text is written as-is and there is no trailing newline, so formatting a
        formatted manifest is byte-identical.
        """
        return json.dumps(manifest.model_dump(mode="json"), indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Path) -> Manifest:
        """
        Reads and validates a manifest.

        Args:
            path: Location of the JSON manifest.

        Returns:
            A validated Manifest object.

        Raises:
            ManifestNotFoundError: If the file does not exist.
            ManifestParseError: If the file cannot be read, is not valid JSON or
                fails validation.
        """
        path = Path(path)
        if not path.is_file():
            raise ManifestNotFoundError(f"Manifest file not found at '{path}'.")

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ManifestParseError(f"Failed to read manifest '{path}': {e}") from e
        except FileNotFoundError as e:
            raise ManifestNotFoundError(f"Manifest file not found at '{path}'.") from e
        except OSError as e:
            raise ManifestParseError(f"Failed to read manifest '{path}': {e}") from e

        try:
            manifest = Manifest.model_validate(data)
        except ValidationError as e:
            raise ManifestParseError(
                f"Manifest '{path}' failed validation:\n{e}"
            ) from e

        log.debug(f"Loaded manifest '{path}' with {len(manifest.songs)} track(s).")
        return manifest

    @classmethod
    def save(cls, path: Path, manifest: Manifest) -> None:
        """
        Writes a manifest in canonical pretty form.

        Raises:
            ManifestWriteError: If the file cannot be written.
        """
        path = Path(path)
        content = cls.dumps(manifest)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise ManifestWriteError(f"Failed to write manifest '{path}': {e}") from e
        log.debug(f"Saved manifest '{path}' with {len(manifest.songs)} track(s).")
