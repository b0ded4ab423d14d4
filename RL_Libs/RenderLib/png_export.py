"""
PNG export for Rover Lens.

Encodes a RasterBuffer as PNG and saves it to a user-chosen location with
dynamic filenames using delimited tags.

Supported tags (case-insensitive):
- {DATE} or {DATE:format} - Current date (default: YYYY-MM-DD)
- {TIME} or {TIME:format} - Current time (default: HH-MM-SS)
- {EFFECT} - Name of the applied effect

Classes:
    ExportConfig: Configuration for an export
    ExportHandler: Handles tag substitution, path validation and writing

Functions:
    encode_png: Encode a RasterBuffer to PNG bytes
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os
import re

from RL_Libs.constants import DEFAULT_EXPORT_TEMPLATE, EXPORT_FORMAT, TEMP_FILE_SUFFIX
from RL_Libs.errors import ExportFailed
from RL_Libs.RasterLib.raster_models import RasterBuffer
from RL_Libs.RenderLib.image_source import image_from_raster

logger = logging.getLogger(__name__)


def encode_png(raster: RasterBuffer) -> bytes:
    """
    Encode a RasterBuffer as an RGBA PNG.

    Raises:
        ExportFailed: If Pillow cannot encode the raster (e.g. zero-sized)
    """
    buffer = BytesIO()
    try:
        image_from_raster(raster).save(buffer, format=EXPORT_FORMAT)
    except (OSError, ValueError, SystemError) as exc:
        raise ExportFailed(f"Could not encode {raster.width}x{raster.height} raster as PNG: {exc}") from exc
    return buffer.getvalue()


@dataclass
class ExportConfig:
    """Configuration for exporting an image.

    Attributes:
        output_path: Output path or filename with optional tags
        create_directories: Create output directories if they don't exist (default: True)
        overwrite: Overwrite existing files (default: False)
        base_directory: Optional base directory to restrict outputs (None = no restriction)
                       If set, validated paths must be within this directory tree
    """
    output_path: str = DEFAULT_EXPORT_TEMPLATE
    create_directories: bool = True
    overwrite: bool = False
    base_directory: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


class ExportHandler:
    """Handles dynamic filename generation and file I/O for exports."""

    # Regex patterns for tag detection
    DATE_PATTERN = r'\{DATE(?::([^\}]*))?\}'
    TIME_PATTERN = r'\{TIME(?::([^\}]*))?\}'
    EFFECT_PATTERN = r'\{EFFECT\}'

    # Default format strings
    DEFAULT_DATE_FORMAT = "%Y-%m-%d"
    DEFAULT_TIME_FORMAT = "%H-%M-%S"

    def __init__(self, config: ExportConfig):
        """Initialize handler with configuration."""
        self.config = config
        self._base_dir = None
        if config.base_directory:
            base_path = Path(config.base_directory)
            if not base_path.is_absolute():
                raise ValueError(f"base_directory must be an absolute path: {config.base_directory}")
            self._base_dir = base_path.resolve()

    def resolve_filename(self, effect_name: str = "none") -> Path:
        """
        Resolve the output filename with tag substitution and path validation.

        Args:
            effect_name: Value substituted for {EFFECT}

        Returns:
            Path to the resolved output file

        Raises:
            ValueError: If path contains traversal sequences or is outside base_directory
        """
        filename = self.config.output_path
        filename = self._replace_pattern(filename, self.DATE_PATTERN, self.DEFAULT_DATE_FORMAT, "DATE")
        filename = self._replace_pattern(filename, self.TIME_PATTERN, self.DEFAULT_TIME_FORMAT, "TIME")
        filename = re.sub(self.EFFECT_PATTERN, str(effect_name), filename, flags=re.IGNORECASE)
        return self._validate_output_path(filename)

    def _validate_output_path(self, path_str: str) -> Path:
        """
        Validate output path to prevent directory traversal.

        Raises:
            ValueError: If path contains '..' or is outside base_directory
        """
        path = Path(path_str)

        for part in path.parts:
            if part == "..":
                raise ValueError(
                    f"Path traversal detected: output_path contains '..': {path_str}"
                )

        if path.is_absolute():
            resolved_path = path.resolve()
        elif self._base_dir:
            resolved_path = (self._base_dir / path).resolve()
        else:
            resolved_path = path.resolve()

        if self._base_dir:
            try:
                resolved_path.relative_to(self._base_dir)
            except ValueError:
                raise ValueError(
                    f"Security: output_path '{path_str}' resolves to '{resolved_path}' "
                    f"which is outside the allowed base directory '{self._base_dir}'"
                )

        return resolved_path

    def save_bytes(self, data: bytes, effect_name: str = "none") -> Path:
        """
        Write encoded image bytes to the resolved output file.

        The bytes go to a temporary sibling first and are moved into place,
        so a failed export never leaves a partial file behind.

        Returns:
            Path where the image was saved

        Raises:
            ExportFailed: If the path is invalid, exists without overwrite,
                          or cannot be written
        """
        try:
            output_file = self.resolve_filename(effect_name)
        except ValueError as exc:
            raise ExportFailed(str(exc)) from exc

        if output_file.exists() and not self.config.overwrite:
            raise ExportFailed(
                f"Output file already exists: {output_file}. "
                f"Set overwrite=True to replace.",
                output_file,
            )

        temp_file = output_file.with_name(output_file.name + TEMP_FILE_SUFFIX)
        try:
            if self.config.create_directories:
                output_file.parent.mkdir(parents=True, exist_ok=True)
            temp_file.write_bytes(data)
            os.replace(temp_file, output_file)
        except OSError as exc:
            if temp_file.exists():
                temp_file.unlink()
            raise ExportFailed(f"Failed to save image to {output_file}: {exc}", output_file) from exc

        logger.info(f"Exported {len(data)} bytes to {output_file}")
        return output_file

    def export(self, raster: RasterBuffer, effect_name: str = "none") -> Path:
        """Encode a raster as PNG and save it."""
        return self.save_bytes(encode_png(raster), effect_name)

    def _replace_pattern(self, text: str, pattern: str, default_format: str, tag: str) -> str:
        def replacer(match):
            fmt = match.group(1) or default_format
            try:
                return datetime.now().strftime(fmt)
            except (ValueError, TypeError) as e:
                raise ValueError(
                    f"Invalid format string '{fmt}' in {{{tag}}} tag: {str(e)}"
                )

        return re.sub(pattern, replacer, text, flags=re.IGNORECASE)
