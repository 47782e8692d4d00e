"""Encoding of rendered buffers to image files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import PIL.Image

DEFAULT_FORMAT = "png"


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def resolve_format(destination: Union[str, Path], image_format: Optional[str] = None) -> str:
    """Return the file extension to encode with, lowercase and without the dot."""

    if image_format:
        fmt = image_format.lower().lstrip(".")
    else:
        fmt = Path(destination).suffix.lower().lstrip(".")
    return fmt or DEFAULT_FORMAT


def write_image(
    destination: Union[str, Path],
    pixel_bytes: bytes,
    width: int,
    height: int,
    image_format: Optional[str] = None,
) -> Path:
    """Encode row-major RGB8 ``pixel_bytes`` and write them to ``destination``.

    The image is first saved to a temporary file next to the destination and
    then moved into place, so a failed encode never leaves a partial file.
    """

    expected = width * height * 3
    if len(pixel_bytes) != expected:
        raise ValueError(
            f"expected {expected} bytes for a {width}x{height} RGB image, got {len(pixel_bytes)}"
        )

    output_path = Path(destination).expanduser()
    pil_format = _pil_format_name(resolve_format(output_path, image_format))
    PIL.Image.init()
    if pil_format not in PIL.Image.SAVE:
        raise ValueError(f"Pillow cannot write '{pil_format}' images")
    image = PIL.Image.frombytes("RGB", (width, height), bytes(pixel_bytes))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            image.save(handle, format=pil_format)
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, output_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return output_path
