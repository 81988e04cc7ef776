"""File helpers for style files and rendered previews.

Provides:
    - ensure_dir: mkdir -p returning a Path
    - atomic_write_bytes / atomic_write_text: write to a sibling tmp file,
      fsync, then rename over the target
    - atomic_save_image / load_image_rgba: 8-bit RGBA PNGs through Pillow
    - atomic_yaml_dump / load_yaml: key order preserved, empty file → {}
    - safe_remove

Invariants:
    - A reader never observes a half-written target: failures leave the
      previous file (or nothing) in place and raise RuntimeError
    - Paths may be str or Path

Usage:
    from numorph.utils import fs
    fs.atomic_save_image(to_rgba_u8(bitmap), out_dir / "flat_normal.png")
    raw = fs.load_yaml("configs/styles/default.v1.yaml")
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml
from PIL import Image

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """Create ``p`` (and parents) if missing; returns it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _tmp_sibling(path: Path) -> Path:
    # Real extension kept last so Pillow can still infer the format
    return path.with_name(f".{path.stem}.tmp{path.suffix}")


def _commit(tmp_path: Path, path: Path, write) -> None:
    ensure_dir(path.parent)
    try:
        write(tmp_path)
        os.replace(tmp_path, path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Atomic write of {path} failed: {e}") from e


def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """Replace ``path`` with ``data`` in one rename.

    Raises
    ------
    RuntimeError
        If writing or renaming fails (cause chained)
    """
    path = Path(path)

    def write(tmp: Path) -> None:
        with open(tmp, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    _commit(_tmp_sibling(path), path, write)


def atomic_write_text(path: PathLike, text: str, encoding: str = 'utf-8') -> None:
    atomic_write_bytes(path, text.encode(encoding))


def atomic_save_image(
    img: np.ndarray,
    path: PathLike,
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Save an image array; format follows the extension.

    Parameters
    ----------
    img : np.ndarray
        (H, W), (H, W, 3) or (H, W, 4); uint8, or straight-alpha floats in
        [0, 1] (premultiplied bitmaps go through ``graphics.to_rgba_u8`` first)
    path : str or Path
        Target file
    pil_kwargs : dict, optional
        Forwarded to ``PIL.Image.save``

    Raises
    ------
    RuntimeError
        If Pillow cannot encode the image or the rename fails
    """
    path = Path(path)
    if img.dtype != np.uint8:
        img = (np.clip(img, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[..., 0]
    pil_img = Image.fromarray(img)
    _commit(_tmp_sibling(path), path, lambda tmp: pil_img.save(tmp, **(pil_kwargs or {})))


def load_image_rgba(path: PathLike) -> np.ndarray:
    """(H, W, 4) uint8 straight RGBA; raises FileNotFoundError if missing."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")
    with Image.open(path) as im:
        return np.array(im.convert('RGBA'), dtype=np.uint8)


def atomic_yaml_dump(obj: Any, path: PathLike) -> None:
    """Dump ``obj`` as block-style YAML, keeping key order."""
    text = yaml.safe_dump(obj, default_flow_style=False, sort_keys=False, allow_unicode=True)
    atomic_write_text(path, text)


def load_yaml(path: PathLike) -> Dict[str, Any]:
    """Parse a YAML mapping.

    Raises
    ------
    FileNotFoundError
        If the file is missing
    yaml.YAMLError
        If parsing fails (message names the file)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e


def safe_remove(path: PathLike) -> bool:
    """Unlink ``path`` if present; True if something was removed."""
    path = Path(path)
    if path.exists() or path.is_symlink():
        path.unlink()
        return True
    return False
