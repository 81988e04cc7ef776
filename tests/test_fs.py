"""Test atomic filesystem operations.

Tests for numorph.utils.fs:
    - Atomic writes leave no temp files behind
    - Image save/load roundtrip (uint8 RGBA, float input)
    - YAML roundtrip preserves structure and key order
    - ensure_dir creates parents

Run:
    pytest tests/test_fs.py -v
"""

from pathlib import Path

import numpy as np
import pytest
import yaml

from numorph.utils import fs


# ============================================================================
# DIRECTORIES / BYTES
# ============================================================================

def test_ensure_dir_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    result = fs.ensure_dir(target)
    assert result == target
    assert target.is_dir()
    # Idempotent
    fs.ensure_dir(target)


def test_atomic_write_bytes(tmp_path):
    path = tmp_path / "out" / "data.bin"
    fs.atomic_write_bytes(path, b"numorph")
    assert path.read_bytes() == b"numorph"
    assert sorted(p.name for p in path.parent.iterdir()) == ["data.bin"]


def test_atomic_write_text_overwrites(tmp_path):
    path = tmp_path / "note.txt"
    fs.atomic_write_text(path, "first")
    fs.atomic_write_text(path, "second")
    assert path.read_text() == "second"


# ============================================================================
# IMAGES
# ============================================================================

def test_atomic_save_image_roundtrip_rgba(tmp_path):
    img = np.zeros((8, 12, 4), dtype=np.uint8)
    img[..., 0] = 200
    img[..., 3] = 128
    path = tmp_path / "img.png"
    fs.atomic_save_image(img, path)

    loaded = fs.load_image_rgba(path)
    assert loaded.shape == (8, 12, 4)
    np.testing.assert_array_equal(loaded, img)
    assert not list(tmp_path.glob("*.tmp*"))


def test_atomic_save_image_float_input(tmp_path):
    img = np.full((4, 4, 3), 0.5, dtype=np.float32)
    path = tmp_path / "gray.png"
    fs.atomic_save_image(img, path)
    loaded = fs.load_image_rgba(path)
    assert loaded[0, 0, 0] == 128
    assert loaded[0, 0, 3] == 255


def test_atomic_save_image_failure_raises_runtime_error(tmp_path):
    img = np.zeros((4, 4, 4), dtype=np.uint8)
    with pytest.raises(RuntimeError):
        fs.atomic_save_image(img, tmp_path / "img.unknownext")


def test_load_image_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.load_image_rgba(tmp_path / "nope.png")


# ============================================================================
# YAML
# ============================================================================

def test_yaml_roundtrip_preserves_order(tmp_path):
    data = {'schema': 'numorph_style.v1', 'shape_type': 'flat', 'blur': {'max_radius': 25.0}}
    path = tmp_path / "style.yaml"
    fs.atomic_yaml_dump(data, path)
    loaded = fs.load_yaml(path)
    assert loaded == data
    assert list(loaded.keys()) == ['schema', 'shape_type', 'blur']


def test_load_yaml_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert fs.load_yaml(path) == {}


def test_load_yaml_malformed(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        fs.load_yaml(path)


def test_safe_remove(tmp_path):
    path = tmp_path / "x.txt"
    path.write_text("x")
    assert fs.safe_remove(path) is True
    assert fs.safe_remove(path) is False
    assert not Path(path).exists()
