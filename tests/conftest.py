import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def sample_bytes():
    """Eight bytes with distinct nibbles: 01 02 03 04 ff fe fd fc."""
    return bytearray([1, 2, 3, 4, 255, 254, 253, 252])


@pytest.fixture()
def geohash_words():
    """Geohash ``9q8yy9mf`` (San Francisco) as 5-bit word values."""
    alphabet = "0123456789bcdefghjkmnpqrstuvwxyz"
    return [alphabet.index(c) for c in "9q8yy9mf"]


@pytest.fixture()
def right9():
    """Right-aligned 9-bit array ``[1, 1]`` over a 3-byte buffer."""
    uintnarray = importlib.import_module("uintnarray")
    return uintnarray.UintNArray(-9, [1, 1])
