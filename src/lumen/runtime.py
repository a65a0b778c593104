"""Taichi runtime bootstrap.

Taichi must be initialized once per process before any field is allocated,
so before constructing a HittableList or a Camera. The random seed given
here seeds the generator used by every sampling function.
"""

import logging
from typing import Literal

import taichi as ti

logger = logging.getLogger(__name__)

Arch = Literal["auto", "cpu", "gpu"]

_CPU_ARCHS = (ti.x64, ti.arm64)


def current_backend() -> str:
    """Return "cpu" or "gpu" for the initialized Taichi runtime."""
    return "cpu" if ti.lang.impl.current_cfg().arch in _CPU_ARCHS else "gpu"


def init_taichi(arch: Arch = "auto", seed: int = 0, debug: bool = False) -> str:
    """Initialize the Taichi runtime.

    Args:
        arch: "gpu", "cpu", or "auto" to try the GPU and fall back to CPU.
        seed: Seed for Taichi's random number generator.
        debug: Enable Taichi's debug mode (bounds checks, slower).

    Returns:
        The backend that was initialized ("gpu" or "cpu").

    Raises:
        ValueError: If arch is not one of the accepted values.
        RuntimeError: If arch is "gpu" and no GPU backend is available.
    """
    if arch not in ("auto", "cpu", "gpu"):
        raise ValueError(f"Unknown arch {arch!r}; expected 'auto', 'cpu' or 'gpu'")

    # ti.gpu falls back to the CPU on its own when no GPU backend works
    ti.init(arch=ti.cpu if arch == "cpu" else ti.gpu, random_seed=seed, debug=debug)
    backend = current_backend()

    if arch == "gpu" and backend != "gpu":
        raise RuntimeError("GPU backend requested but not available")
    if arch == "auto" and backend == "cpu":
        logger.warning("GPU backend unavailable, using CPU")

    logger.info("Taichi initialized: backend=%s seed=%d", backend, seed)
    return backend
