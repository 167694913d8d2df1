"""
Kernel configuration.

Two settings are resolved once, when pydense is imported, from the
environment:

    PYDENSE_NDEBUG   Set to anything but '' or '0' to run kernels unchecked.
                     Invalid arguments are then undefined behaviour.
    PYDENSE_BACKEND  'reference' (default), 'scipy' or 'auto'. Selects the
                     implementation used for gemv/gemm after validation.

The configuration is an immutable value. configure() swaps it wholesale and
config_context() does so temporarily:

    with config_context(checks=False):
        scal(1, 2.0, x, 1)   # no argument validation

The environment is not consulted again after import. Kernels read the
resolved mode through checks_enabled(), one attribute lookup on the active
KernelConfig, and skip every check when it is off.
"""

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Literal


BackendChoice = Literal['reference', 'scipy', 'auto']

BACKEND_CHOICES: tuple[str, ...] = ('reference', 'scipy', 'auto')

ENV_NDEBUG = 'PYDENSE_NDEBUG'
ENV_BACKEND = 'PYDENSE_BACKEND'


@dataclass(frozen=True)
class KernelConfig:
    """
    Immutable kernel configuration.

    Attributes:
        checks: Run argument validation at the top of every kernel
        backend: Implementation choice for kernels with a vendor backend
    """
    checks: bool = True
    backend: BackendChoice = 'reference'

    def __post_init__(self):
        if self.backend not in BACKEND_CHOICES:
            raise ValueError(f"Unknown backend: {self.backend!r}")


def from_environment() -> KernelConfig:
    """Build a KernelConfig from PYDENSE_NDEBUG and PYDENSE_BACKEND."""
    ndebug = os.environ.get(ENV_NDEBUG, '')
    backend = os.environ.get(ENV_BACKEND, 'reference').strip().lower() or 'reference'
    return KernelConfig(
        checks=ndebug.strip() in ('', '0'),
        backend=backend,
    )


_config = from_environment()


def get_config() -> KernelConfig:
    """Return the active configuration."""
    return _config


def checks_enabled() -> bool:
    """True when kernels validate their arguments."""
    return _config.checks


def configure(
    *,
    checks: bool | None = None,
    backend: BackendChoice | None = None,
) -> KernelConfig:
    """
    Replace the active configuration.

    Args:
        checks: New validation mode, or None to keep the current one
        backend: New backend choice, or None to keep the current one

    Returns:
        The previous configuration, so callers can restore it

    Raises:
        ValueError: If backend is not a known choice
    """
    global _config
    previous = _config
    changes = {}
    if checks is not None:
        changes['checks'] = bool(checks)
    if backend is not None:
        changes['backend'] = backend
    _config = replace(previous, **changes)
    return previous


@contextmanager
def config_context(
    *,
    checks: bool | None = None,
    backend: BackendChoice | None = None,
) -> Iterator[KernelConfig]:
    """
    Temporarily override the configuration.

    Yields:
        The configuration in effect inside the block
    """
    global _config
    previous = configure(checks=checks, backend=backend)
    try:
        yield _config
    finally:
        _config = previous
