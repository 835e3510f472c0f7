"""Text rendering of the CHIP-8 framebuffer."""

import jax.numpy as jnp
import numpy as np


def display_to_text(display: jnp.ndarray, on: str = "#", off: str = ".") -> str:
    """Render the display as one text line per screen row.

    Args:
        display: Boolean array of shape (64, 32), indexed [x, y]
        on: Character for lit pixels
        off: Character for unlit pixels

    Returns:
        32 lines of 64 characters joined with newlines
    """
    if len(on) != 1 or len(off) != 1:
        raise ValueError(f"on/off must be single characters, got {on!r} and {off!r}")
    rows = np.array(display, dtype=np.bool_).T
    return "\n".join("".join(on if pixel else off for pixel in row) for row in rows)
