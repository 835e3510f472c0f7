"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8core.state import EmulatorState, check_memory_range
from chip8core.decode import DecodedInstruction
from chip8core.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw N-row sprite from memory[I] at (VX, VY).

    Only the origin wraps; pixels past the right or bottom edge are clipped.
    VF is set when any lit pixel is turned off.
    """
    if instruction.n:
        check_memory_range(int(state.I), instruction.n, state.instruction_address, instruction.raw)

    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % SCREEN_WIDTH
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % SCREEN_HEIGHT

    in_sprite = (xx >= sprite_x) & (xx < sprite_x + 8) & (yy >= sprite_y) & (yy < sprite_y + instruction.n)

    row_offset = jnp.where(in_sprite, yy - sprite_y, 0)
    col_offset = jnp.where(in_sprite, xx - sprite_x, 0)
    sprite_bytes = state.memory[jnp.astype(state.I, jnp.int32) + row_offset]
    sprite = (((sprite_bytes >> (7 - col_offset)) & 1) == 1) & in_sprite

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
