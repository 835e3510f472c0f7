"""Host-facing keypad input.

The skip instructions (EX9E/EXA1) poll ``state.keypad`` directly. FX0A puts
the machine into ``RunState.AWAITING_KEY``; the next key that goes from
released to pressed through one of the functions below completes it.
"""

from typing import Iterable, Union

import jax.numpy as jnp

from chip8core.constants import NUM_KEYS
from chip8core.state import EmulatorState, RunState


def _validate_key(key: int) -> int:
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key code must be in 0..{NUM_KEYS - 1}, got {key}")
    return key


def set_keypad(state: EmulatorState, pressed: Union[jnp.ndarray, Iterable[bool]]) -> EmulatorState:
    """Replace the whole pressed-key array.

    Args:
        state: Current emulator state
        pressed: 16 booleans, index = key code

    Returns:
        New state; if a key wait was pending and a key was newly pressed, the
        lowest such key code is stored in the waiting register and the machine
        resumes.
    """
    if not isinstance(pressed, jnp.ndarray):
        pressed = list(pressed)
    pressed = jnp.asarray(pressed, dtype=jnp.bool_)
    if pressed.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got shape {pressed.shape}")

    newly_pressed = pressed & ~state.keypad
    state = state.replace(keypad=pressed)

    if state.run_state is RunState.AWAITING_KEY and bool(jnp.any(newly_pressed)):
        key = int(jnp.argmax(newly_pressed))
        state = state.replace(
            V=state.V.at[state.key_register].set(key),
            awaiting_key=jnp.zeros((), dtype=jnp.bool_),
        )
    return state


def press_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark a key as held down."""
    return set_keypad(state, state.keypad.at[_validate_key(key)].set(True))


def release_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark a key as released."""
    return set_keypad(state, state.keypad.at[_validate_key(key)].set(False))


def pressed_keys(state: EmulatorState) -> list[int]:
    """Key codes currently held down, in ascending order."""
    return [key for key in range(NUM_KEYS) if bool(state.keypad[key])]
