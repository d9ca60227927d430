"""Desktop simulator: pygame window and input layer."""

from .input import InputController, initial_word, is_valid_word
from .window import SimulatorWindow

__all__ = ["InputController", "initial_word", "is_valid_word", "SimulatorWindow"]
