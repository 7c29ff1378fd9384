"""Pointer input behaviors that turn keymap-filtered events into mouse reports."""

__version__ = "0.1.0"
__all__ = ["core", "scaler", "tog_layer", "move_to_keypress", "listener"]