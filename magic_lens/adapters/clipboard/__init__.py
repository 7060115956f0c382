"""Clipboard adapters - implementations of the Clipboard port."""

from .qt_clipboard import QtClipboard

__all__ = ['QtClipboard']
