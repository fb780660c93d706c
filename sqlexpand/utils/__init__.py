"""Utility functions and classes for sqlexpand."""

from sqlexpand.utils import logging

__all__ = ("logging",)
