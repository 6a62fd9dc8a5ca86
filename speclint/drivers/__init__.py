"""Drivers implementing the kernel ports."""
