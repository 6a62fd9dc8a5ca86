"""Kernel: spec models, linting engine, ports and configuration models."""
