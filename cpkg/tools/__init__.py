# SPDX-License-Identifier: MIT
"""Toolchain abstractions."""
