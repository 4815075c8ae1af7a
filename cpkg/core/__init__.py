# SPDX-License-Identifier: MIT
"""Core data model and errors for cpkg."""
