# SPDX-License-Identifier: MIT
"""Platform detection and project file loading."""
