# SPDX-License-Identifier: Apache-2.0
"""Batch translator for nested JSON localization files."""

__version__ = "0.1.0"
