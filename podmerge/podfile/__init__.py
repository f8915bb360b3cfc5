"""
Podmerge Podfile System - Shared Podfile assembly from plugin fragments.

This module handles:
- Hook block extraction into uniquely named functions
- Managed block markers keyed by fragment path
- Platform section selection
- Apply/remove merge of fragments into the project Podfile
- Pod tool execution and xcconfig merging
"""


class PodfileError(Exception):
    """Base exception for Podfile-related errors."""

    pass


__all__ = ["PodfileError"]
