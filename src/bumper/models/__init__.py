"""Data models for bumper."""

from .configuration import (
    CheckConfiguration,
    CommitConfiguration,
    Configuration,
    GitHubConfiguration,
    GitLabConfiguration,
    ProvidersConfiguration,
    RunOptions,
)
from .package import Package
from .results import (
    ActionResult,
    ActionStatus,
    BumpActionResult,
    CheckActionResult,
    CommitActionResult,
    MakeActionResult,
    PushActionResult,
)

__all__ = [
    'ActionResult',
    'ActionStatus',
    'BumpActionResult',
    'CheckActionResult',
    'CheckConfiguration',
    'CommitActionResult',
    'CommitConfiguration',
    'Configuration',
    'GitHubConfiguration',
    'GitLabConfiguration',
    'MakeActionResult',
    'Package',
    'ProvidersConfiguration',
    'PushActionResult',
    'RunOptions',
]
