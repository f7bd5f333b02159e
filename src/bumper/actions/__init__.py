"""Actions run against each package, in order, by the pipeline."""

from bumper.actions.base import Action, CommandAction
from bumper.actions.bump import BumpAction
from bumper.actions.check import CheckAction
from bumper.actions.commit import CommitAction
from bumper.actions.make import MakeAction
from bumper.actions.push import PushAction

__all__ = [
    'Action',
    'BumpAction',
    'CheckAction',
    'CommandAction',
    'CommitAction',
    'MakeAction',
    'PushAction',
]
