"""
Domain models — Pydantic types for the Fluid wrapper.

All models are re-exported here for convenient access:

    from fluidwrap.core.models import SourceRecord, CustomCommandRule, BuildFile
"""

from fluidwrap.core.models.build_file import BuildFile, TargetDecl, WrapCall
from fluidwrap.core.models.deferred import DeferredAction, Message
from fluidwrap.core.models.rule import CustomCommandRule, GeneratedPair
from fluidwrap.core.models.source import SourceRecord, is_on
from fluidwrap.core.models.target import Target

__all__ = [
    # build_file.py
    "BuildFile",
    # rule.py
    "CustomCommandRule",
    # deferred.py
    "DeferredAction",
    "GeneratedPair",
    "Message",
    # source.py
    "SourceRecord",
    # target.py
    "Target",
    "TargetDecl",
    "WrapCall",
    "is_on",
]
