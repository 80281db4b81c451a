"""Patch parsing, hunk reconciliation and rewriting."""

from .matcher import matches
from .models import Classification, FilePatch, Hunk, PatchSet
from .parser import load_patch, parse_patch
from .reconcile import classify
from .rewrite import rewrite
from .trace import NULL_TRACER, LogTracer, NullTracer, RecordingTracer, Tracer

__all__ = [
    "Hunk",
    "FilePatch",
    "PatchSet",
    "Classification",
    "parse_patch",
    "load_patch",
    "matches",
    "classify",
    "rewrite",
    "Tracer",
    "NullTracer",
    "LogTracer",
    "RecordingTracer",
    "NULL_TRACER",
]
